from altseo.bulk.models import JobKind
from altseo.config.settings import Settings
from altseo.documents.base import BaseDocumentStore
from altseo.generation.alt_text_generator import AltTextGenerator
from altseo.generation.base import BaseGenerator
from altseo.generation.client_base import BaseCompletionClient
from altseo.generation.image_loader import ImageLoader
from altseo.generation.keyword_generator import KeywordGenerator
from altseo.generation.openai_client_adapter import OpenAIClientAdapter
from altseo.language.detector import LanguageDetector
from altseo.logging.logger import Log


class GeneratorFactory:
    """Creates the per-kind generation callbacks from settings."""

    @classmethod
    def create_client(cls, settings: Settings) -> BaseCompletionClient:
        if not settings.openai_api_key:
            Log.warning("openai_api_key is empty, provider calls will be rejected")
        return OpenAIClientAdapter(
            api_key=settings.openai_api_key,
            timeout_seconds=settings.openai_timeout_seconds,
            vision_timeout_seconds=settings.openai_vision_timeout_seconds,
            base_url=settings.openai_base_url,
        )

    @classmethod
    def create_detector(cls, settings: Settings) -> LanguageDetector:
        return LanguageDetector(
            min_text_length=settings.language_min_text_length,
            sample_length=settings.language_sample_length,
        )

    @classmethod
    def create_image_loader(cls, settings: Settings) -> ImageLoader:
        """ImageLoader owning its own HTTP client; the caller closes it."""
        return ImageLoader(
            max_bytes=settings.image_max_bytes,
            timeout_seconds=settings.image_download_timeout_seconds,
            base_url=settings.site_base_url,
        )

    @classmethod
    def create(
        cls,
        settings: Settings,
        documents: BaseDocumentStore,
        client: BaseCompletionClient | None = None,
        image_loader: ImageLoader | None = None,
    ) -> dict[str, BaseGenerator]:
        client = client or cls.create_client(settings)
        detector = cls.create_detector(settings)
        common = {
            "client": client,
            "documents": documents,
            "detector": detector,
            "model": settings.openai_model_name,
            "max_attempts": settings.openai_max_attempts,
            "initial_delay": settings.openai_retry_initial_delay_seconds,
        }
        image_loader = image_loader or cls.create_image_loader(settings)
        return {
            JobKind.KEYWORDS.value: KeywordGenerator(
                keyword_count=settings.keyword_count,
                **common,
            ),
            JobKind.ALT.value: AltTextGenerator(
                image_loader=image_loader,
                vision_model=settings.openai_vision_model_name,
                global_keywords=settings.global_keywords,
                seo_keywords_count=settings.seo_keywords_count,
                **common,
            ),
        }
