import random
from typing import Any

from altseo.content.images import apply_alt_texts, find_image_sources, image_key, is_usable_key
from altseo.content.text import clean_document_text, strip_tags
from altseo.documents.models import Document, DocumentId
from altseo.generation.base import CHAT_TEMPERATURE, BaseGenerator, strip_quotes
from altseo.generation.exceptions import GenerationError, ImageLoadError
from altseo.generation.image_loader import ImageLoader
from altseo.generation.models import GenerationResult
from altseo.generation.prompt_loader import load_prompt_template
from altseo.generation.retry import call_with_backoff, max_tokens_for_model
from altseo.language.profiles import DEFAULT_LANGUAGE
from altseo.logging.logger import Log

PAGE_KEYWORDS_CONTENT_LENGTH = 1000
MIN_ENHANCED_ALT_LENGTH = 10
MIN_PAGE_KEYWORDS_LENGTH = 3


def parse_global_keywords(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class AltTextGenerator(BaseGenerator):
    """Generates alt text for every image of a document plus its featured image.

    Each distinct image key gets one vision-model description, which is then
    rewritten to work in the page keywords and a random pick of site-wide
    SEO keywords.
    """

    def __init__(
        self,
        *,
        image_loader: ImageLoader,
        vision_model: str,
        global_keywords: str = "",
        seo_keywords_count: int = 3,
        rng: random.Random | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._image_loader = image_loader
        self._vision_model = vision_model
        self._global_keywords = parse_global_keywords(global_keywords)
        self._seo_keywords_count = max(0, seo_keywords_count)
        self._rng = rng or random.Random()
        self._image_template = load_prompt_template("image_alt")
        self._enhance_template = load_prompt_template("enhance_alt")
        self._page_keywords_template = load_prompt_template("page_keywords")

    def generate(self, document_id: DocumentId) -> GenerationResult:
        document = self._documents.find_by_id(document_id)
        if not document.content.strip() and not document.thumbnail_url:
            return GenerationResult.failed(f"Document {document_id} has no content")

        text = clean_document_text(document.content)
        language = self._detector.detect(text) if text else DEFAULT_LANGUAGE
        page_keywords = document.keywords or self._generate_page_keywords(document, language)
        seo_keywords = self._pick_seo_keywords()

        alt_texts: dict[str, str] = {}
        sources = find_image_sources(document.content)
        for src in sources:
            key = image_key(src)
            if not is_usable_key(key) or key in alt_texts:
                continue
            alt_text = self._describe_image(src, page_keywords, language)
            if alt_text:
                alt_texts[key] = self._enhance(alt_text, seo_keywords, page_keywords, language)
        self._documents.update_alt_texts(document_id, alt_texts)

        updated_content = apply_alt_texts(document.content, alt_texts)
        if updated_content != document.content:
            self._documents.update_content(document_id, updated_content)

        featured_alt = None
        if document.thumbnail_url:
            featured_alt = self._describe_image(document.thumbnail_url, page_keywords, language)
            if featured_alt:
                featured_alt = self._enhance(featured_alt, seo_keywords, page_keywords, language)
                self._documents.update_featured_image_alt(document_id, featured_alt)

        generated = len(alt_texts) + (1 if featured_alt else 0)
        attempted = len({image_key(src) for src in sources}) + (1 if document.thumbnail_url else 0)
        if attempted and not generated:
            return GenerationResult.failed(
                f"No alt text generated for the {attempted} image(s) of document {document_id}"
            )

        Log.info(f"Generated {generated} {language} alt text(s) for document {document_id}")
        return GenerationResult.ok(
            featured_alt or next(iter(alt_texts.values()), ""),
            message=f"{generated} alt text(s) generated",
        )

    def _describe_image(self, src: str, keywords: str, language: str) -> str | None:
        url = self._image_loader.resolve(src)
        if url is None:
            Log.debug(f"Skipping image with unusable src: {src}")
            return None
        try:
            data_url = self._image_loader.load_data_url(url)
        except ImageLoadError as exc:
            Log.warning(str(exc))
            return None

        prompt = self._image_template.format(language=language, keywords=keywords)
        raw = call_with_backoff(
            lambda: self._client.create_vision_completion(
                model=self._vision_model,
                max_tokens=max_tokens_for_model(self._vision_model),
                prompt=prompt,
                image_data_url=data_url,
            ),
            max_attempts=self._max_attempts,
            initial_delay=self._initial_delay,
            sleep=self._sleep,
        )
        if not raw:
            return None
        return strip_quotes(raw) or None

    def _enhance(self, current_alt: str, seo_keywords: str, page_keywords: str, language: str) -> str:
        """Single attempt; the plain description is kept when enhancing fails."""
        prompt = self._enhance_template.format(
            current_alt=current_alt,
            seo_keywords=seo_keywords,
            page_keywords=page_keywords,
            language=language,
        )
        try:
            raw = self._single_chat(prompt)
        except GenerationError as exc:
            Log.warning(f"Alt text enhancement failed, keeping description: {exc}")
            return current_alt

        enhanced = strip_quotes(raw)
        if len(enhanced) < MIN_ENHANCED_ALT_LENGTH:
            return current_alt
        return enhanced

    def _generate_page_keywords(self, document: Document, language: str) -> str:
        prompt = self._page_keywords_template.format(
            title=document.title,
            content=strip_tags(document.content)[:PAGE_KEYWORDS_CONTENT_LENGTH],
            language=language,
        )
        try:
            keywords = strip_quotes(self._single_chat(prompt))
        except GenerationError as exc:
            Log.warning(f"Page keyword generation failed for document {document.id}: {exc}")
            return ""
        if len(keywords) < MIN_PAGE_KEYWORDS_LENGTH:
            return ""
        return keywords

    def _pick_seo_keywords(self) -> str:
        if not self._global_keywords:
            return ""
        shuffled = list(self._global_keywords)
        self._rng.shuffle(shuffled)
        return ", ".join(shuffled[: self._seo_keywords_count])

    def _single_chat(self, prompt: str) -> str:
        return self._client.create_chat_completion(
            model=self._model,
            temperature=CHAT_TEMPERATURE,
            max_tokens=max_tokens_for_model(self._model),
            user_prompt=prompt,
        )
