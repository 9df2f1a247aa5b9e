import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from altseo.documents.base import BaseDocumentStore
from altseo.documents.models import DocumentId
from altseo.generation.client_base import BaseCompletionClient
from altseo.generation.models import GenerationResult
from altseo.generation.retry import (
    DEFAULT_INITIAL_DELAY_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    call_with_backoff,
    max_tokens_for_model,
)
from altseo.language.detector import LanguageDetector

CHAT_TEMPERATURE = 0.7


class BaseGenerator(ABC):
    """Per-document generation callback driven by the bulk controller."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        documents: BaseDocumentStore,
        detector: LanguageDetector,
        model: str,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        initial_delay: float = DEFAULT_INITIAL_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client
        self._documents = documents
        self._detector = detector
        self._model = model
        self._max_attempts = max_attempts
        self._initial_delay = initial_delay
        self._sleep = sleep

    @abstractmethod
    def generate(self, document_id: DocumentId) -> GenerationResult:
        """Generate and persist text for one document.

        Returns:
            GenerationResult; success is False when nothing could be generated.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            GenerationError: on non-retryable provider failures.
        """

    def __call__(self, document_id: DocumentId) -> GenerationResult:
        return self.generate(document_id)

    def _chat(self, user_prompt: str, system_prompt: str = "") -> str | None:
        """Chat completion with backoff; None when the provider never answered."""
        return call_with_backoff(
            lambda: self._client.create_chat_completion(
                model=self._model,
                temperature=CHAT_TEMPERATURE,
                max_tokens=max_tokens_for_model(self._model),
                user_prompt=user_prompt,
                system_prompt=system_prompt,
            ),
            max_attempts=self._max_attempts,
            initial_delay=self._initial_delay,
            sleep=self._sleep,
        )


def strip_quotes(text: str) -> str:
    return text.replace('"', "").strip()
