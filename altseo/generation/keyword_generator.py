from typing import Any

from altseo.content.text import clean_document_text
from altseo.documents.models import DocumentId
from altseo.generation.base import BaseGenerator, strip_quotes
from altseo.generation.models import GenerationResult
from altseo.generation.prompt_loader import load_prompt_template
from altseo.logging.logger import Log

MAX_CONTENT_LENGTH = 2000
MIN_KEYWORD_COUNT = 1
MAX_KEYWORD_COUNT = 10


def clamp_keyword_count(count: int) -> int:
    """Out-of-range counts fall back to a single keyword."""
    if count < MIN_KEYWORD_COUNT or count > MAX_KEYWORD_COUNT:
        return MIN_KEYWORD_COUNT
    return count


def normalize_keywords(raw: str, keyword_count: int) -> str:
    """Strip quotes and keep exactly the first keyword_count entries."""
    parts = [part.strip() for part in strip_quotes(raw).split(",")]
    parts = [part for part in parts if part]
    return ", ".join(parts[:keyword_count])


class KeywordGenerator(BaseGenerator):
    """Generates SEO keywords for a document in the document's own language."""

    def __init__(self, *, keyword_count: int = 1, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._keyword_count = clamp_keyword_count(keyword_count)
        self._system_template = load_prompt_template("keywords_system")
        self._user_template = load_prompt_template("keywords_user")

    def generate(self, document_id: DocumentId) -> GenerationResult:
        document = self._documents.find_by_id(document_id)
        content = clean_document_text(document.content)
        if not content:
            return GenerationResult.failed(f"Document {document_id} has no text content")

        language = self._detector.detect(content)
        content = content[:MAX_CONTENT_LENGTH]

        raw = self._chat(
            user_prompt=self._user_template.format(
                keyword_count=self._keyword_count,
                language=language,
            ),
            system_prompt=self._system_template.format(content=content),
        )
        if not raw:
            return GenerationResult.failed(f"No keywords generated for document {document_id}")

        keywords = normalize_keywords(raw, self._keyword_count)
        if not keywords:
            return GenerationResult.failed(f"No keywords generated for document {document_id}")

        self._documents.update_keywords(document_id, keywords)
        Log.info(f"Generated {language} keywords for document {document_id}: {keywords}")
        return GenerationResult.ok(keywords)
