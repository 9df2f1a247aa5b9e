from dataclasses import replace

import pytest

from altseo.documents.base import BaseDocumentStore
from altseo.documents.exceptions import DocumentNotFoundError
from altseo.documents.models import Document, DocumentId
from altseo.storage.memory_store import InMemoryKeyValueStore


class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryDocumentStore(BaseDocumentStore):
    """Document store backed by a dict, recording every write."""

    def __init__(self, documents: list[Document] | None = None) -> None:
        self.documents: dict[DocumentId, Document] = {d.id: d for d in documents or []}
        self.list_calls = 0
        self.alt_texts: dict[DocumentId, dict[str, str]] = {}
        self.featured_alts: dict[DocumentId, str] = {}

    def list_eligible_document_ids(self, kind: str) -> list[DocumentId]:
        self.list_calls += 1
        return sorted(
            doc_id for doc_id, doc in self.documents.items() if doc.status == "publish"
        )

    def find_by_id(self, document_id: DocumentId) -> Document:
        if document_id not in self.documents:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return self.documents[document_id]

    def update_keywords(self, document_id: DocumentId, keywords: str) -> None:
        self.documents[document_id] = replace(self.find_by_id(document_id), keywords=keywords)

    def update_alt_texts(self, document_id: DocumentId, alt_texts: dict[str, str]) -> None:
        self.find_by_id(document_id)
        self.alt_texts[document_id] = dict(alt_texts)

    def update_content(self, document_id: DocumentId, content: str) -> None:
        self.documents[document_id] = replace(self.find_by_id(document_id), content=content)

    def update_featured_image_alt(self, document_id: DocumentId, alt_text: str) -> None:
        self.find_by_id(document_id)
        self.featured_alts[document_id] = alt_text


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore(
        [
            Document(id=101, title="First", content="<p>First post body.</p>"),
            Document(id=102, title="Second", content="<p>Second post body.</p>"),
            Document(id=103, title="Third", content="<p>Third post body.</p>"),
        ]
    )
