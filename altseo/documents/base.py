from abc import ABC, abstractmethod

from altseo.documents.models import Document, DocumentId


class BaseDocumentStore(ABC):
    """Contract for the collection of documents a bulk job sweeps over."""

    @abstractmethod
    def list_eligible_document_ids(self, kind: str) -> list[DocumentId]:
        """Return every eligible document id for the job kind.

        The ordering must be stable for identical store contents. The bulk
        controller calls this exactly once per job, when it snapshots the queue.
        """

    @abstractmethod
    def find_by_id(self, document_id: DocumentId) -> Document:
        """Load one document.

        Raises:
            DocumentNotFoundError: if no document with this id exists.
        """

    @abstractmethod
    def update_keywords(self, document_id: DocumentId, keywords: str) -> None:
        """Persist generated keywords for a document."""

    @abstractmethod
    def update_alt_texts(self, document_id: DocumentId, alt_texts: dict[str, str]) -> None:
        """Persist the image-key to alt-text map for a document."""

    @abstractmethod
    def update_content(self, document_id: DocumentId, content: str) -> None:
        """Persist rewritten document content."""

    @abstractmethod
    def update_featured_image_alt(self, document_id: DocumentId, alt_text: str) -> None:
        """Persist the alt text of the document's featured image."""
