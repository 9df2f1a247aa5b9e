from dataclasses import dataclass

DocumentId = int | str


@dataclass(frozen=True)
class Document:
    """A publishable document whose text drives keyword and alt generation."""

    id: DocumentId
    title: str
    content: str
    status: str = "publish"
    doc_type: str = "post"
    thumbnail_url: str | None = None
    keywords: str | None = None
