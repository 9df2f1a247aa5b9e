from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from altseo.database.connection import get_connection
from altseo.documents.base import BaseDocumentStore
from altseo.documents.exceptions import DocumentNotFoundError
from altseo.documents.models import Document, DocumentId


class DocumentRepository(BaseDocumentStore):
    """Database operations for the documents table."""

    def __init__(self, document_types: list[str]) -> None:
        self._document_types = list(document_types)

    def list_eligible_document_ids(self, kind: str) -> list[DocumentId]:
        """Published documents of the configured types, oldest id first.

        Both job kinds sweep the same set; kind is accepted for symmetry.
        """
        _ = kind
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT id
                    FROM documents
                    WHERE status = 'publish'
                      AND doc_type = ANY(%s)
                    ORDER BY id ASC
                    """,
                    (self._document_types,),
                )
                rows = cur.fetchall()
        return [row[0] for row in rows]

    def find_by_id(self, document_id: DocumentId) -> Document:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, title, content, status, doc_type, thumbnail_url, keywords
                    FROM documents
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return Document(
            id=row["id"],
            title=row["title"],
            content=row["content"],
            status=row["status"],
            doc_type=row["doc_type"],
            thumbnail_url=row["thumbnail_url"],
            keywords=row["keywords"],
        )

    def update_keywords(self, document_id: DocumentId, keywords: str) -> None:
        self._update_column(document_id, "keywords", keywords)

    def update_alt_texts(self, document_id: DocumentId, alt_texts: dict[str, str]) -> None:
        self._update_column(document_id, "alt_texts", Jsonb(alt_texts))

    def update_content(self, document_id: DocumentId, content: str) -> None:
        self._update_column(document_id, "content", content)

    def update_featured_image_alt(self, document_id: DocumentId, alt_text: str) -> None:
        self._update_column(document_id, "featured_image_alt", alt_text)

    def _update_column(self, document_id: DocumentId, column: str, value: object) -> None:
        """Update one whitelisted column.

        Raises:
            DocumentNotFoundError: if no document with this id exists.
        """
        if column not in {"keywords", "alt_texts", "content", "featured_image_alt"}:
            raise ValueError(f"Column '{column}' is not writable")
        with get_connection() as conn:
            cur = conn.execute(
                sql.SQL(
                    "UPDATE documents SET {} = %s, updated_at = NOW() WHERE id = %s"
                ).format(sql.Identifier(column)),
                (value, document_id),
            )
            if cur.rowcount == 0:
                conn.rollback()
                raise DocumentNotFoundError(f"Document {document_id} not found")
            conn.commit()
