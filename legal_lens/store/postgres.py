import psycopg
from psycopg.types.json import Jsonb

from legal_lens.logging.logger import Log
from legal_lens.service.models import ProcessedDocument
from legal_lens.store.base import BaseDocumentStore
from legal_lens.store.connection import get_connection
from legal_lens.store.exceptions import DocumentStoreError
from legal_lens.store.serialization import document_from_payload, document_to_payload

_CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS processed_documents (
        id TEXT PRIMARY KEY,
        file_hash TEXT,
        original_filename TEXT NOT NULL,
        mime_type TEXT NOT NULL,
        upload_time TIMESTAMPTZ NOT NULL,
        payload JSONB NOT NULL
    )
"""


class PostgresDocumentStore(BaseDocumentStore):
    """Document store backed by the processed_documents table.

    Each record is kept as a JSONB payload; lookup columns are duplicated
    next to it. Raw file buffers are not persisted.
    """

    def ensure_schema(self) -> None:
        """Create the processed_documents table if it does not exist.

        Raises:
            DocumentStoreError: on database failure.
        """
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(_CREATE_TABLE_SQL)
                conn.commit()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to create document table: {exc}") from exc

    def set(self, document_id: str, document: ProcessedDocument) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO processed_documents
                            (id, file_hash, original_filename, mime_type, upload_time, payload)
                        VALUES (%s, %s, %s, %s, %s, %s)
                        ON CONFLICT (id) DO UPDATE
                        SET file_hash = EXCLUDED.file_hash,
                            original_filename = EXCLUDED.original_filename,
                            mime_type = EXCLUDED.mime_type,
                            upload_time = EXCLUDED.upload_time,
                            payload = EXCLUDED.payload
                        """,
                        (
                            document_id,
                            document.file_hash,
                            document.original_filename,
                            document.mime_type,
                            document.upload_time,
                            Jsonb(document_to_payload(document)),
                        ),
                    )
                conn.commit()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to store document {document_id}: {exc}") from exc
        Log.debug(f"Stored document {document_id} in Postgres")

    def get(self, document_id: str) -> ProcessedDocument | None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT payload FROM processed_documents WHERE id = %s",
                        (document_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to load document {document_id}: {exc}") from exc

        if row is None:
            return None
        return document_from_payload(row[0])

    def has(self, document_id: str) -> bool:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT 1 FROM processed_documents WHERE id = %s",
                        (document_id,),
                    )
                    return cur.fetchone() is not None
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to look up document {document_id}: {exc}") from exc

    def delete(self, document_id: str) -> bool:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("DELETE FROM processed_documents WHERE id = %s", (document_id,))
                    deleted = cur.rowcount > 0
                conn.commit()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to delete document {document_id}: {exc}") from exc
        return deleted

    def entries(self) -> list[tuple[str, ProcessedDocument]]:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT id, payload FROM processed_documents ORDER BY upload_time")
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to list documents: {exc}") from exc
        return [(row[0], document_from_payload(row[1])) for row in rows]

    def keys(self) -> list[str]:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT id FROM processed_documents ORDER BY upload_time")
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to list document ids: {exc}") from exc
        return [row[0] for row in rows]

    def size(self) -> int:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT COUNT(*) FROM processed_documents")
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to count documents: {exc}") from exc
        return int(row[0]) if row is not None else 0

    def clear(self) -> None:
        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute("DELETE FROM processed_documents")
                conn.commit()
        except psycopg.Error as exc:
            raise DocumentStoreError(f"Failed to clear documents: {exc}") from exc
