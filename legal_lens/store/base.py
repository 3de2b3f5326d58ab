from abc import ABC, abstractmethod

from legal_lens.service.models import ProcessedDocument


class BaseDocumentStore(ABC):
    """Keyed storage for processed documents.

    ``get`` returns None for unknown ids; only backend failures raise
    ``DocumentStoreError``.
    """

    @abstractmethod
    def set(self, document_id: str, document: ProcessedDocument) -> None:
        """Insert or replace the document stored under *document_id*."""

    @abstractmethod
    def get(self, document_id: str) -> ProcessedDocument | None:
        """Return the stored document, or None."""

    @abstractmethod
    def delete(self, document_id: str) -> bool:
        """Remove a document; return True if it existed."""

    @abstractmethod
    def entries(self) -> list[tuple[str, ProcessedDocument]]:
        """Return a snapshot of all (id, document) pairs."""

    @abstractmethod
    def clear(self) -> None:
        """Remove every stored document."""

    def has(self, document_id: str) -> bool:
        return self.get(document_id) is not None

    def keys(self) -> list[str]:
        return [document_id for document_id, _ in self.entries()]

    def size(self) -> int:
        return len(self.entries())

    def get_all_documents(self) -> list[ProcessedDocument]:
        return [document for _, document in self.entries()]
