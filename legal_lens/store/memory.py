"""Process-wide in-memory document store.

Documents live in a module-level dict that is created only if the module
namespace does not already hold one, so ``importlib.reload`` (as done by
development auto-reloaders) keeps previously stored documents.
"""

from legal_lens.logging.logger import Log
from legal_lens.service.models import ProcessedDocument
from legal_lens.store.base import BaseDocumentStore

if "_documents" not in globals():
    _documents: dict[str, ProcessedDocument] = {}


class InMemoryDocumentStore(BaseDocumentStore):
    """All instances share the same module-level dict. Nothing is evicted."""

    def set(self, document_id: str, document: ProcessedDocument) -> None:
        _documents[document_id] = document
        Log.debug(f"Stored document {document_id}", total=len(_documents))

    def get(self, document_id: str) -> ProcessedDocument | None:
        return _documents.get(document_id)

    def has(self, document_id: str) -> bool:
        return document_id in _documents

    def delete(self, document_id: str) -> bool:
        return _documents.pop(document_id, None) is not None

    def entries(self) -> list[tuple[str, ProcessedDocument]]:
        return list(_documents.items())

    def keys(self) -> list[str]:
        return list(_documents)

    def size(self) -> int:
        return len(_documents)

    def clear(self) -> None:
        _documents.clear()
