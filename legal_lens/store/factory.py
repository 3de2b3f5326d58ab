from legal_lens.config.settings import Settings
from legal_lens.store.base import BaseDocumentStore
from legal_lens.store.connection import init_pool
from legal_lens.store.memory import InMemoryDocumentStore
from legal_lens.store.postgres import PostgresDocumentStore


class DocumentStoreFactory:
    """Creates the configured document store backend."""

    SUPPORTED = ("memory", "postgres")

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentStore:
        backend = settings.document_store.lower()
        if backend == "memory":
            return InMemoryDocumentStore()
        if backend == "postgres":
            init_pool(settings)
            store = PostgresDocumentStore()
            store.ensure_schema()
            return store
        raise ValueError(
            f"Unknown document store '{backend}'. Choose from: {list(cls.SUPPORTED)}"
        )
