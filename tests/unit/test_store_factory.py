from unittest.mock import MagicMock, patch

import pytest

from legal_lens.config.settings import Settings
from legal_lens.store import connection
from legal_lens.store.factory import DocumentStoreFactory
from legal_lens.store.memory import InMemoryDocumentStore


class TestDocumentStoreFactory:
    def test_creates_memory_store(self) -> None:
        store = DocumentStoreFactory.create(Settings(document_store="memory"))
        assert isinstance(store, InMemoryDocumentStore)

    @patch("legal_lens.store.factory.PostgresDocumentStore")
    @patch("legal_lens.store.factory.init_pool")
    def test_creates_postgres_store(self, mock_init_pool: MagicMock, mock_store_cls: MagicMock) -> None:
        settings = Settings(document_store="Postgres")
        store = DocumentStoreFactory.create(settings)
        mock_init_pool.assert_called_once_with(settings)
        mock_store_cls.return_value.ensure_schema.assert_called_once()
        assert store is mock_store_cls.return_value

    def test_raises_for_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown document store 'redis'"):
            DocumentStoreFactory.create(Settings(document_store="redis"))


class TestConnectionPool:
    def test_get_connection_requires_pool(self) -> None:
        with patch.object(connection, "_pool", None):
            with pytest.raises(RuntimeError, match="Connection pool not initialized"):
                with connection.get_connection():
                    pass

    @patch("legal_lens.store.connection.ConnectionPool")
    def test_init_pool_is_idempotent(self, mock_pool_cls: MagicMock) -> None:
        with patch.object(connection, "_pool", None):
            connection.init_pool(Settings())
            connection.init_pool(Settings())
            mock_pool_cls.assert_called_once()
            assert "dbname=legal_lens" in mock_pool_cls.call_args.args[0]
            connection.close_pool()
            mock_pool_cls.return_value.close.assert_called_once()
            assert connection._pool is None
