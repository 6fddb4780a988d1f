"""Tests for ServiceContainer handle ownership and store construction."""

import pytest
from unittest.mock import patch, MagicMock

from vecstore.backends.vectorstores.sql_store import DBAPIVectorStore
from vecstore.backends.vectorstores.valkey_store import ValkeyVectorStore
from vecstore.config import Config
from vecstore.services.container import ServiceContainer, get_container, reset_container
from vecstore.utils.errors import ConfigurationError


@pytest.fixture(autouse=True)
def fresh_container():
    reset_container()
    yield
    with patch("vecstore.services.container.db_pool.release_connection"):
        reset_container()


class TestSingleton:
    def test_get_container_returns_same_instance(self):
        assert get_container() is get_container()
        assert ServiceContainer() is get_container()

    def test_reset_container_creates_new_instance(self):
        first = get_container()
        reset_container()
        assert get_container() is not first


class TestSqlConnection:
    def test_missing_database_url_raises_configuration_error(self):
        with patch.object(Config, "DATABASE_URL", ""):
            with pytest.raises(ConfigurationError, match="DATABASE_URL is required"):
                get_container().sql_connection

    def test_connection_acquired_once(self):
        conn = MagicMock()
        with (
            patch.object(Config, "DATABASE_URL", "postgresql://localhost/test"),
            patch("vecstore.services.container.db_pool.acquire_connection", return_value=conn) as acquire,
        ):
            container = get_container()
            assert container.sql_connection is conn
            assert container.sql_connection is conn
            acquire.assert_called_once()


class TestVectorStore:
    def test_builds_configured_sql_store_and_releases_on_close(self, sqlite_conn):
        with (
            patch.object(Config, "VECTOR_STORE_BACKEND", "sql"),
            patch.object(Config, "DATABASE_URL", "postgresql://localhost/test"),
            patch("vecstore.services.container.db_pool.acquire_connection", return_value=sqlite_conn),
            patch("vecstore.services.container.db_pool.release_connection") as release,
        ):
            container = get_container()
            store = container.vector_store

            assert isinstance(store, DBAPIVectorStore)
            assert container.vector_store is store
            assert store.get_collection_names_async().result(timeout=5) == []

            container.close()
            release.assert_called_once_with(sqlite_conn)
            assert container._vector_store is None

    def test_builds_valkey_store_on_shared_client(self):
        client = MagicMock()
        with (
            patch.object(Config, "VECTOR_STORE_BACKEND", "valkey"),
            patch.object(Config, "REDIS_URL", "redis://localhost:6379/0"),
            patch("vecstore.services.container.redis_pool.get_client", return_value=client),
            patch("vecstore.services.container.redis_pool.close_client") as close_client,
        ):
            container = get_container()
            store = container.vector_store

            assert isinstance(store, ValkeyVectorStore)
            assert store.client is client
            client.close.assert_not_called()

            container.close()
            close_client.assert_called_once()
            assert container._valkey_client is None

    def test_valkey_without_url_raises(self):
        with (
            patch.object(Config, "VECTOR_STORE_BACKEND", "valkey"),
            patch.object(Config, "REDIS_URL", ""),
        ):
            with pytest.raises(ConfigurationError, match="REDIS_URL is required"):
                get_container().vector_store

    def test_unknown_backend_raises(self):
        with patch.object(Config, "VECTOR_STORE_BACKEND", "pinecone"):
            with pytest.raises(ValueError, match="Unknown vectorstore backend: pinecone"):
                get_container().vector_store

    def test_close_without_connection_is_noop(self):
        with patch("vecstore.services.container.db_pool.release_connection") as release:
            get_container().close()
        release.assert_not_called()


class TestLogging:
    def test_container_configures_package_logger(self):
        with patch("vecstore.services.container.configure_logging") as configure:
            get_container()
        configure.assert_called_once()
