"""Tests for vecstore.services.redis_pool."""

from __future__ import annotations

import pytest
from unittest.mock import patch, MagicMock

from vecstore.config import Config
from vecstore.services import redis_pool


@pytest.fixture(autouse=True)
def no_shared_client():
    redis_pool._client = None
    yield
    redis_pool._client = None


class TestGetClient:
    def test_unconfigured_raises(self):
        with patch.object(Config, "REDIS_URL", ""):
            assert redis_pool.is_configured() is False
            with pytest.raises(ValueError, match="REDIS_URL is not configured"):
                redis_pool.get_client()

    def test_client_built_from_config(self):
        client = MagicMock()
        with (
            patch.object(Config, "REDIS_URL", "redis://cache:6379/2"),
            patch.object(Config, "REDIS_SOCKET_TIMEOUT", 1.5),
            patch("valkey.from_url", return_value=client) as from_url,
        ):
            assert redis_pool.get_client() is client
            assert redis_pool.get_client() is client

        from_url.assert_called_once_with(
            "redis://cache:6379/2", decode_responses=True, socket_timeout=1.5
        )


class TestCloseClient:
    def test_closes_and_forgets(self):
        client = MagicMock()
        redis_pool._client = client

        redis_pool.close_client()

        client.close.assert_called_once()
        assert redis_pool._client is None

    def test_failing_close_still_forgets(self):
        client = MagicMock()
        client.close.side_effect = ConnectionError("gone")
        redis_pool._client = client

        redis_pool.close_client()

        assert redis_pool._client is None

    def test_noop_without_client(self):
        redis_pool.close_client()
        assert redis_pool._client is None
