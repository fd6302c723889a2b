"""Integration tests for the cache HTTP API."""

import logging
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from neo_cache.api.app import create_app
from neo_cache.config.constants import INVALIDATION_TOPIC, PREFETCH_TOPIC


@pytest.fixture
def app(cache_module):
    return create_app(cache_module)


@pytest_asyncio.fixture
async def client(app, cache_module):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
    await cache_module.consistency_service.wait_for_pending()


class TestInvalidationEndpoint:
    """POST /internal/cache/invalidations"""

    @pytest.mark.asyncio
    async def test_accepted(self, client, memory_client, cache_module, notification_channel):
        await memory_client.set("tenant-config:t1:config", "stale")

        response = await client.post("/internal/cache/invalidations", json={
            "domain": "tenant-config",
            "tenant_id": "t1",
            "keys": ["tenant-config:t1:config"],
            "reason": "tenant updated",
            "delay_ms": 10,
        })

        assert response.status_code == 202
        body = response.json()
        assert set(body) == {"request_id", "scheduled_at", "second_delete_at"}
        assert await memory_client.get("tenant-config:t1:config") is None
        assert notification_channel.messages(INVALIDATION_TOPIC)[0]["request_id"] == body["request_id"]

    @pytest.mark.asyncio
    async def test_invalid_command_returns_400(self, client):
        response = await client.post("/internal/cache/invalidations", json={
            "domain": "tenant-config",
            "tenant_id": " ",
            "keys": [],
            "reason": "tenant updated",
        })

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "CACHE_COMMAND_INVALID"
        assert [issue["field"] for issue in error["details"]["issues"]] == ["tenant_id", "keys"]

    @pytest.mark.asyncio
    async def test_malformed_body_returns_422(self, client):
        response = await client.post("/internal/cache/invalidations", json={"domain": "tenant-config"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_domain_returns_404(self, client):
        response = await client.post("/internal/cache/invalidations", json={
            "domain": "orders",
            "tenant_id": "t1",
            "keys": ["orders:1"],
            "reason": "order updated",
        })

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CACHE_NAMESPACE_POLICY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_client_returns_503(self, client):
        response = await client.post("/internal/cache/invalidations", json={
            "domain": "tenant-config",
            "tenant_id": "t1",
            "keys": ["k"],
            "reason": "updated",
            "client_key": "reporting",
        })

        assert response.status_code == 503
        error = response.json()["error"]
        assert error["code"] == "CACHE_CLIENT_NOT_CONFIGURED"
        assert error["type"] == "MissingClientConfiguration"

    @pytest.mark.asyncio
    async def test_store_failure_returns_500_with_error_body(self, client, memory_client, monkeypatch, caplog):
        monkeypatch.setattr(memory_client, "delete", AsyncMock(side_effect=ConnectionError("redis down")))

        with caplog.at_level(logging.ERROR):
            response = await client.post("/internal/cache/invalidations", json={
                "domain": "tenant-config",
                "tenant_id": "t1",
                "keys": ["k"],
                "reason": "updated",
            })

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "CACHE_OPERATION_FAILED"
        assert error["type"] == "CacheOperationError"
        assert error["details"]["cause"] == "ConnectionError: redis down"
        assert "Cache engine error on /internal/cache/invalidations" in caplog.text

    @pytest.mark.asyncio
    async def test_contention_returns_409(self, client, cache_module):
        await cache_module.redlock.acquire(["lock:invalidate:k"], 5_000)

        response = await client.post("/internal/cache/invalidations", json={
            "domain": "tenant-config",
            "tenant_id": "t1",
            "keys": ["k"],
            "reason": "updated",
        })

        assert response.status_code == 409
        assert response.headers["retry-after"] == "1"
        assert response.json()["error"]["code"] == "CACHE_LOCK_TIMEOUT"


class TestPrefetchEndpoint:
    """POST /internal/cache/prefetch"""

    @pytest.mark.asyncio
    async def test_prefetch(self, client, notification_channel):
        response = await client.post("/internal/cache/prefetch", json={
            "domain": "tenant-config",
            "tenant_id": "t1",
            "keys": ["a", "b"],
        })

        assert response.status_code == 200
        assert response.json() == {"refreshed": 2, "failures": []}
        assert len(notification_channel.messages(PREFETCH_TOPIC)) == 2

    @pytest.mark.asyncio
    async def test_prefetch_without_keys(self, client):
        response = await client.post("/internal/cache/prefetch", json={
            "domain": "tenant-config",
            "tenant_id": "t1",
            "keys": [],
        })

        assert response.status_code == 400


class TestNamespaceEndpoints:
    """GET /internal/cache/namespaces and /internal/cache/metrics"""

    @pytest.mark.asyncio
    async def test_list_namespaces(self, client):
        response = await client.get("/internal/cache/namespaces")

        assert response.status_code == 200
        assert [policy["domain"] for policy in response.json()] == ["tenant-config", "user-profile"]
        assert response.json()[1]["key_suffix"] == "v1"

    @pytest.mark.asyncio
    async def test_metrics(self, client, cache_module):
        cache_module.metrics.record_hit("tenant-config")

        response = await client.get("/internal/cache/metrics")

        assert response.status_code == 200
        assert response.json()["tenant-config"]["hits"] == 1

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["clients"] == ["default"]
        assert response.json()["lock_nodes"] == 1
