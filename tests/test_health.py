"""Smoke tests for health and app wiring."""

from httpx import AsyncClient


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200, status ok and the app version."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"]


async def test_readiness_reports_store(client: AsyncClient) -> None:
    """GET /api/v1/health/ready queries the store and names the backend."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "store": "InMemoryDocumentStore"}


async def test_request_id_is_echoed(client: AsyncClient) -> None:
    """A safe client X-Request-ID is returned unchanged."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


async def test_unsafe_request_id_is_replaced(client: AsyncClient) -> None:
    """Request ids with characters unsafe for logs are replaced with a fresh id."""
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "bad id;drop"})
    rid = response.headers["x-request-id"]
    assert rid != "bad id;drop"
    assert rid
