"""Pytest configuration and fixtures for eventlink.

Environment is set before the app is imported so get_settings() validates
against test values. HTTP tests run the app in-process over ASGI with an
in-memory document store installed before startup.
"""

import os
from collections.abc import Awaitable, Callable
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ["STORE_BACKEND"] = "memory"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from eventlink.core.config import get_settings  # noqa: E402
from eventlink.core.limiter import limiter  # noqa: E402
from eventlink.infrastructure.security.jwt import create_access_token  # noqa: E402
from eventlink.infrastructure.store import InMemoryDocumentStore  # noqa: E402
from eventlink.main import create_app  # noqa: E402

get_settings.cache_clear()

NGO_ID = "ngo-1"
OTHER_NGO_ID = "ngo-2"


def _bearer(user_id: str) -> dict[str, str]:
    """Authorization header for user_id."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


def _event_payload(**overrides: Any) -> dict[str, Any]:
    """Valid POST /events body; override any field."""
    body: dict[str, Any] = {
        "name": "Beach clean-up",
        "slots": 2,
        "date": "2999-06-01",
        "time": "09:00",
        "duration": "3 hours",
        "description": "Collect litter along the shore",
        "location": "Kololo beach",
        "activity_type": "Environment",
        "district": "Central",
        "transport": "Provided",
        "languages": ["English"],
        "client_group": ["Adults"],
    }
    body.update(overrides)
    return body


def _profile_payload(**overrides: Any) -> dict[str, Any]:
    """Valid PUT /ngos/me body."""
    body: dict[str, Any] = {
        "name": "Green Shores",
        "description": "Coastal conservation volunteers",
        "location": "Kampala",
        "contact": "+256700000000",
        "email": "hello@greenshores.org",
        "established_year": "2012",
        "services": ["Environment", "Education"],
        "languages": ["English", "Luganda"],
    }
    body.update(overrides)
    return body


@pytest.fixture(autouse=True)
def _reset_rate_limits() -> None:
    """Rate limit counters are process-global; start every test from zero."""
    limiter.reset()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    """Fresh in-memory document store with no retry backoff."""
    return InMemoryDocumentStore(retry_base_delay=0)


@pytest.fixture
async def client(store: InMemoryDocumentStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) backed by store."""
    transport = ASGITransport(app=create_app(store=store))
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_event(client: AsyncClient) -> Callable[..., Awaitable[dict[str, Any]]]:
    """Save an NGO profile for owner (once) and create an event; returns the JSON body."""
    profiled: set[str] = set()

    async def _create(owner: str = NGO_ID, **overrides: Any) -> dict[str, Any]:
        if owner not in profiled:
            resp = await client.put("/api/v1/ngos/me", json=_profile_payload(), headers=_bearer(owner))
            assert resp.status_code == 200, resp.text
            profiled.add(owner)
        resp = await client.post(
            "/api/v1/events", json=_event_payload(**overrides), headers=_bearer(owner)
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def bearer() -> Callable[[str], dict[str, str]]:
    """Build an Authorization header for a user id."""
    return _bearer


@pytest.fixture
def event_body() -> Callable[..., dict[str, Any]]:
    return _event_payload


@pytest.fixture
def profile_body() -> Callable[..., dict[str, Any]]:
    return _profile_payload
