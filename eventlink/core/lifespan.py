"""Application lifespan: startup and shutdown.

Chooses the document store backend from settings and publishes it on
app.state.store for the dependency layer. No business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from eventlink.application.interfaces.store import IDocumentStore
from eventlink.core.config import Settings, get_settings
from eventlink.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> IDocumentStore:
    """Return the configured IDocumentStore.

    Raises:
        ValueError: If the firestore backend is selected without usable credentials.
    """
    if settings.store_backend == "firestore":
        from eventlink.infrastructure.firebase import FirestoreDocumentStore, init_firebase

        return FirestoreDocumentStore(init_firebase())
    from eventlink.infrastructure.store import InMemoryDocumentStore

    logger.warning("Using the in-memory document store; data is lost on restart")
    return InMemoryDocumentStore()


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging, open the store; on exit close the Firestore HTTP client."""
    settings = get_settings()
    setup_logging(settings)

    # A store injected before startup (tests) wins over configuration.
    if getattr(app.state, "store", None) is None:
        app.state.store = build_store(settings)
    logger.info(
        "%s %s started (store=%s)",
        settings.app_name,
        settings.app_version,
        type(app.state.store).__name__,
    )

    yield

    if settings.store_backend == "firestore":
        from eventlink.infrastructure.firebase import close_firebase

        await close_firebase()
    logger.info("%s shut down", settings.app_name)
