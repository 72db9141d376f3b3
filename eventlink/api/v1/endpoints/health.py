"""Health check endpoints for liveness and readiness."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from eventlink.api.v1.dependencies import get_store
from eventlink.application.interfaces.store import IDocumentStore, StoreError
from eventlink.core.config import get_settings
from eventlink.infrastructure.firebase.collections import COLLECTION_EVENTS
from eventlink.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return ok for liveness; touches nothing external."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Document store unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check(
    store: Annotated[IDocumentStore, Depends(get_store)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 if a one-document query against events succeeds; 503 otherwise."""
    try:
        await store.query_documents(COLLECTION_EVENTS, limit=1)
    except StoreError as e:
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message=str(e)).model_dump(),
        )
    return ReadinessResponse(store=type(store).__name__)
