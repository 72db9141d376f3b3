"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the document store, repositories and use
cases. Routes depend only on these, never on infrastructure directly.
The store is opened by the lifespan and read from app.state.store, so
tests can install their own store before startup.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from eventlink.application.interfaces.store import IDocumentStore
from eventlink.application.use_cases import (
    AttendeeAggregator,
    EventLifecycleService,
    EventQueryService,
    NgoProfileService,
    RegistrationLedger,
    UserRecordService,
)
from eventlink.core.config import Settings, get_settings
from eventlink.domain.exceptions import AuthenticationException
from eventlink.infrastructure.repositories import (
    EventRepository,
    NgoProfileRepository,
    UserRecordRepository,
)
from eventlink.infrastructure.security.identity import BearerTokenIdentityProvider
from eventlink.shared.utils.datetime import utc_today

_http_bearer = HTTPBearer(auto_error=False)


def get_store(request: Request) -> IDocumentStore:
    """Document store opened at startup."""
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Document store not initialized; is the lifespan running?")
    return store


def get_today() -> date:
    """UTC calendar day used for the completed overlay."""
    return utc_today()


def get_event_repo(store: Annotated[IDocumentStore, Depends(get_store)]) -> EventRepository:
    return EventRepository(store)


def get_profile_repo(
    store: Annotated[IDocumentStore, Depends(get_store)],
) -> NgoProfileRepository:
    return NgoProfileRepository(store)


def get_user_repo(store: Annotated[IDocumentStore, Depends(get_store)]) -> UserRecordRepository:
    return UserRecordRepository(store)


def get_registration_ledger(
    event_repo: Annotated[EventRepository, Depends(get_event_repo)],
    user_repo: Annotated[UserRecordRepository, Depends(get_user_repo)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> RegistrationLedger:
    return RegistrationLedger(
        event_repo,
        AttendeeAggregator(user_repo, settings.attendee_fanout_concurrency),
        max_attempts=settings.store_transaction_max_attempts,
        transaction_deadline=settings.store_transaction_deadline_seconds,
        block_closed=settings.registration_block_closed,
        block_completed=settings.registration_block_completed,
        today=get_today,
    )


def get_lifecycle_service(
    event_repo: Annotated[EventRepository, Depends(get_event_repo)],
    profile_repo: Annotated[NgoProfileRepository, Depends(get_profile_repo)],
) -> EventLifecycleService:
    return EventLifecycleService(event_repo, profile_repo)


def get_query_service(
    event_repo: Annotated[EventRepository, Depends(get_event_repo)],
) -> EventQueryService:
    return EventQueryService(event_repo)


def get_ngo_profile_service(
    profile_repo: Annotated[NgoProfileRepository, Depends(get_profile_repo)],
    event_repo: Annotated[EventRepository, Depends(get_event_repo)],
) -> NgoProfileService:
    return NgoProfileService(profile_repo, event_repo)


def get_user_record_service(
    user_repo: Annotated[UserRecordRepository, Depends(get_user_repo)],
) -> UserRecordService:
    return UserRecordService(user_repo)


def get_identity_provider(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> BearerTokenIdentityProvider:
    return BearerTokenIdentityProvider(credentials.credentials if credentials else None)


def get_actor_id_optional(
    identity: Annotated[BearerTokenIdentityProvider, Depends(get_identity_provider)],
) -> str | None:
    """Actor id from the bearer token, or None. Use cases decide whether it is required."""
    return identity.current_actor_id()


def get_actor_id(
    actor_id: Annotated[str | None, Depends(get_actor_id_optional)],
) -> str:
    """Actor id from the bearer token; 401 if missing or invalid."""
    if not actor_id:
        raise AuthenticationException()
    return actor_id
