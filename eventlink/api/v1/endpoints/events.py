"""Event API: thin routes delegating to the lifecycle service and registration ledger."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from eventlink.api.v1.dependencies import (
    get_actor_id,
    get_lifecycle_service,
    get_query_service,
    get_registration_ledger,
    get_today,
)
from eventlink.application.use_cases import (
    EventLifecycleService,
    EventQueryService,
    RegistrationLedger,
)
from eventlink.core.limiter import limit_writes
from eventlink.schemas.event import EventCreateRequest, EventResponse, to_event_responses
from eventlink.schemas.profile import UserRecordResponse

router = APIRouter()


@router.get("", response_model=list[EventResponse])
async def list_events(
    queries: Annotated[EventQueryService, Depends(get_query_service)],
    today: Annotated[date, Depends(get_today)],
):
    """All events, earliest date first."""
    return to_event_responses(await queries.list_events(), today)


@router.post("", response_model=EventResponse, status_code=201)
@limit_writes
async def create_event(
    request: Request,
    body: EventCreateRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    lifecycle: Annotated[EventLifecycleService, Depends(get_lifecycle_service)],
    today: Annotated[date, Depends(get_today)],
):
    """Create an event owned by the caller. Requires a saved NGO profile."""
    event = await lifecycle.create_event(actor_id, body.to_command())
    return EventResponse.from_entity(event, today)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    lifecycle: Annotated[EventLifecycleService, Depends(get_lifecycle_service)],
    today: Annotated[date, Depends(get_today)],
):
    return EventResponse.from_entity(await lifecycle.get_event(event_id), today)


@router.delete("/{event_id}", status_code=204)
@limit_writes
async def delete_event(
    request: Request,
    event_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    lifecycle: Annotated[EventLifecycleService, Depends(get_lifecycle_service)],
) -> Response:
    """Permanently delete an event (owner only)."""
    await lifecycle.delete_event(event_id, actor_id)
    return Response(status_code=204)


@router.post("/{event_id}/close", response_model=EventResponse)
@limit_writes
async def close_event(
    request: Request,
    event_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    lifecycle: Annotated[EventLifecycleService, Depends(get_lifecycle_service)],
    today: Annotated[date, Depends(get_today)],
):
    """Stop registrations (owner only). Existing registrations are kept."""
    return EventResponse.from_entity(await lifecycle.close(event_id, actor_id), today)


@router.post("/{event_id}/reopen", response_model=EventResponse)
@limit_writes
async def reopen_event(
    request: Request,
    event_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    lifecycle: Annotated[EventLifecycleService, Depends(get_lifecycle_service)],
    today: Annotated[date, Depends(get_today)],
):
    return EventResponse.from_entity(await lifecycle.reopen(event_id, actor_id), today)


@router.post("/{event_id}/registration", response_model=EventResponse)
@limit_writes
async def register(
    request: Request,
    event_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    ledger: Annotated[RegistrationLedger, Depends(get_registration_ledger)],
    today: Annotated[date, Depends(get_today)],
):
    """Register the caller. 409 when already registered, closed, completed or full."""
    return EventResponse.from_entity(await ledger.register(event_id, actor_id), today)


@router.delete("/{event_id}/registration", response_model=EventResponse)
@limit_writes
async def unregister(
    request: Request,
    event_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    ledger: Annotated[RegistrationLedger, Depends(get_registration_ledger)],
    today: Annotated[date, Depends(get_today)],
):
    return EventResponse.from_entity(await ledger.unregister(event_id, actor_id), today)


@router.get("/{event_id}/attendees", response_model=list[UserRecordResponse])
async def list_attendees(
    event_id: str,
    actor_id: Annotated[str, Depends(get_actor_id)],
    ledger: Annotated[RegistrationLedger, Depends(get_registration_ledger)],
):
    """Registered users with a user record, in registration order (owner only)."""
    attendees = await ledger.list_attendees(event_id, actor_id)
    return [UserRecordResponse.from_entity(a) for a in attendees]
