"""Caller-scoped routes: own registrations, own managed events, own user record."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from eventlink.api.v1.dependencies import (
    get_actor_id,
    get_query_service,
    get_today,
    get_user_record_service,
)
from eventlink.application.use_cases import EventQueryService, UserRecordService
from eventlink.core.limiter import limit_writes
from eventlink.schemas.event import EventResponse, to_event_responses
from eventlink.schemas.profile import UserRecordRequest, UserRecordResponse

router = APIRouter()


@router.get("/events", response_model=list[EventResponse])
async def my_events(
    actor_id: Annotated[str, Depends(get_actor_id)],
    queries: Annotated[EventQueryService, Depends(get_query_service)],
    today: Annotated[date, Depends(get_today)],
):
    """Events the caller is registered for."""
    return to_event_responses(await queries.list_events_for_user(actor_id), today)


@router.get("/managed-events", response_model=list[EventResponse])
async def my_managed_events(
    actor_id: Annotated[str, Depends(get_actor_id)],
    queries: Annotated[EventQueryService, Depends(get_query_service)],
    today: Annotated[date, Depends(get_today)],
):
    """Events owned by the caller's NGO, latest first."""
    return to_event_responses(await queries.list_events_for_ngo(actor_id), today)


@router.get("/user", response_model=UserRecordResponse)
async def get_my_user_record(
    actor_id: Annotated[str, Depends(get_actor_id)],
    users: Annotated[UserRecordService, Depends(get_user_record_service)],
):
    return UserRecordResponse.from_entity(await users.get_user_record(actor_id))


@router.put("/user", response_model=UserRecordResponse)
@limit_writes
async def put_my_user_record(
    request: Request,
    body: UserRecordRequest,
    actor_id: Annotated[str, Depends(get_actor_id)],
    users: Annotated[UserRecordService, Depends(get_user_record_service)],
):
    """Create or replace the caller's user record (name, email, role)."""
    record = await users.create_user_record(actor_id, body.name, body.email, body.role)
    return UserRecordResponse.from_entity(record)
