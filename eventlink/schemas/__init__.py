"""Pydantic request/response schemas for the API."""

from eventlink.schemas.event import EventCreateRequest, EventResponse, to_event_responses
from eventlink.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from eventlink.schemas.profile import (
    NgoDirectoryEntry,
    NgoProfileRequest,
    NgoProfileResponse,
    UserRecordRequest,
    UserRecordResponse,
)

__all__ = [
    "EventCreateRequest",
    "EventResponse",
    "HealthResponse",
    "NgoDirectoryEntry",
    "NgoProfileRequest",
    "NgoProfileResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "UserRecordRequest",
    "UserRecordResponse",
    "to_event_responses",
]
