"""Event API schemas."""

import datetime as dt
from typing import Any, Literal

from pydantic import AwareDatetime, BaseModel, Field, field_validator

from eventlink.application.dtos.event import CreateEventCommand
from eventlink.domain.entities import EventEntity


class EventCreateRequest(BaseModel):
    """Payload for POST /events. The caller becomes the owning NGO."""

    name: str = Field(..., min_length=1, max_length=200)
    slots: int | str = Field(..., description="Positive integer or 'unlimited'")
    date: dt.date = Field(..., description="Event day (YYYY-MM-DD)")
    time: str = ""
    duration: str = ""
    description: str = ""
    location: str = ""
    activity_type: str = ""
    district: str = ""
    transport: str = ""
    difficulty: str = ""
    materials: str = ""
    ngo_name: str = Field(default="", description="Defaults to the NGO profile name")
    ngo_info: str = Field(default="", description="Defaults to the NGO profile description")
    ngo_contact: str = Field(default="", description="Defaults to the NGO profile contact")
    languages: list[str] = Field(default_factory=list)
    client_group: list[str] = Field(default_factory=list)

    @field_validator("slots", mode="before")
    @classmethod
    def slots_not_bool(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("slots must be a positive integer or 'unlimited'")
        return v

    def to_command(self) -> CreateEventCommand:
        return CreateEventCommand(
            name=self.name,
            slots=self.slots,
            date=self.date.isoformat(),
            time=self.time,
            duration=self.duration,
            description=self.description,
            location=self.location,
            activity_type=self.activity_type,
            district=self.district,
            transport=self.transport,
            difficulty=self.difficulty,
            materials=self.materials,
            ngo_name=self.ngo_name,
            ngo_info=self.ngo_info,
            ngo_contact=self.ngo_contact,
            languages=tuple(self.languages),
            client_group=tuple(self.client_group),
        )


class EventResponse(BaseModel):
    """Event detail, list item and ledger operation result."""

    id: str
    ngo_id: str
    name: str
    slots: int | Literal["unlimited"]
    enrolled_count: int
    spots_left: int | None = Field(..., description="None when capacity is unlimited")
    registered_users: list[str]
    status: Literal["active", "closed"]
    completed: bool = Field(..., description="Event date is before today (UTC)")
    date: dt.date | None
    time: str
    duration: str
    description: str
    location: str
    ngo_name: str
    activity_type: str
    district: str
    transport: str
    difficulty: str
    materials: str
    ngo_info: str
    ngo_contact: str
    languages: list[str]
    client_group: list[str]
    created_at: AwareDatetime | None = None
    closed_at: AwareDatetime | None = None
    closed_by: str | None = None
    opened_at: AwareDatetime | None = None
    opened_by: str | None = None
    version: int

    @classmethod
    def from_entity(cls, event: EventEntity, today: dt.date) -> "EventResponse":
        return cls(
            id=event.id,
            ngo_id=event.ngo_id,
            name=event.name,
            slots=event.capacity.to_store(),
            enrolled_count=event.enrolled_count,
            spots_left=event.spots_left(),
            registered_users=list(event.registered_users),
            status=event.status.value,
            completed=event.is_completed(today),
            date=event.event_date,
            time=event.time,
            duration=event.duration,
            description=event.description,
            location=event.location,
            ngo_name=event.ngo_name,
            activity_type=event.activity_type,
            district=event.district,
            transport=event.transport,
            difficulty=event.difficulty,
            materials=event.materials,
            ngo_info=event.ngo_info,
            ngo_contact=event.ngo_contact,
            languages=list(event.languages),
            client_group=list(event.client_group),
            created_at=event.created_at,
            closed_at=event.closed_at,
            closed_by=event.closed_by,
            opened_at=event.opened_at,
            opened_by=event.opened_by,
            version=event.version,
        )


def to_event_responses(events: list[EventEntity], today: dt.date) -> list[EventResponse]:
    return [EventResponse.from_entity(e, today) for e in events]
