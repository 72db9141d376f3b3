"""Event lifecycle: create, read, close, reopen, delete.

Only the owning NGO may change an event's status or delete it. Status
changes run as read-check-write transactions and never touch the
registration ledger fields.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Any

from eventlink.application.use_cases._guards import require_actor, translate_store_errors
from eventlink.domain.entities import unique_tags
from eventlink.domain.enums import EventStatus
from eventlink.domain.exceptions import (
    EventNotFoundException,
    ProfileRequiredException,
    ValidationException,
)
from eventlink.domain.value_objects import parse_capacity
from eventlink.shared.telemetry.logging import get_logger
from eventlink.shared.utils.datetime import parse_event_date, utc_now

if TYPE_CHECKING:
    from eventlink.application.dtos.event import CreateEventCommand
    from eventlink.application.interfaces.store import Patch
    from eventlink.application.interfaces.repositories import (
        IEventRepository,
        INgoProfileRepository,
    )
    from eventlink.domain.entities import EventEntity

logger = get_logger(__name__)

# Command attribute -> label used in validation messages (mirrors the event form).
_REQUIRED_TEXT: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("time", "time"),
    ("duration", "duration"),
    ("location", "location"),
    ("ngo_name", "ngoName"),
    ("description", "description"),
    ("activity_type", "activityType"),
    ("district", "district"),
    ("transport", "transport"),
)


class EventLifecycleService:
    """Owner-side event operations."""

    def __init__(
        self,
        event_repo: IEventRepository,
        profile_repo: INgoProfileRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.event_repo = event_repo
        self.profile_repo = profile_repo
        self._clock = clock

    async def create_event(
        self, actor_id: str | None, command: CreateEventCommand
    ) -> EventEntity:
        """Create an event owned by actor_id.

        The actor must have saved an NGO profile. Empty ngo_name, ngo_info
        and ngo_contact are filled from that profile.

        Raises:
            AuthenticationException: No actor.
            ProfileRequiredException: Actor has no NGO profile.
            ValidationException: Missing field, bad slots or bad date.
        """
        owner_id = require_actor(actor_id)
        with translate_store_errors("create_event"):
            profile = await self.profile_repo.get(owner_id)
        if profile is None:
            raise ProfileRequiredException(owner_id)

        values: dict[str, str] = {
            "name": command.name.strip(),
            "time": command.time.strip(),
            "duration": command.duration.strip(),
            "description": command.description.strip(),
            "location": command.location.strip(),
            "activity_type": command.activity_type.strip(),
            "district": command.district.strip(),
            "transport": command.transport.strip(),
            "ngo_name": command.ngo_name.strip() or profile.name,
            "ngo_info": command.ngo_info.strip() or profile.description,
            "ngo_contact": command.ngo_contact.strip() or profile.contact,
        }
        for attr, label in _REQUIRED_TEXT:
            if not values[attr]:
                raise ValidationException(f"Please fill in the {label} field", field=label)
        try:
            capacity = parse_capacity(command.slots)
        except ValueError as e:
            raise ValidationException(
                "Please select a valid number of slots", field="slots"
            ) from e
        try:
            event_date = parse_event_date(command.date)
        except ValueError as e:
            raise ValidationException(f"Invalid event date: {command.date!r}", field="date") from e
        if event_date is None:
            raise ValidationException("Please fill in the date field", field="date")
        client_group = unique_tags(command.client_group)
        if not client_group:
            raise ValidationException(
                "Please select at least one client group", field="clientGroup"
            )
        languages = unique_tags(command.languages)
        if not languages:
            raise ValidationException(
                "Please select at least one language", field="languages"
            )

        fields: dict[str, Any] = {
            "ngoId": owner_id,
            "name": values["name"],
            "slots": capacity.to_store(),
            "enrolledCount": 0,
            "registeredUsers": [],
            "status": EventStatus.ACTIVE.value,
            "date": event_date.isoformat(),
            "time": values["time"],
            "duration": values["duration"],
            "description": values["description"],
            "location": values["location"],
            "ngoName": values["ngo_name"],
            "activityType": values["activity_type"],
            "district": values["district"],
            "transport": values["transport"],
            "difficulty": command.difficulty.strip(),
            "materials": command.materials.strip(),
            "ngoInfo": values["ngo_info"],
            "ngoContact": values["ngo_contact"],
            "languages": list(languages),
            "clientGroup": list(client_group),
            "createdAt": self._clock(),
            "version": 0,
        }
        with translate_store_errors("create_event"):
            event = await self.event_repo.create(fields)
        logger.info("NGO %s created event %s (slots=%s)", owner_id, event.id, fields["slots"])
        return event

    async def get_event(self, event_id: str) -> EventEntity:
        """Return the event or raise EventNotFoundException."""
        with translate_store_errors("get_event"):
            event = await self.event_repo.get_by_id(event_id)
        if event is None:
            raise EventNotFoundException(event_id)
        return event

    async def close(self, event_id: str, actor_id: str | None) -> EventEntity:
        """active -> closed. Registered users keep their places."""
        return await self._transition(event_id, actor_id, EventStatus.CLOSED, "closedAt", "closedBy")

    async def reopen(self, event_id: str, actor_id: str | None) -> EventEntity:
        """closed -> active. Capacity is not re-checked."""
        return await self._transition(event_id, actor_id, EventStatus.ACTIVE, "openedAt", "openedBy")

    async def _transition(
        self,
        event_id: str,
        actor_id: str | None,
        target: EventStatus,
        at_field: str,
        by_field: str,
    ) -> EventEntity:
        owner_id = require_actor(actor_id)
        action = "close" if target is EventStatus.CLOSED else "reopen"

        # Checked against the snapshot the write commits on.
        def decide(event: EventEntity) -> Patch:
            event.ensure_owned_by(owner_id, action)
            event.ensure_can_transition(target)
            return {"status": target.value, at_field: self._clock(), by_field: owner_id}

        with translate_store_errors(f"transition to {target.value}"):
            updated = await self.event_repo.mutate(event_id, decide)
        if updated is None:
            raise EventNotFoundException(event_id)
        logger.info("NGO %s moved event %s to %s", owner_id, event_id, target.value)
        return updated

    async def delete_event(self, event_id: str, actor_id: str | None) -> None:
        """Permanently remove the event. Registrations are not cleaned up elsewhere."""
        owner_id = require_actor(actor_id)
        event = await self.get_event(event_id)
        event.ensure_owned_by(owner_id, "delete")
        with translate_store_errors("delete_event"):
            await self.event_repo.delete(event_id)
        logger.info("NGO %s deleted event %s", owner_id, event_id)
