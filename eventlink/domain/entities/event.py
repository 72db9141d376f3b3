"""Event domain entity.

Represents an NGO-run community event and its registration ledger state,
independent of persistence. Entities are frozen snapshots; mutations are
expressed as store patches by the application layer and a fresh snapshot
is read back.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from eventlink.domain.enums import EventStatus
from eventlink.domain.exceptions import (
    AlreadyRegisteredException,
    CapacityExceededException,
    EventClosedException,
    EventCompletedException,
    ForbiddenException,
    InvalidTransitionException,
    NotRegisteredException,
    ValidationException,
)
from eventlink.domain.value_objects.core import Capacity


@dataclass(frozen=True)
class EventEntity:
    """Immutable snapshot of an event document.

    registered_users keeps store order (the order users joined) and is
    unique; enrolled_count is the denormalized size of that set.
    """

    id: str
    ngo_id: str
    name: str
    capacity: Capacity
    status: EventStatus = EventStatus.ACTIVE
    enrolled_count: int = 0
    registered_users: tuple[str, ...] = ()
    event_date: date | None = None
    time: str = ""
    duration: str = ""
    description: str = ""
    location: str = ""
    ngo_name: str = ""
    activity_type: str = ""
    district: str = ""
    transport: str = ""
    difficulty: str = ""
    materials: str = ""
    ngo_info: str = ""
    ngo_contact: str = ""
    languages: tuple[str, ...] = ()
    client_group: tuple[str, ...] = ()
    created_at: datetime | None = None
    closed_at: datetime | None = None
    closed_by: str | None = None
    opened_at: datetime | None = None
    opened_by: str | None = None
    version: int = 0
    _members: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_members", frozenset(self.registered_users))
        self.validate()

    def validate(self) -> None:
        """Validate structural rules. Raises ValidationException if invalid."""
        if not self.id:
            raise ValidationException("Event ID is required", field="id")
        if not self.ngo_id:
            raise ValidationException("Event must belong to an NGO", field="ngoId")
        if self.enrolled_count < 0:
            raise ValidationException(
                "Enrolled count cannot be negative", field="enrolledCount"
            )
        if len(self._members) != len(self.registered_users):
            raise ValidationException(
                "Registered users must be unique", field="registeredUsers"
            )

    def is_registered(self, user_id: str) -> bool:
        return user_id in self._members

    def is_closed(self) -> bool:
        return self.status is EventStatus.CLOSED

    def is_completed(self, today: date) -> bool:
        """Return True when the event date is strictly before today (day granularity).

        Events without a date are never completed.
        """
        return self.event_date is not None and self.event_date < today

    def spots_left(self) -> int | None:
        """Remaining slots, or None for unlimited capacity."""
        return self.capacity.remaining(self.enrolled_count)

    def is_owned_by(self, actor_id: str | None) -> bool:
        return bool(actor_id) and actor_id == self.ngo_id

    def ensure_owned_by(self, actor_id: str | None, action: str) -> None:
        """Raise ForbiddenException unless actor_id is the owning NGO."""
        if not self.is_owned_by(actor_id):
            raise ForbiddenException("event", action)

    def ensure_can_register(
        self,
        user_id: str,
        today: date,
        *,
        block_closed: bool = True,
        block_completed: bool = True,
    ) -> None:
        """Apply registration rules in order; the first failing rule raises.

        Order: already registered, capacity, closed, completed.

        Raises:
            AlreadyRegisteredException, CapacityExceededException,
            EventClosedException, EventCompletedException.
        """
        if self.is_registered(user_id):
            raise AlreadyRegisteredException(self.id, user_id)
        if not self.capacity.has_room(self.enrolled_count):
            raise CapacityExceededException(self.id, self.capacity.to_store())
        if block_closed and self.is_closed():
            raise EventClosedException(self.id)
        if block_completed and self.is_completed(today):
            raise EventCompletedException(self.id, self.event_date.isoformat())

    def ensure_can_unregister(self, user_id: str) -> None:
        """Raises NotRegisteredException if user_id has not joined this event."""
        if not self.is_registered(user_id):
            raise NotRegisteredException(self.id, user_id)

    def ensure_can_transition(self, target: EventStatus) -> None:
        """Raises InvalidTransitionException unless status may move to target."""
        if not self.status.can_transition_to(target):
            raise InvalidTransitionException(self.id, self.status.value, target.value)
