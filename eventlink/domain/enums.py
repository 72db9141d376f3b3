"""Domain enumerations for eventlink.

Enums represent fixed sets of domain values (event status, user role).
"""

from enum import Enum


class EventStatus(str, Enum):
    """Event lifecycle status.

    Independent of capacity exhaustion and of the derived 'completed'
    overlay (event date in the past). Only the owning NGO moves an event
    between states.
    """

    ACTIVE = "active"
    CLOSED = "closed"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [status.value for status in cls]

    def can_transition_to(self, target: "EventStatus") -> bool:
        """Return whether the owner may move an event from this status to target."""
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[EventStatus, frozenset[EventStatus]] = {
    EventStatus.ACTIVE: frozenset({EventStatus.CLOSED}),
    EventStatus.CLOSED: frozenset({EventStatus.ACTIVE}),
}


class UserRole(str, Enum):
    """Role stored on the users record at sign-up."""

    USER = "user"
    NGO = "ngo"

    @classmethod
    def values(cls) -> list[str]:
        return [role.value for role in cls]
