"""Store-agnostic repositories mapping documents to domain entities."""

from eventlink.infrastructure.repositories.event_repo import (
    EventRepository,
    event_from_document,
)
from eventlink.infrastructure.repositories.profile_repo import NgoProfileRepository
from eventlink.infrastructure.repositories.user_repo import UserRecordRepository

__all__ = [
    "EventRepository",
    "NgoProfileRepository",
    "UserRecordRepository",
    "event_from_document",
]
