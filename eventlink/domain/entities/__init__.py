"""Domain entities."""

from eventlink.domain.entities.event import EventEntity
from eventlink.domain.entities.profile import (
    NgoProfileEntity,
    UserRecordEntity,
    unique_tags,
)

__all__ = [
    "EventEntity",
    "NgoProfileEntity",
    "UserRecordEntity",
    "unique_tags",
]
