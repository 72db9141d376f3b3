"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from eventlink.domain.entities import (
    EventEntity,
    NgoProfileEntity,
    UserRecordEntity,
)
from eventlink.domain.enums import EventStatus, UserRole
from eventlink.domain.exceptions import (
    AlreadyRegisteredException,
    AuthenticationException,
    CapacityExceededException,
    CorruptDocumentException,
    EventClosedException,
    EventCompletedException,
    EventLinkException,
    EventNotFoundException,
    ForbiddenException,
    InvalidTransitionException,
    NotRegisteredException,
    ProfileRequiredException,
    ResourceNotFoundException,
    TransientStoreException,
    ValidationException,
)
from eventlink.domain.value_objects import (
    Capacity,
    FiniteCapacity,
    UnlimitedCapacity,
    parse_capacity,
)

__all__ = [
    "AlreadyRegisteredException",
    "AuthenticationException",
    "Capacity",
    "CapacityExceededException",
    "CorruptDocumentException",
    "EventClosedException",
    "EventCompletedException",
    "EventEntity",
    "EventLinkException",
    "EventNotFoundException",
    "EventStatus",
    "FiniteCapacity",
    "ForbiddenException",
    "InvalidTransitionException",
    "NgoProfileEntity",
    "NotRegisteredException",
    "ProfileRequiredException",
    "ResourceNotFoundException",
    "TransientStoreException",
    "UnlimitedCapacity",
    "UserRecordEntity",
    "UserRole",
    "ValidationException",
    "parse_capacity",
]
