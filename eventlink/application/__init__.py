"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (document store, repositories, identity).
"""

from eventlink.application.interfaces import (
    IDocumentStore,
    IEventRepository,
    IIdentityProvider,
    INgoProfileRepository,
    IUserRecordRepository,
)
from eventlink.application.use_cases import (
    AttendeeAggregator,
    EventLifecycleService,
    EventQueryService,
    NgoProfileService,
    RegistrationLedger,
    UserRecordService,
)

__all__ = [
    "AttendeeAggregator",
    "EventLifecycleService",
    "EventQueryService",
    "IDocumentStore",
    "IEventRepository",
    "IIdentityProvider",
    "INgoProfileRepository",
    "IUserRecordRepository",
    "NgoProfileService",
    "RegistrationLedger",
    "UserRecordService",
]
