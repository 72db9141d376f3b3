"""Application use cases: one entry point per workflow."""

from eventlink.application.use_cases.events import (
    AttendeeAggregator,
    EventLifecycleService,
    EventQueryService,
    RegistrationLedger,
)
from eventlink.application.use_cases.profiles import (
    NgoProfileService,
    UserRecordService,
)

__all__ = [
    "AttendeeAggregator",
    "EventLifecycleService",
    "EventQueryService",
    "NgoProfileService",
    "RegistrationLedger",
    "UserRecordService",
]
