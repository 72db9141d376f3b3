"""Event use cases: lifecycle, registration ledger, attendees, listings."""

from eventlink.application.use_cases.events.attendees import AttendeeAggregator
from eventlink.application.use_cases.events.lifecycle import EventLifecycleService
from eventlink.application.use_cases.events.queries import EventQueryService
from eventlink.application.use_cases.events.registration import RegistrationLedger

__all__ = [
    "AttendeeAggregator",
    "EventLifecycleService",
    "EventQueryService",
    "RegistrationLedger",
]
