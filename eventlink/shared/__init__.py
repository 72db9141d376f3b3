"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from eventlink.shared.context import bind_request_id, get_request_id, reset_request_id
from eventlink.shared.utils import (
    ensure_utc,
    generate_cuid,
    parse_event_date,
    utc_now,
    utc_today,
)

__all__ = [
    "bind_request_id",
    "get_request_id",
    "reset_request_id",
    "generate_cuid",
    "utc_now",
    "utc_today",
    "ensure_utc",
    "parse_event_date",
]
