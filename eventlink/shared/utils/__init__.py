"""Shared utilities: datetime and generators."""

from eventlink.shared.utils.datetime import (
    ensure_utc,
    parse_event_date,
    utc_now,
    utc_today,
)
from eventlink.shared.utils.generators import generate_cuid

__all__ = [
    "generate_cuid",
    "utc_now",
    "utc_today",
    "ensure_utc",
    "parse_event_date",
]
