"""Domain value objects."""

from eventlink.domain.value_objects.core import (
    UNLIMITED_SENTINEL,
    Capacity,
    FiniteCapacity,
    UnlimitedCapacity,
    parse_capacity,
)

__all__ = [
    "UNLIMITED_SENTINEL",
    "Capacity",
    "FiniteCapacity",
    "UnlimitedCapacity",
    "parse_capacity",
]
