"""Domain value objects for eventlink.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Union

UNLIMITED_SENTINEL = "unlimited"


@dataclass(frozen=True)
class FiniteCapacity:
    """Capacity with a fixed number of slots (at least one)."""

    slots: int

    def __post_init__(self) -> None:
        if isinstance(self.slots, bool) or not isinstance(self.slots, int):
            raise ValueError("Capacity slots must be an integer")
        if self.slots < 1:
            raise ValueError("Capacity must be a positive number of slots")

    @property
    def is_unlimited(self) -> bool:
        return False

    def has_room(self, enrolled: int) -> bool:
        """Return whether one more registrant fits given the current count."""
        return enrolled < self.slots

    def remaining(self, enrolled: int) -> int:
        """Return slots left (never negative, even if overbooked)."""
        return max(self.slots - enrolled, 0)

    def to_store(self) -> int:
        return self.slots


@dataclass(frozen=True)
class UnlimitedCapacity:
    """Capacity without an upper bound. Membership uniqueness still applies."""

    is_unlimited: ClassVar[bool] = True

    def has_room(self, enrolled: int) -> bool:
        return True

    def remaining(self, enrolled: int) -> None:
        return None

    def to_store(self) -> str:
        return UNLIMITED_SENTINEL


Capacity = Union[FiniteCapacity, UnlimitedCapacity]


def parse_capacity(raw: Any) -> Capacity:
    """Build a Capacity from its stored or submitted form.

    Accepts a positive int, a numeric string (the mobile client sometimes
    sent picker values as strings), or the 'unlimited' sentinel.

    Raises:
        ValueError: If raw is missing, non-numeric, or not positive.
    """
    if isinstance(raw, (FiniteCapacity, UnlimitedCapacity)):
        return raw
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text == UNLIMITED_SENTINEL:
            return UnlimitedCapacity()
        if not text.isdigit():
            raise ValueError(f"Invalid capacity: {raw!r}")
        return FiniteCapacity(int(text))
    if isinstance(raw, float) and raw.is_integer():
        return FiniteCapacity(int(raw))
    if isinstance(raw, int) and not isinstance(raw, bool):
        return FiniteCapacity(raw)
    raise ValueError(f"Invalid capacity: {raw!r}")
