"""DTOs for event use cases (no dependency on the store or presentation schemas)."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CreateEventCommand:
    """Input for creating an event. slots is raw (int, digit string or 'unlimited').

    ngo_name, ngo_info and ngo_contact default from the owner's NGO profile
    when left empty.
    """

    name: str
    slots: Any
    date: str
    time: str = ""
    duration: str = ""
    description: str = ""
    location: str = ""
    activity_type: str = ""
    district: str = ""
    transport: str = ""
    difficulty: str = ""
    materials: str = ""
    ngo_name: str = ""
    ngo_info: str = ""
    ngo_contact: str = ""
    languages: tuple[str, ...] = field(default_factory=tuple)
    client_group: tuple[str, ...] = field(default_factory=tuple)
