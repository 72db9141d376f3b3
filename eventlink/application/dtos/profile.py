"""DTOs for NGO profile and user record use cases."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SaveNgoProfileCommand:
    """Input for saving the caller's NGO profile (full replace of form fields)."""

    name: str
    description: str
    location: str
    contact: str
    email: str
    established_year: str
    services: tuple[str, ...] = field(default_factory=tuple)
    languages: tuple[str, ...] = field(default_factory=tuple)
    website: str = ""
