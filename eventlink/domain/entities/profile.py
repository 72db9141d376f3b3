"""NGO profile and user record entities.

Profiles are plain display/contact records. The ledger only needs to know
that an NGO profile exists (gate for event creation) and to resolve user
records for attendee lists.
"""

from dataclasses import dataclass
from datetime import datetime

from eventlink.domain.enums import UserRole
from eventlink.domain.exceptions import ValidationException


def unique_tags(values: list[str] | tuple[str, ...]) -> tuple[str, ...]:
    """Strip, drop empties and duplicates, keeping first occurrence order."""
    seen: dict[str, None] = {}
    for v in values:
        tag = v.strip()
        if tag and tag not in seen:
            seen[tag] = None
    return tuple(seen)


@dataclass(frozen=True)
class NgoProfileEntity:
    """NGO profile keyed by the owner's user id."""

    owner_id: str
    name: str
    description: str
    location: str
    contact: str
    email: str
    established_year: str
    services: tuple[str, ...]
    languages: tuple[str, ...]
    website: str = ""
    last_updated: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "services", unique_tags(self.services))
        object.__setattr__(self, "languages", unique_tags(self.languages))
        self.validate()

    def validate(self) -> None:
        """Require every field the NGO profile form required."""
        if not self.owner_id:
            raise ValidationException("Profile owner is required", field="userId")
        for attr, label in (
            ("name", "NGO name"),
            ("description", "description"),
            ("location", "location"),
            ("contact", "contact number"),
            ("email", "email"),
            ("established_year", "established year"),
        ):
            if not getattr(self, attr).strip():
                raise ValidationException(f"Please enter {label}", field=attr)
        if not self.services:
            raise ValidationException(
                "Please select at least one service", field="services"
            )
        if not self.languages:
            raise ValidationException(
                "Please select at least one language", field="languages"
            )


@dataclass(frozen=True)
class UserRecordEntity:
    """Row of the users collection: identity plus role."""

    uid: str
    name: str
    email: str
    role: UserRole = UserRole.USER

    def __post_init__(self) -> None:
        if not self.uid:
            raise ValidationException("User id is required", field="uid")
