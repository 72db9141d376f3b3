"""NGO profile and user record API schemas."""

from typing import Any, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from eventlink.application.dtos.profile import SaveNgoProfileCommand
from eventlink.domain.entities import NgoProfileEntity, UserRecordEntity


class NgoProfileRequest(BaseModel):
    """Payload for PUT /ngos/me. Required fields are checked by the service."""

    name: str = ""
    description: str = ""
    location: str = ""
    contact: str = ""
    email: str = ""
    established_year: str = ""
    website: str = ""
    services: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)

    def to_command(self) -> SaveNgoProfileCommand:
        return SaveNgoProfileCommand(
            name=self.name,
            description=self.description,
            location=self.location,
            contact=self.contact,
            email=self.email,
            established_year=self.established_year,
            services=tuple(self.services),
            languages=tuple(self.languages),
            website=self.website,
        )


class NgoProfileResponse(BaseModel):
    owner_id: str
    name: str
    description: str
    location: str
    contact: str
    email: str
    established_year: str
    website: str
    services: list[str]
    languages: list[str]
    last_updated: AwareDatetime | None = None

    @classmethod
    def from_entity(cls, profile: NgoProfileEntity) -> "NgoProfileResponse":
        return cls(
            owner_id=profile.owner_id,
            name=profile.name,
            description=profile.description,
            location=profile.location,
            contact=profile.contact,
            email=profile.email,
            established_year=profile.established_year,
            website=profile.website,
            services=list(profile.services),
            languages=list(profile.languages),
            last_updated=profile.last_updated,
        )


class NgoDirectoryEntry(BaseModel):
    """Public NGO directory item; stored extra fields pass through."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    location: str = ""
    services: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    events_count: int = Field(0, alias="eventsCount")

    @classmethod
    def from_entry(cls, entry: dict[str, Any]) -> "NgoDirectoryEntry":
        return cls.model_validate(entry)


class UserRecordRequest(BaseModel):
    """Payload for PUT /me/user."""

    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    role: Literal["user", "ngo"] = "user"


class UserRecordResponse(BaseModel):
    uid: str
    name: str
    email: str
    role: str

    @classmethod
    def from_entity(cls, record: UserRecordEntity) -> "UserRecordResponse":
        return cls(uid=record.uid, name=record.name, email=record.email, role=record.role.value)
