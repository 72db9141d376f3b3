"""NGO profile use cases: save own profile, read one, list the directory."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from eventlink.application.use_cases._guards import require_actor, translate_store_errors
from eventlink.domain.entities import NgoProfileEntity
from eventlink.domain.exceptions import ResourceNotFoundException
from eventlink.shared.telemetry.logging import get_logger
from eventlink.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from eventlink.application.dtos.profile import SaveNgoProfileCommand
    from eventlink.application.interfaces.repositories import (
        IEventRepository,
        INgoProfileRepository,
    )

logger = get_logger(__name__)


class NgoProfileService:
    """Profiles are keyed by the owner's user id; saving one enables event creation."""

    def __init__(
        self, profile_repo: INgoProfileRepository, event_repo: IEventRepository
    ) -> None:
        self.profile_repo = profile_repo
        self.event_repo = event_repo

    async def save_ngo_profile(
        self, actor_id: str | None, command: SaveNgoProfileCommand
    ) -> NgoProfileEntity:
        """Validate and merge the actor's profile into ngoProfiles and the ngos directory.

        Raises:
            AuthenticationException: No actor.
            ValidationException: A required field is empty.
        """
        owner_id = require_actor(actor_id)
        profile = NgoProfileEntity(
            owner_id=owner_id,
            name=command.name.strip(),
            description=command.description.strip(),
            location=command.location.strip(),
            contact=command.contact.strip(),
            email=command.email.strip(),
            established_year=command.established_year.strip(),
            services=tuple(command.services),
            languages=tuple(command.languages),
            website=command.website.strip(),
            last_updated=utc_now(),
        )
        with translate_store_errors("save_ngo_profile"):
            await self.profile_repo.save(profile)
        logger.info("NGO %s saved profile", owner_id)
        return profile

    async def get_ngo_profile(self, owner_id: str) -> NgoProfileEntity:
        with translate_store_errors("get_ngo_profile"):
            profile = await self.profile_repo.get(owner_id)
        if profile is None:
            raise ResourceNotFoundException("ngo_profile", owner_id)
        return profile

    async def list_ngos(self) -> list[dict[str, Any]]:
        """Directory entries with eventsCount = number of events the NGO owns."""
        with translate_store_errors("list_ngos"):
            entries = await self.profile_repo.list_directory()
            events = await self.event_repo.list_all()
        counts = Counter(e.ngo_id for e in events)
        return [{**entry, "eventsCount": counts.get(entry["id"], 0)} for entry in entries]
