"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
Repositories map store documents to domain entities and back.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

from eventlink.application.interfaces.store import DEFAULT_TRANSACTION_DEADLINE, Patch

if TYPE_CHECKING:
    from eventlink.domain.entities import (
        EventEntity,
        NgoProfileEntity,
        UserRecordEntity,
    )


class IEventRepository(Protocol):
    """Protocol for event repository (DIP)."""

    async def get_by_id(self, event_id: str) -> EventEntity | None:
        """Return the event, or None if not found."""

    async def create(self, fields: Mapping[str, Any]) -> EventEntity:
        """Insert a new event document; the store assigns the id."""

    async def mutate(
        self,
        event_id: str,
        decide: Callable[[EventEntity], Patch],
        *,
        max_attempts: int | None = None,
        deadline: float = DEFAULT_TRANSACTION_DEADLINE,
    ) -> EventEntity | None:
        """Read-check-write in one transaction.

        decide receives the current snapshot and either raises a domain error
        (nothing is written) or returns the patch to commit. Returns the
        committed snapshot, or None when the event does not exist.
        """

    async def delete(self, event_id: str) -> None:
        """Permanently remove the event document."""

    async def list_all(self) -> list[EventEntity]:
        """Return every event ordered by date ascending."""

    async def list_by_owner(self, ngo_id: str) -> list[EventEntity]:
        """Return an NGO's events ordered by date descending."""

    async def list_by_registrant(self, user_id: str) -> list[EventEntity]:
        """Return events the user is registered for, ordered by date ascending."""


class INgoProfileRepository(Protocol):
    """Protocol for NGO profiles and the public NGO directory."""

    async def get(self, owner_id: str) -> NgoProfileEntity | None:
        """Return the profile keyed by owner id."""

    async def exists(self, owner_id: str) -> bool:
        """Return whether the owner has saved a profile."""

    async def save(self, profile: NgoProfileEntity) -> None:
        """Merge profile into ngoProfiles and mirror it into the ngos directory."""

    async def list_directory(self) -> list[dict[str, Any]]:
        """Return public directory entries (id plus stored fields)."""


class IUserRecordRepository(Protocol):
    """Protocol for the users collection."""

    async def get(self, uid: str) -> UserRecordEntity | None:
        """Return the user record, or None if not found."""

    async def save(self, record: UserRecordEntity) -> None:
        """Create or overwrite the user record."""
