"""Read-side event listings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eventlink.application.use_cases._guards import require_actor, translate_store_errors

if TYPE_CHECKING:
    from eventlink.application.interfaces.repositories import IEventRepository
    from eventlink.domain.entities import EventEntity


class EventQueryService:
    def __init__(self, event_repo: IEventRepository) -> None:
        self.event_repo = event_repo

    async def list_events(self) -> list[EventEntity]:
        """All events, earliest date first."""
        with translate_store_errors("list_events"):
            return await self.event_repo.list_all()

    async def list_events_for_ngo(self, ngo_id: str | None) -> list[EventEntity]:
        """Events owned by ngo_id, latest date first."""
        owner_id = require_actor(ngo_id)
        with translate_store_errors("list_events_for_ngo"):
            return await self.event_repo.list_by_owner(owner_id)

    async def list_events_for_user(self, user_id: str | None) -> list[EventEntity]:
        """Events user_id is registered for, earliest date first."""
        uid = require_actor(user_id)
        with translate_store_errors("list_events_for_user"):
            return await self.event_repo.list_by_registrant(uid)
