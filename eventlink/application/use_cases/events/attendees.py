"""Attendee aggregation: bounded concurrent lookup of user records."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import TYPE_CHECKING

from eventlink.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from eventlink.application.interfaces.repositories import IUserRecordRepository
    from eventlink.domain.entities import UserRecordEntity

logger = get_logger(__name__)


class AttendeeAggregator:
    """Fetches user records for a list of ids.

    A missing record or a failed lookup drops that id (logged) instead of
    failing the whole list.
    """

    def __init__(self, user_repo: IUserRecordRepository, concurrency: int = 10) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.user_repo = user_repo
        self.concurrency = concurrency

    async def resolve(self, user_ids: Sequence[str]) -> list[UserRecordEntity]:
        if not user_ids:
            return []
        semaphore = asyncio.Semaphore(self.concurrency)

        async def _fetch(uid: str) -> UserRecordEntity | None:
            async with semaphore:
                return await self.user_repo.get(uid)

        results = await asyncio.gather(
            *(_fetch(uid) for uid in user_ids), return_exceptions=True
        )
        attendees: list[UserRecordEntity] = []
        for uid, result in zip(user_ids, results):
            if isinstance(result, Exception):
                logger.warning("Skipping attendee %s: lookup failed: %s", uid, result)
                continue
            if isinstance(result, BaseException):
                raise result
            if result is None:
                logger.warning("Skipping attendee %s: no user record", uid)
                continue
            attendees.append(result)
        return attendees
