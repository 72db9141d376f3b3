"""Registration ledger: register and unregister users, list attendees.

Register and unregister run as read-check-write transactions through
IEventRepository.mutate, so the capacity check and the membership write
see the same snapshot. Patches use atomic increments and array
union/remove; a concurrent commit between read and write forces a retry.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

from eventlink.application.interfaces.store import (
    DEFAULT_TRANSACTION_DEADLINE,
    ArrayRemove,
    ArrayUnion,
    Increment,
    Patch,
)
from eventlink.application.use_cases._guards import require_actor, translate_store_errors
from eventlink.domain.exceptions import EventNotFoundException
from eventlink.shared.telemetry.logging import get_logger
from eventlink.shared.utils.datetime import utc_today

if TYPE_CHECKING:
    from eventlink.application.interfaces.repositories import IEventRepository
    from eventlink.application.use_cases.events.attendees import AttendeeAggregator
    from eventlink.domain.entities import EventEntity, UserRecordEntity

logger = get_logger(__name__)


class RegistrationLedger:
    """Registration operations for one event store."""

    def __init__(
        self,
        event_repo: IEventRepository,
        attendees: AttendeeAggregator,
        *,
        max_attempts: int | None = None,
        transaction_deadline: float = DEFAULT_TRANSACTION_DEADLINE,
        block_closed: bool = True,
        block_completed: bool = True,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self.event_repo = event_repo
        self.attendees = attendees
        self.max_attempts = max_attempts
        self.transaction_deadline = transaction_deadline
        self.block_closed = block_closed
        self.block_completed = block_completed
        self._today = today

    async def register(self, event_id: str, actor_id: str | None) -> EventEntity:
        """Add actor_id to the event, consuming one slot.

        Raises:
            AuthenticationException: No actor.
            EventNotFoundException: Unknown event.
            AlreadyRegisteredException, CapacityExceededException,
            EventClosedException, EventCompletedException: Rule failures, in that order.
            TransientStoreException: Store failure, or contention past the transaction deadline.
        """
        user_id = require_actor(actor_id)
        today = self._today()

        def decide(event: EventEntity) -> Patch:
            event.ensure_can_register(
                user_id,
                today,
                block_closed=self.block_closed,
                block_completed=self.block_completed,
            )
            return {
                "enrolledCount": Increment(1),
                "registeredUsers": ArrayUnion(user_id),
            }

        with translate_store_errors("register"):
            updated = await self.event_repo.mutate(
                event_id,
                decide,
                max_attempts=self.max_attempts,
                deadline=self.transaction_deadline,
            )
        if updated is None:
            raise EventNotFoundException(event_id)
        logger.info(
            "User %s registered for event %s (%d enrolled)",
            user_id,
            event_id,
            updated.enrolled_count,
        )
        return updated

    async def unregister(self, event_id: str, actor_id: str | None) -> EventEntity:
        """Remove actor_id from the event, releasing its slot.

        Allowed regardless of status or date.

        Raises:
            AuthenticationException, EventNotFoundException,
            NotRegisteredException, TransientStoreException.
        """
        user_id = require_actor(actor_id)

        def decide(event: EventEntity) -> Patch:
            event.ensure_can_unregister(user_id)
            # Floor at zero if the stored counter already drifted.
            count = Increment(-1) if event.enrolled_count > 0 else 0
            return {
                "enrolledCount": count,
                "registeredUsers": ArrayRemove(user_id),
            }

        with translate_store_errors("unregister"):
            updated = await self.event_repo.mutate(
                event_id,
                decide,
                max_attempts=self.max_attempts,
                deadline=self.transaction_deadline,
            )
        if updated is None:
            raise EventNotFoundException(event_id)
        logger.info(
            "User %s unregistered from event %s (%d enrolled)",
            user_id,
            event_id,
            updated.enrolled_count,
        )
        return updated

    async def list_attendees(
        self, event_id: str, actor_id: str | None
    ) -> list[UserRecordEntity]:
        """Resolve registered users to user records, in registration order. Owner only."""
        owner_id = require_actor(actor_id)
        with translate_store_errors("list_attendees"):
            event = await self.event_repo.get_by_id(event_id)
        if event is None:
            raise EventNotFoundException(event_id)
        event.ensure_owned_by(owner_id, "list_attendees")
        return await self.attendees.resolve(event.registered_users)
