"""User record use cases (users/{uid})."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eventlink.application.use_cases._guards import require_actor, translate_store_errors
from eventlink.domain.entities import UserRecordEntity
from eventlink.domain.enums import UserRole
from eventlink.domain.exceptions import ResourceNotFoundException, ValidationException
from eventlink.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from eventlink.application.interfaces.repositories import IUserRecordRepository

logger = get_logger(__name__)


class UserRecordService:
    def __init__(self, user_repo: IUserRecordRepository) -> None:
        self.user_repo = user_repo

    async def create_user_record(
        self,
        actor_id: str | None,
        name: str,
        email: str,
        role: str | UserRole = UserRole.USER,
    ) -> UserRecordEntity:
        """Create or overwrite the actor's own users record."""
        uid = require_actor(actor_id)
        try:
            user_role = role if isinstance(role, UserRole) else UserRole(str(role).lower())
        except ValueError as e:
            raise ValidationException(
                f"Role must be one of {UserRole.values()}", field="role"
            ) from e
        record = UserRecordEntity(uid=uid, name=name.strip(), email=email.strip(), role=user_role)
        with translate_store_errors("create_user_record"):
            await self.user_repo.save(record)
        logger.info("User record saved for %s (role=%s)", uid, user_role.value)
        return record

    async def get_user_record(self, uid: str) -> UserRecordEntity:
        with translate_store_errors("get_user_record"):
            record = await self.user_repo.get(uid)
        if record is None:
            raise ResourceNotFoundException("user", uid)
        return record
