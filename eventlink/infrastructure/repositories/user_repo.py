"""User record repository (implements IUserRecordRepository)."""

from __future__ import annotations

from eventlink.application.interfaces.store import IDocumentStore
from eventlink.domain.entities import UserRecordEntity
from eventlink.domain.enums import UserRole
from eventlink.infrastructure.firebase.collections import COLLECTION_USERS


class UserRecordRepository:
    """users/{uid} documents holding identity and role."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def get(self, uid: str) -> UserRecordEntity | None:
        """Return the user record, or None if not found."""
        doc = await self._store.get_document(COLLECTION_USERS, uid)
        if doc is None:
            return None
        data = doc.data
        role = str(data.get("role") or UserRole.USER.value).lower()
        return UserRecordEntity(
            uid=str(data.get("uid") or doc.id),
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            role=UserRole(role) if role in UserRole.values() else UserRole.USER,
        )

    async def save(self, record: UserRecordEntity) -> None:
        await self._store.set_document(
            COLLECTION_USERS,
            record.uid,
            {
                "uid": record.uid,
                "name": record.name,
                "email": record.email,
                "role": record.role.value,
            },
        )
