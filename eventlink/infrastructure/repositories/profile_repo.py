"""NGO profile repository (implements INgoProfileRepository)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from eventlink.application.interfaces.store import IDocumentStore, StoredDocument
from eventlink.domain.entities import NgoProfileEntity
from eventlink.infrastructure.firebase.collections import (
    COLLECTION_NGO_PROFILES,
    COLLECTION_NGOS,
)
from eventlink.shared.utils.datetime import ensure_utc, utc_now


def profile_to_document(profile: NgoProfileEntity) -> dict[str, Any]:
    return {
        "userId": profile.owner_id,
        "name": profile.name,
        "description": profile.description,
        "location": profile.location,
        "contact": profile.contact,
        "email": profile.email,
        "establishedYear": profile.established_year,
        "website": profile.website,
        "services": list(profile.services),
        "languages": list(profile.languages),
        "lastUpdated": profile.last_updated or utc_now(),
    }


def profile_from_document(doc: StoredDocument) -> NgoProfileEntity:
    d = doc.data
    last_updated = d.get("lastUpdated")
    return NgoProfileEntity(
        owner_id=str(d.get("userId") or doc.id),
        name=str(d.get("name") or ""),
        description=str(d.get("description") or ""),
        location=str(d.get("location") or ""),
        contact=str(d.get("contact") or ""),
        email=str(d.get("email") or ""),
        established_year=str(d.get("establishedYear") or ""),
        services=tuple(d.get("services") or ()),
        languages=tuple(d.get("languages") or ()),
        website=str(d.get("website") or ""),
        last_updated=ensure_utc(last_updated) if isinstance(last_updated, datetime) else None,
    )


class NgoProfileRepository:
    """Profiles live in ngoProfiles; the public directory copy lives in ngos."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def get(self, owner_id: str) -> NgoProfileEntity | None:
        doc = await self._store.get_document(COLLECTION_NGO_PROFILES, owner_id)
        if doc is None:
            return None
        return profile_from_document(doc)

    async def exists(self, owner_id: str) -> bool:
        return await self._store.get_document(COLLECTION_NGO_PROFILES, owner_id) is not None

    async def save(self, profile: NgoProfileEntity) -> None:
        data = profile_to_document(profile)
        await self._store.set_document(
            COLLECTION_NGO_PROFILES, profile.owner_id, data, merge=True
        )
        await self._store.set_document(
            COLLECTION_NGOS, profile.owner_id, {**data, "type": "NGO"}, merge=True
        )

    async def list_directory(self) -> list[dict[str, Any]]:
        docs = await self._store.query_documents(COLLECTION_NGOS)
        return [{"id": d.id, **d.data} for d in docs]
