"""Event repository over any IDocumentStore (implements IEventRepository).

Documents keep the field names the mobile client reads and writes
(ngoId, slots, enrolledCount, registeredUsers, ...). Mapping to
EventEntity is the validation boundary: ledger fields are strict,
descriptive fields default to empty.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from eventlink.application.interfaces.store import (
    DEFAULT_TRANSACTION_DEADLINE,
    FieldFilter,
    IDocumentStore,
    Increment,
    ITransaction,
    Patch,
    StoredDocument,
)
from eventlink.domain.entities import EventEntity, unique_tags
from eventlink.domain.enums import EventStatus
from eventlink.domain.exceptions import CorruptDocumentException, ValidationException
from eventlink.domain.value_objects import parse_capacity
from eventlink.infrastructure.firebase.collections import COLLECTION_EVENTS
from eventlink.infrastructure.store.patching import apply_patch
from eventlink.shared.telemetry.logging import get_logger
from eventlink.shared.utils.datetime import ensure_utc, parse_event_date

logger = get_logger(__name__)

# Descriptive document field -> EventEntity attribute.
_TEXT_FIELDS: dict[str, str] = {
    "name": "name",
    "time": "time",
    "duration": "duration",
    "description": "description",
    "location": "location",
    "ngoName": "ngo_name",
    "activityType": "activity_type",
    "district": "district",
    "transport": "transport",
    "difficulty": "difficulty",
    "materials": "materials",
    "ngoInfo": "ngo_info",
    "ngoContact": "ngo_contact",
}


def _as_datetime(value: Any) -> datetime | None:
    """Timestamps written by this service decode as datetime; the mobile client wrote ISO strings."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    try:
        return ensure_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))
    except ValueError:
        return None


def _as_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def event_from_document(doc: StoredDocument) -> EventEntity:
    """Build an EventEntity from a stored document.

    Raises:
        CorruptDocumentException: If ngoId, slots, status, counters or date are malformed.
    """
    d = doc.data
    try:
        capacity = parse_capacity(d.get("slots"))
    except ValueError as e:
        raise CorruptDocumentException(
            "event", doc.id, "slots", f"invalid slots {d.get('slots')!r}"
        ) from e
    try:
        # Events written before close/reopen existed carry no status.
        status = EventStatus(d.get("status") or EventStatus.ACTIVE.value)
    except ValueError as e:
        raise CorruptDocumentException(
            "event", doc.id, "status", f"invalid status {d.get('status')!r}"
        ) from e
    enrolled = d.get("enrolledCount") or 0
    if isinstance(enrolled, bool) or not isinstance(enrolled, (int, float)):
        raise CorruptDocumentException(
            "event", doc.id, "enrolledCount", f"invalid enrolledCount {enrolled!r}"
        )
    try:
        event_date = parse_event_date(d.get("date"))
    except ValueError as e:
        raise CorruptDocumentException(
            "event", doc.id, "date", f"invalid date {d.get('date')!r}"
        ) from e
    text = {attr: str(d.get(key) or "") for key, attr in _TEXT_FIELDS.items()}
    try:
        return EventEntity(
            id=doc.id,
            ngo_id=str(d.get("ngoId") or ""),
            capacity=capacity,
            status=status,
            enrolled_count=int(enrolled),
            registered_users=unique_tags(_as_str_list(d.get("registeredUsers"))),
            event_date=event_date,
            languages=unique_tags(_as_str_list(d.get("languages"))),
            client_group=unique_tags(_as_str_list(d.get("clientGroup"))),
            created_at=_as_datetime(d.get("createdAt")),
            closed_at=_as_datetime(d.get("closedAt")),
            closed_by=d.get("closedBy"),
            opened_at=_as_datetime(d.get("openedAt")),
            opened_by=d.get("openedBy"),
            version=int(d.get("version") or 0),
            **text,
        )
    except ValidationException as e:
        raise CorruptDocumentException(
            "event", doc.id, e.details.get("field", ""), e.message
        ) from e


class EventRepository:
    """Event persistence in the events collection."""

    def __init__(self, store: IDocumentStore) -> None:
        self._store = store

    async def get_by_id(self, event_id: str) -> EventEntity | None:
        doc = await self._store.get_document(COLLECTION_EVENTS, event_id)
        if doc is None:
            return None
        return event_from_document(doc)

    async def create(self, fields: Mapping[str, Any]) -> EventEntity:
        """Insert fields as a new event; returns the entity with the generated id."""
        data = dict(fields)
        event_id = await self._store.create_document(COLLECTION_EVENTS, data)
        return event_from_document(StoredDocument(id=event_id, data=data))

    async def mutate(
        self,
        event_id: str,
        decide: Callable[[EventEntity], Patch],
        *,
        max_attempts: int | None = None,
        deadline: float = DEFAULT_TRANSACTION_DEADLINE,
    ) -> EventEntity | None:
        """Read-check-write in one store transaction; see IEventRepository.mutate."""

        async def _apply(tx: ITransaction) -> EventEntity | None:
            doc = await tx.get(COLLECTION_EVENTS, event_id)
            if doc is None:
                return None
            patch = {**decide(event_from_document(doc)), "version": Increment(1)}
            tx.update(COLLECTION_EVENTS, event_id, patch)
            return event_from_document(
                StoredDocument(id=doc.id, data=apply_patch(doc.data, patch))
            )

        return await self._store.run_transaction(
            _apply, max_attempts=max_attempts, deadline=deadline
        )

    async def delete(self, event_id: str) -> None:
        await self._store.delete_document(COLLECTION_EVENTS, event_id)

    async def _query(self, *filters: FieldFilter, descending: bool = False) -> list[EventEntity]:
        docs = await self._store.query_documents(
            COLLECTION_EVENTS, filters, order_by="date", descending=descending
        )
        events = []
        for doc in docs:
            try:
                events.append(event_from_document(doc))
            except CorruptDocumentException as e:
                logger.warning("Skipping unreadable event in listing: %s", e.message)
        return events

    async def list_all(self) -> list[EventEntity]:
        return await self._query()

    async def list_by_owner(self, ngo_id: str) -> list[EventEntity]:
        return await self._query(FieldFilter("ngoId", "==", ngo_id), descending=True)

    async def list_by_registrant(self, user_id: str) -> list[EventEntity]:
        return await self._query(FieldFilter("registeredUsers", "array-contains", user_id))
