"""In-process document store (STORE_BACKEND=memory).

Implements the same contract as the Firestore store: atomic patches,
generated ids, simple queries, and optimistic transactions that fail on
commit if any document read in the transaction changed since. Every
call yields to the event loop once, like a network round trip, so
concurrent requests interleave the way they do against a remote store.
"""

from __future__ import annotations

import asyncio
import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from eventlink.application.interfaces.store import (
    DocumentNotFoundError,
    FieldFilter,
    Patch,
    StoredDocument,
    TransactionConflictError,
)
from eventlink.infrastructure.store.patching import apply_patch
from eventlink.infrastructure.store.transactions import TransactionRunner
from eventlink.shared.utils.generators import generate_cuid


@dataclass
class _Entry:
    data: dict[str, Any]
    revision: int


@dataclass
class _MemoryTransaction:
    store: "InMemoryDocumentStore"
    reads: dict[tuple[str, str], int | None] = field(default_factory=dict)
    writes: list[tuple[str, str, Patch]] = field(default_factory=list)

    async def get(self, collection: str, document_id: str) -> StoredDocument | None:
        await asyncio.sleep(0)
        entry = self.store._entry(collection, document_id)
        self.reads[(collection, document_id)] = entry.revision if entry else None
        return self.store._snapshot(document_id, entry)

    def update(self, collection: str, document_id: str, patch: Patch) -> None:
        self.writes.append((collection, document_id, dict(patch)))


def _matches(data: dict[str, Any], flt: FieldFilter) -> bool:
    value = data.get(flt.field)
    if flt.op == "==":
        return value == flt.value
    if flt.op in ("array-contains", "array_contains"):
        return isinstance(value, list) and flt.value in value
    raise ValueError(f"Unsupported filter operator: {flt.op!r}")


class InMemoryDocumentStore(TransactionRunner):
    """Dict-backed store for local development and tests."""

    def __init__(self, *, retry_base_delay: float | None = None) -> None:
        self._collections: dict[str, dict[str, _Entry]] = {}
        self._revision = 0
        self._lock = asyncio.Lock()
        if retry_base_delay is not None:
            self.retry_base_delay = retry_base_delay

    def _entry(self, collection: str, document_id: str) -> _Entry | None:
        return self._collections.get(collection, {}).get(document_id)

    def _next_revision(self) -> int:
        self._revision += 1
        return self._revision

    @staticmethod
    def _snapshot(document_id: str, entry: _Entry | None) -> StoredDocument | None:
        if entry is None:
            return None
        return StoredDocument(
            id=document_id,
            data=copy.deepcopy(entry.data),
            update_time=str(entry.revision),
        )

    async def get_document(
        self, collection: str, document_id: str
    ) -> StoredDocument | None:
        await asyncio.sleep(0)
        return self._snapshot(document_id, self._entry(collection, document_id))

    async def create_document(
        self,
        collection: str,
        fields: Mapping[str, Any],
        document_id: str | None = None,
    ) -> str:
        await asyncio.sleep(0)
        doc_id = document_id or generate_cuid()
        async with self._lock:
            docs = self._collections.setdefault(collection, {})
            if doc_id in docs:
                raise ValueError(f"Document already exists: {collection}/{doc_id}")
            docs[doc_id] = _Entry(copy.deepcopy(dict(fields)), self._next_revision())
        return doc_id

    async def set_document(
        self,
        collection: str,
        document_id: str,
        fields: Mapping[str, Any],
        *,
        merge: bool = False,
    ) -> None:
        await asyncio.sleep(0)
        async with self._lock:
            docs = self._collections.setdefault(collection, {})
            existing = docs.get(document_id)
            data = dict(existing.data) if (merge and existing) else {}
            data.update(copy.deepcopy(dict(fields)))
            docs[document_id] = _Entry(data, self._next_revision())

    async def update_document(
        self, collection: str, document_id: str, patch: Patch
    ) -> None:
        await asyncio.sleep(0)
        async with self._lock:
            entry = self._entry(collection, document_id)
            if entry is None:
                raise DocumentNotFoundError(collection, document_id)
            entry.data = apply_patch(entry.data, patch)
            entry.revision = self._next_revision()

    async def delete_document(self, collection: str, document_id: str) -> None:
        await asyncio.sleep(0)
        async with self._lock:
            self._collections.get(collection, {}).pop(document_id, None)

    async def query_documents(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        await asyncio.sleep(0)
        rows = [
            (doc_id, entry)
            for doc_id, entry in self._collections.get(collection, {}).items()
            if all(_matches(entry.data, f) for f in filters)
        ]
        if order_by is not None:
            # Firestore omits documents that lack the order-by field.
            rows = [r for r in rows if r[1].data.get(order_by) is not None]
            rows.sort(key=lambda r: r[1].data[order_by], reverse=descending)
        if limit is not None:
            rows = rows[:limit]
        return [self._snapshot(doc_id, entry) for doc_id, entry in rows]

    async def _begin_transaction(self) -> _MemoryTransaction:
        return _MemoryTransaction(self)

    async def _commit_transaction(self, tx: _MemoryTransaction) -> None:
        await asyncio.sleep(0)
        async with self._lock:
            for (collection, document_id), seen in tx.reads.items():
                entry = self._entry(collection, document_id)
                current = entry.revision if entry else None
                if current != seen:
                    raise TransactionConflictError(
                        f"{collection}/{document_id} changed during transaction"
                    )
            for collection, document_id, _ in tx.writes:
                if self._entry(collection, document_id) is None:
                    raise DocumentNotFoundError(collection, document_id)
            for collection, document_id, patch in tx.writes:
                entry = self._entry(collection, document_id)
                entry.data = apply_patch(entry.data, patch)
                entry.revision = self._next_revision()

    async def _rollback_transaction(self, tx: _MemoryTransaction) -> None:
        tx.writes.clear()
