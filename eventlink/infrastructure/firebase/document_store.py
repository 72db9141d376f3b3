"""Firestore-backed document store (implements IDocumentStore).

Patches are sent as a single :commit write: literal fields go in the
update mask, atomic operations become field transforms, so increments and
array union/remove are applied by the server without a read-modify-write
window. Transactions read with a transaction id and commit with an
updateTime precondition per document read; a lost race surfaces as
ABORTED or FAILED_PRECONDITION and is retried by TransactionRunner.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from eventlink.application.interfaces.store import (
    ArrayRemove,
    ArrayUnion,
    DocumentNotFoundError,
    FieldFilter,
    Increment,
    Patch,
    StoredDocument,
    StoreError,
    TransactionConflictError,
)
from eventlink.infrastructure.firebase._rest_client import (
    DocumentExistsError,
    DocumentSnapshot,
    FirestoreAPIError,
    FirestoreRESTClient,
)
from eventlink.infrastructure.firebase._rest_encoding import (
    encode_fields,
    encode_transform,
)
from eventlink.infrastructure.store.transactions import TransactionRunner
from eventlink.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

_CONFLICT_STATUSES = frozenset({"ABORTED", "FAILED_PRECONDITION"})


def _to_stored(snapshot: DocumentSnapshot | None) -> StoredDocument | None:
    if snapshot is None:
        return None
    return StoredDocument(
        id=snapshot.id,
        data=dict(snapshot.to_dict()),
        update_time=snapshot.update_time,
    )


def build_update_write(
    document_name: str, patch: Patch, precondition: dict[str, Any]
) -> dict[str, Any]:
    """Build a Firestore Write for patch (literals in the mask, ops as transforms)."""
    literals = {
        k: v
        for k, v in patch.items()
        if not isinstance(v, (Increment, ArrayUnion, ArrayRemove))
    }
    transforms = [
        encode_transform(k, v)
        for k, v in patch.items()
        if isinstance(v, (Increment, ArrayUnion, ArrayRemove))
    ]
    write: dict[str, Any] = {
        "update": {"name": document_name, **encode_fields(literals)},
        "updateMask": {"fieldPaths": list(literals)},
        "currentDocument": precondition,
    }
    if transforms:
        write["updateTransforms"] = transforms
    return write


@dataclass
class _FirestoreTransaction:
    store: "FirestoreDocumentStore"
    transaction_id: str
    read_times: dict[str, str | None] = field(default_factory=dict)
    writes: list[dict[str, Any]] = field(default_factory=list)
    finished: bool = False

    async def get(self, collection: str, document_id: str) -> StoredDocument | None:
        ref = self.store._client.collection(collection).document(document_id)
        try:
            snapshot = await ref.get(transaction=self.transaction_id)
        except FirestoreAPIError as e:
            raise self.store._translate(e, "transaction read") from e
        self.read_times[ref.name] = snapshot.update_time if snapshot else None
        return _to_stored(snapshot)

    def update(self, collection: str, document_id: str, patch: Patch) -> None:
        ref = self.store._client.collection(collection).document(document_id)
        seen = self.read_times.get(ref.name)
        precondition = {"updateTime": seen} if seen else {"exists": True}
        self.writes.append(build_update_write(ref.name, patch, precondition))


class FirestoreDocumentStore(TransactionRunner):
    """IDocumentStore over the Firestore REST API."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client

    @staticmethod
    def _translate(error: FirestoreAPIError, operation: str) -> StoreError:
        if error.status in _CONFLICT_STATUSES:
            return TransactionConflictError(f"{operation}: {error}")
        return StoreError(f"{operation} failed: {error}")

    async def get_document(
        self, collection: str, document_id: str
    ) -> StoredDocument | None:
        try:
            snapshot = await self._client.collection(collection).document(document_id).get()
        except FirestoreAPIError as e:
            raise StoreError(f"get {collection}/{document_id} failed: {e}") from e
        return _to_stored(snapshot)

    async def create_document(
        self,
        collection: str,
        fields: Mapping[str, Any],
        document_id: str | None = None,
    ) -> str:
        try:
            return await self._client.collection(collection).add(dict(fields), document_id)
        except DocumentExistsError as e:
            raise ValueError(f"Document already exists: {collection}/{document_id}") from e
        except FirestoreAPIError as e:
            raise StoreError(f"create in {collection} failed: {e}") from e

    async def set_document(
        self,
        collection: str,
        document_id: str,
        fields: Mapping[str, Any],
        *,
        merge: bool = False,
    ) -> None:
        try:
            await self._client.collection(collection).document(document_id).set(
                dict(fields), merge=merge
            )
        except FirestoreAPIError as e:
            raise StoreError(f"set {collection}/{document_id} failed: {e}") from e

    async def update_document(
        self, collection: str, document_id: str, patch: Patch
    ) -> None:
        ref = self._client.collection(collection).document(document_id)
        write = build_update_write(ref.name, patch, {"exists": True})
        try:
            await self._client.commit([write])
        except FirestoreAPIError as e:
            if e.status in ("FAILED_PRECONDITION", "NOT_FOUND"):
                raise DocumentNotFoundError(collection, document_id) from e
            raise StoreError(f"update {collection}/{document_id} failed: {e}") from e

    async def delete_document(self, collection: str, document_id: str) -> None:
        try:
            await self._client.collection(collection).document(document_id).delete()
        except FirestoreAPIError as e:
            raise StoreError(f"delete {collection}/{document_id} failed: {e}") from e

    async def query_documents(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        q = self._client.collection(collection).query()
        for f in filters:
            q = q.where(f.field, f.op, f.value)
        if order_by is not None:
            q = q.order_by(order_by, "DESCENDING" if descending else "ASCENDING")
        if limit is not None:
            q = q.limit(limit)
        results: list[StoredDocument] = []
        try:
            async for snapshot in q.stream():
                results.append(_to_stored(snapshot))
        except FirestoreAPIError as e:
            raise StoreError(f"query {collection} failed: {e}") from e
        return results

    async def _begin_transaction(self) -> _FirestoreTransaction:
        try:
            tx_id = await self._client.begin_transaction()
        except FirestoreAPIError as e:
            raise StoreError(f"beginTransaction failed: {e}") from e
        return _FirestoreTransaction(self, tx_id)

    async def _commit_transaction(self, tx: _FirestoreTransaction) -> None:
        tx.finished = True
        try:
            await self._client.commit(tx.writes, transaction=tx.transaction_id)
        except FirestoreAPIError as e:
            raise self._translate(e, "commit") from e

    async def _rollback_transaction(self, tx: _FirestoreTransaction) -> None:
        # A failed commit already ends the transaction server-side.
        if tx.finished:
            return
        tx.finished = True
        try:
            await self._client.rollback(tx.transaction_id)
        except FirestoreAPIError:
            logger.warning("Rollback of transaction failed; it will expire server-side")
