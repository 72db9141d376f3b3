"""Document store port.

Minimal contract the ledger needs from a schemaless document store:
get/create/set/update/delete/query plus optimistic transactions. Patch
values are either literals (field assignment) or one of the atomic field
operations below, which the store applies server-side without a
read-modify-write window.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

T = TypeVar("T")

# Seconds a transaction keeps retrying conflicts before giving up.
DEFAULT_TRANSACTION_DEADLINE = 10.0


@dataclass(frozen=True)
class Increment:
    """Atomically add delta to a numeric field (missing field counts as 0)."""

    delta: int


@dataclass(frozen=True, init=False)
class ArrayUnion:
    """Atomically add values to an array field, skipping values already present."""

    values: tuple[Any, ...]

    def __init__(self, *values: Any) -> None:
        object.__setattr__(self, "values", tuple(values))


@dataclass(frozen=True, init=False)
class ArrayRemove:
    """Atomically remove every occurrence of values from an array field."""

    values: tuple[Any, ...]

    def __init__(self, *values: Any) -> None:
        object.__setattr__(self, "values", tuple(values))


FieldOperation = Increment | ArrayUnion | ArrayRemove
Patch = Mapping[str, Any]


@dataclass(frozen=True)
class FieldFilter:
    """Single-field query predicate. op is '==' or 'array-contains'."""

    field: str
    op: str
    value: Any


@dataclass(frozen=True)
class StoredDocument:
    """Document as read from the store (id + decoded fields)."""

    id: str
    data: dict[str, Any] = field(default_factory=dict)
    update_time: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return dict(self.data)


class StoreError(Exception):
    """Store or transport failure (network, timeout, unexpected response)."""


class DocumentNotFoundError(StoreError):
    """Raised by update_document when the target document does not exist."""

    def __init__(self, collection: str, document_id: str) -> None:
        super().__init__(f"Document not found: {collection}/{document_id}")
        self.collection = collection
        self.document_id = document_id


class TransactionConflictError(StoreError):
    """Raised when a transaction commit loses to a concurrent write."""


class ITransaction(Protocol):
    """Read-then-write unit; writes are buffered until commit."""

    async def get(self, collection: str, document_id: str) -> StoredDocument | None:
        """Read a document and record it for the commit precondition."""

    def update(self, collection: str, document_id: str, patch: Patch) -> None:
        """Buffer an update; applied atomically at commit if no read changed."""


class IDocumentStore(Protocol):
    """Protocol for the document store (DIP)."""

    async def get_document(
        self, collection: str, document_id: str
    ) -> StoredDocument | None:
        """Return the document, or None if not found."""

    async def create_document(
        self,
        collection: str,
        fields: Mapping[str, Any],
        document_id: str | None = None,
    ) -> str:
        """Create a document and return its id (generated when document_id is None)."""

    async def set_document(
        self,
        collection: str,
        document_id: str,
        fields: Mapping[str, Any],
        *,
        merge: bool = False,
    ) -> None:
        """Create or overwrite a document; merge=True keeps fields not in fields."""

    async def update_document(
        self, collection: str, document_id: str, patch: Patch
    ) -> None:
        """Apply literal assignments and atomic field operations to an existing document."""

    async def delete_document(self, collection: str, document_id: str) -> None:
        """Delete a document. Idempotent."""

    async def query_documents(
        self,
        collection: str,
        filters: Sequence[FieldFilter] = (),
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[StoredDocument]:
        """Return documents matching all filters, optionally ordered and limited."""

    async def run_transaction(
        self,
        callback: Callable[[ITransaction], Awaitable[T]],
        *,
        max_attempts: int | None = None,
        deadline: float = DEFAULT_TRANSACTION_DEADLINE,
    ) -> T:
        """Run callback in a transaction, retrying on TransactionConflictError.

        Retries stop after deadline seconds, or after max_attempts when given.
        """
