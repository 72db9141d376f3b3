"""Application ports: repository, store, and service protocols."""

from eventlink.application.interfaces.repositories import (
    IEventRepository,
    INgoProfileRepository,
    IUserRecordRepository,
)
from eventlink.application.interfaces.services import IIdentityProvider
from eventlink.application.interfaces.store import (
    ArrayRemove,
    ArrayUnion,
    DocumentNotFoundError,
    FieldFilter,
    IDocumentStore,
    Increment,
    ITransaction,
    Patch,
    StoredDocument,
    StoreError,
    TransactionConflictError,
)

__all__ = [
    "ArrayRemove",
    "ArrayUnion",
    "DocumentNotFoundError",
    "FieldFilter",
    "IDocumentStore",
    "IEventRepository",
    "IIdentityProvider",
    "INgoProfileRepository",
    "ITransaction",
    "IUserRecordRepository",
    "Increment",
    "Patch",
    "StoreError",
    "StoredDocument",
    "TransactionConflictError",
]
