"""Store-agnostic helpers and the in-memory document store."""

from eventlink.infrastructure.store.memory import InMemoryDocumentStore
from eventlink.infrastructure.store.patching import apply_patch
from eventlink.infrastructure.store.transactions import TransactionRunner

__all__ = [
    "InMemoryDocumentStore",
    "TransactionRunner",
    "apply_patch",
]
