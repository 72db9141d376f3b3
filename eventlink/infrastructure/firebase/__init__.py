"""Firestore integration over the REST API."""

from eventlink.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from eventlink.infrastructure.firebase.document_store import FirestoreDocumentStore

__all__ = [
    "FirestoreDocumentStore",
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
]
