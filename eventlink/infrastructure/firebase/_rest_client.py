"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Covers the calls the document store needs: document get/create/patch/delete,
runQuery, and the transactional trio beginTransaction / commit / rollback.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from eventlink.infrastructure.firebase._rest_encoding import (
    decode_fields,
    encode_fields,
    encode_value,
)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


class FirestoreAPIError(Exception):
    """Non-success Firestore response or transport failure.

    status is the google.rpc status name when the body carries one
    (e.g. 'ABORTED', 'ALREADY_EXISTS', 'FAILED_PRECONDITION').
    """

    def __init__(self, message: str, status_code: int | None = None, status: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.status = status


class DocumentExistsError(FirestoreAPIError):
    """Raised when createDocument returns 409 ALREADY_EXISTS."""


def _error_status(resp: httpx.Response) -> tuple[str | None, str]:
    try:
        err = resp.json()
        if isinstance(err, list):
            err = err[0] if err else {}
        body = err.get("error") or {}
        return body.get("status"), body.get("message") or resp.text
    except (ValueError, AttributeError):
        return None, resp.text


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    params: list[tuple[str, str]] | None = None,
    access_token: str | None = None,
    missing_ok: bool = True,
) -> Any:
    """Perform async HTTP request to Firestore REST API.

    A 404 returns None for document reads and deletes (missing_ok); for RPCs
    such as :commit it means a write targeted a missing document and raises.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    try:
        resp = await client.request(
            method, url, headers=headers, json=body, params=params
        )
    except httpx.TimeoutException as e:
        raise FirestoreAPIError(f"Firestore request timed out: {method} {url}") from e
    except httpx.TransportError as e:
        raise FirestoreAPIError(f"Firestore transport error: {e!s}") from e
    if resp.status_code == 404 and missing_ok:
        return None
    if resp.status_code not in (200, 204):
        status, message = _error_status(resp)
        if status == "ALREADY_EXISTS":
            raise DocumentExistsError(message, resp.status_code, status)
        raise FirestoreAPIError(message, resp.status_code, status)
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


class DocumentSnapshot:
    """Snapshot of a document (id + data + server update time)."""

    def __init__(self, id_: str, data: dict, update_time: str | None = None):
        self.id = id_
        self._data = data
        self.update_time = update_time

    def to_dict(self) -> dict:
        return self._data

    @classmethod
    def from_resource(cls, doc: dict) -> "DocumentSnapshot":
        name = doc.get("name", "")
        doc_id = name.split("/")[-1] if name else ""
        return cls(doc_id, decode_fields(doc), doc.get("updateTime"))


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def name(self) -> str:
        """Full resource name, as used in :commit writes."""
        return self._path

    async def set(self, data: dict[str, Any], *, merge: bool = False) -> None:
        """Create or overwrite the document; merge=True only touches the given fields."""
        params = [("updateMask.fieldPaths", k) for k in data] if merge else None
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="PATCH",
            body=encode_fields(data),
            params=params,
            access_token=await self._client.get_token(),
        )

    async def get(self, *, transaction: str | None = None) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found.

        Passing a transaction id makes the read part of that transaction.
        """
        params = [("transaction", transaction)] if transaction else None
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            params=params,
            access_token=await self._client.get_token(),
        )
        if not out:
            return None
        return DocumentSnapshot.from_resource(out)

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="DELETE",
            access_token=await self._client.get_token(),
        )


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
}


class _Query:
    """Fluent query builder for collection; runs via runQuery (filter/order/limit on server)."""

    def __init__(
        self,
        client: "FirestoreRESTClient",
        parent: str,
        collection_id: str,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict] = []
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> "_Query":
        if op not in _OP_MAP:
            raise ValueError(f"Unsupported filter operator: {op!r}")
        self._filters.append(
            {
                "fieldFilter": {
                    "field": {"fieldPath": field},
                    "op": _OP_MAP[op],
                    "value": encode_value(value),
                }
            }
        )
        return self

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_Query":
        self._order_by_field = field
        self._order_direction = direction
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def to_structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": self._filters}
            }
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": self._order_by_field},
                    "direction": self._order_direction,
                }
            ]
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        resp = await _request_async(
            self._client._http,
            f"{_BASE}/{self._parent}:runQuery",
            method="POST",
            body={"structuredQuery": self.to_structured_query()},
            access_token=await self._client.get_token(),
            missing_ok=False,
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            yield DocumentSnapshot.from_resource(item["document"])


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def add(self, data: dict[str, Any], document_id: str | None = None) -> str:
        """Create a document and return its id (server-generated when document_id is None).

        Raises DocumentExistsError if document_id is given and already taken.
        """
        params = [("documentId", document_id)] if document_id else None
        out = await _request_async(
            self._client._http,
            f"{_BASE}/{self._path}",
            method="POST",
            body=encode_fields(data),
            params=params,
            access_token=await self._client.get_token(),
        )
        name = (out or {}).get("name", "")
        return name.split("/")[-1] if name else (document_id or "")

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Chain .where(), .order_by(), .limit(), then .stream()."""
        return self.query().where(field, op, value)

    def query(self) -> _Query:
        parent = self._path.rsplit("/", 1)[0]
        collection_id = self._path.split("/")[-1]
        return _Query(self._client, parent, collection_id)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 15.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._database = f"projects/{project_id}/databases/(default)"
        self._prefix = f"{self._database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    async def begin_transaction(self) -> str:
        """Start a read-write transaction and return its opaque id."""
        out = await _request_async(
            self._http,
            f"{_BASE}/{self._prefix}:beginTransaction",
            method="POST",
            body={"options": {"readWrite": {}}},
            access_token=await self.get_token(),
            missing_ok=False,
        )
        return out["transaction"]

    async def commit(self, writes: list[dict], *, transaction: str | None = None) -> dict:
        """Apply writes atomically (optionally closing a transaction)."""
        body: dict[str, Any] = {"writes": writes}
        if transaction:
            body["transaction"] = transaction
        return await _request_async(
            self._http,
            f"{_BASE}/{self._prefix}:commit",
            method="POST",
            body=body,
            access_token=await self.get_token(),
            missing_ok=False,
        )

    async def rollback(self, transaction: str) -> None:
        await _request_async(
            self._http,
            f"{_BASE}/{self._prefix}:rollback",
            method="POST",
            body={"transaction": transaction},
            access_token=await self.get_token(),
            missing_ok=False,
        )
