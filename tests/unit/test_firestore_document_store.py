"""FirestoreDocumentStore over a mocked Firestore REST API (httpx.MockTransport)."""

import json
from collections.abc import Callable
from datetime import UTC, datetime

import httpx
import pytest

from eventlink.application.interfaces.store import (
    ArrayUnion,
    DocumentNotFoundError,
    FieldFilter,
    Increment,
    StoreError,
    TransactionConflictError,
)
from eventlink.domain.value_objects import UNLIMITED_SENTINEL
from eventlink.infrastructure.firebase._rest_client import FirestoreRESTClient
from eventlink.infrastructure.firebase._rest_encoding import (
    decode_fields,
    encode_fields,
)
from eventlink.infrastructure.firebase.document_store import FirestoreDocumentStore

DOCS = "projects/proj/databases/(default)/documents"


class FakeCredentials:
    valid = True
    token = "test-token"


def _doc(path: str, fields: dict, update_time: str = "2025-01-01T00:00:00.000000Z") -> dict:
    return {"name": f"{DOCS}/{path}", "updateTime": update_time, **encode_fields(fields)}


def _error(code: int, status: str) -> httpx.Response:
    return httpx.Response(code, json={"error": {"code": code, "status": status, "message": status}})


def _store(handler: Callable[[httpx.Request], httpx.Response]) -> FirestoreDocumentStore:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    store = FirestoreDocumentStore(FirestoreRESTClient("proj", FakeCredentials(), http_client=http))
    store.retry_base_delay = 0
    return store


class TestEncoding:
    def test_event_fields_survive_encoding(self) -> None:
        created = datetime(2025, 3, 1, 8, 30, tzinfo=UTC)
        data = {
            "slots": UNLIMITED_SENTINEL,
            "enrolledCount": 0,
            "registeredUsers": ["u1", "u2"],
            "createdAt": created,
            "closedBy": None,
        }
        assert decode_fields(encode_fields(data)) == data

    def test_nanosecond_timestamps_truncate_to_microseconds(self) -> None:
        out = decode_fields({"fields": {"t": {"timestampValue": "2025-03-01T08:30:00.123456789Z"}}})
        assert out["t"] == datetime(2025, 3, 1, 8, 30, 0, 123456, tzinfo=UTC)


class TestDocuments:
    async def test_get_decodes_document(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "GET"
            assert request.url.path.endswith("/documents/events/e1")
            assert request.headers["Authorization"] == "Bearer test-token"
            return httpx.Response(200, json=_doc("events/e1", {"name": "Clean-up", "slots": 3}))

        doc = await _store(handler).get_document("events", "e1")
        assert doc is not None
        assert doc.id == "e1"
        assert doc.data == {"name": "Clean-up", "slots": 3}
        assert doc.update_time == "2025-01-01T00:00:00.000000Z"

    async def test_get_missing_returns_none(self) -> None:
        doc = await _store(lambda r: _error(404, "NOT_FOUND")).get_document("events", "nope")
        assert doc is None

    async def test_create_returns_server_id(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "POST"
            assert request.url.path.endswith("/documents/events")
            body = json.loads(request.content)
            assert body["fields"]["name"] == {"stringValue": "Clean-up"}
            return httpx.Response(200, json=_doc("events/generated", {"name": "Clean-up"}))

        assert await _store(handler).create_document("events", {"name": "Clean-up"}) == "generated"

    async def test_create_existing_id_raises_value_error(self) -> None:
        store = _store(lambda r: _error(409, "ALREADY_EXISTS"))
        with pytest.raises(ValueError, match="already exists"):
            await store.create_document("events", {}, document_id="e1")

    async def test_merge_set_sends_update_mask(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_doc("ngos/n1", {"name": "Green"}))

        await _store(handler).set_document("ngos", "n1", {"name": "Green"}, merge=True)
        assert seen[0].method == "PATCH"
        assert seen[0].url.params.get_list("updateMask.fieldPaths") == ["name"]

    async def test_update_splits_literals_and_transforms(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith(":commit")
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json={"writeResults": [{}]})

        await _store(handler).update_document(
            "events",
            "e1",
            {"status": "closed", "enrolledCount": Increment(1), "registeredUsers": ArrayUnion("u1")},
        )
        (write,) = bodies[0]["writes"]
        assert write["update"]["name"] == f"{DOCS}/events/e1"
        assert write["updateMask"] == {"fieldPaths": ["status"]}
        assert write["currentDocument"] == {"exists": True}
        assert write["updateTransforms"] == [
            {"fieldPath": "enrolledCount", "increment": {"integerValue": "1"}},
            {
                "fieldPath": "registeredUsers",
                "appendMissingElements": {"values": [{"stringValue": "u1"}]},
            },
        ]
        assert "transaction" not in bodies[0]

    @pytest.mark.parametrize(("code", "status"), [(404, "NOT_FOUND"), (400, "FAILED_PRECONDITION")])
    async def test_update_missing_document(self, code: int, status: str) -> None:
        store = _store(lambda r: _error(code, status))
        with pytest.raises(DocumentNotFoundError):
            await store.update_document("events", "gone", {"status": "closed"})

    async def test_server_error_becomes_store_error(self) -> None:
        store = _store(lambda r: _error(503, "UNAVAILABLE"))
        with pytest.raises(StoreError, match="UNAVAILABLE"):
            await store.get_document("events", "e1")

    async def test_transport_error_becomes_store_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(StoreError):
            await _store(handler).query_documents("events")


class TestQuery:
    async def test_structured_query(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path.endswith(f"{DOCS}:runQuery")
            bodies.append(json.loads(request.content))
            return httpx.Response(
                200,
                json=[
                    {"document": _doc("events/e1", {"ngoId": "ngo-1"})},
                    {"readTime": "2025-01-01T00:00:00Z"},
                ],
            )

        docs = await _store(handler).query_documents(
            "events",
            [FieldFilter("ngoId", "==", "ngo-1")],
            order_by="date",
            descending=True,
            limit=5,
        )
        assert [d.id for d in docs] == ["e1"]
        query = bodies[0]["structuredQuery"]
        assert query["from"] == [{"collectionId": "events"}]
        assert query["where"]["fieldFilter"]["op"] == "EQUAL"
        assert query["orderBy"] == [{"field": {"fieldPath": "date"}, "direction": "DESCENDING"}]
        assert query["limit"] == 5

    async def test_two_filters_compose_with_and(self) -> None:
        bodies: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content))
            return httpx.Response(200, json=[])

        await _store(handler).query_documents(
            "events",
            [FieldFilter("ngoId", "==", "n"), FieldFilter("registeredUsers", "array-contains", "u")],
        )
        where = bodies[0]["structuredQuery"]["where"]["compositeFilter"]
        assert where["op"] == "AND"
        assert [f["fieldFilter"]["op"] for f in where["filters"]] == ["EQUAL", "ARRAY_CONTAINS"]


class FakeFirestore:
    """Serves one event document and records transaction traffic."""

    def __init__(self, conflicts: int = 0) -> None:
        self.conflicts = conflicts
        self.commits: list[dict] = []
        self.rollbacks = 0
        self.begun = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith(":beginTransaction"):
            self.begun += 1
            return httpx.Response(200, json={"transaction": f"tx-{self.begun}"})
        if path.endswith(":rollback"):
            self.rollbacks += 1
            return httpx.Response(200, json={})
        if path.endswith(":commit"):
            self.commits.append(json.loads(request.content))
            if self.conflicts:
                self.conflicts -= 1
                return _error(409, "ABORTED")
            return httpx.Response(200, json={"writeResults": [{}]})
        if path.endswith("/events/e1"):
            assert request.url.params["transaction"] == f"tx-{self.begun}"
            return httpx.Response(
                200, json=_doc("events/e1", {"enrolledCount": 1}, update_time=f"t{self.begun}")
            )
        return _error(404, "NOT_FOUND")


async def _increment(tx) -> int:
    doc = await tx.get("events", "e1")
    tx.update("events", "e1", {"enrolledCount": Increment(1)})
    return doc.data["enrolledCount"] + 1


class TestTransactions:
    async def test_commit_carries_read_precondition(self) -> None:
        server = FakeFirestore()
        result = await _store(server).run_transaction(_increment)
        assert result == 2
        (commit,) = server.commits
        assert commit["transaction"] == "tx-1"
        assert commit["writes"][0]["currentDocument"] == {"updateTime": "t1"}
        assert server.rollbacks == 0

    async def test_aborted_commit_is_retried(self) -> None:
        server = FakeFirestore(conflicts=2)
        result = await _store(server).run_transaction(_increment, max_attempts=3)
        assert result == 2
        assert server.begun == 3
        assert len(server.commits) == 3
        # A failed commit already ends the transaction server-side.
        assert server.rollbacks == 0

    async def test_conflicts_exhaust_attempts(self) -> None:
        server = FakeFirestore(conflicts=5)
        with pytest.raises(TransactionConflictError):
            await _store(server).run_transaction(_increment, max_attempts=2)
        assert server.begun == 2

    async def test_callback_error_rolls_back(self) -> None:
        server = FakeFirestore()

        async def refuse(tx) -> None:
            await tx.get("events", "e1")
            raise LookupError("rule broken")

        with pytest.raises(LookupError):
            await _store(server).run_transaction(refuse)
        assert server.rollbacks == 1
        assert server.commits == []

    async def test_missing_document_write_uses_exists_precondition(self) -> None:
        server = FakeFirestore()

        async def blind_write(tx) -> None:
            tx.update("events", "other", {"status": "closed"})

        await _store(server).run_transaction(blind_write)
        assert server.commits[0]["writes"][0]["currentDocument"] == {"exists": True}
