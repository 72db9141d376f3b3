"""HTTP tests for /api/v1/events: lifecycle, registration ledger and error mapping."""

import asyncio

from httpx import AsyncClient

from eventlink.infrastructure.store import InMemoryDocumentStore

EVENTS = "/api/v1/events"


class TestCreate:
    async def test_create_returns_event(self, create_event) -> None:
        event = await create_event()
        assert event["ngo_id"] == "ngo-1"
        assert event["slots"] == 2
        assert event["enrolled_count"] == 0
        assert event["spots_left"] == 2
        assert event["registered_users"] == []
        assert event["status"] == "active"
        assert event["completed"] is False
        assert event["date"] == "2999-06-01"
        # Blank NGO fields fall back to the saved profile.
        assert event["ngo_name"] == "Green Shores"
        assert event["ngo_contact"] == "+256700000000"

    async def test_unlimited_slots(self, create_event) -> None:
        event = await create_event(slots="unlimited")
        assert event["slots"] == "unlimited"
        assert event["spots_left"] is None

    async def test_requires_token(self, client: AsyncClient, event_body) -> None:
        resp = await client.post(EVENTS, json=event_body())
        assert resp.status_code == 401
        assert resp.json()["error"] == "AUTHENTICATION_ERROR"
        assert resp.headers["www-authenticate"] == "Bearer"

    async def test_invalid_token_rejected(self, client: AsyncClient, event_body) -> None:
        resp = await client.post(
            EVENTS, json=event_body(), headers={"Authorization": "Bearer not-a-jwt"}
        )
        assert resp.status_code == 401

    async def test_requires_ngo_profile(self, client: AsyncClient, bearer, event_body) -> None:
        resp = await client.post(EVENTS, json=event_body(), headers=bearer("no-profile"))
        assert resp.status_code == 403
        assert resp.json()["error"] == "PROFILE_REQUIRED"

    async def test_invalid_slots_is_400(
        self, client: AsyncClient, create_event, bearer, event_body
    ) -> None:
        await create_event()
        resp = await client.post(EVENTS, json=event_body(slots="lots"), headers=bearer("ngo-1"))
        assert resp.status_code == 400
        body = resp.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"] == {"field": "slots"}

    async def test_missing_client_group_is_400(
        self, client: AsyncClient, create_event, bearer, event_body
    ) -> None:
        await create_event()
        resp = await client.post(EVENTS, json=event_body(client_group=[]), headers=bearer("ngo-1"))
        assert resp.status_code == 400
        assert resp.json()["details"] == {"field": "clientGroup"}

    async def test_malformed_body_is_422(self, client: AsyncClient, bearer, event_body) -> None:
        resp = await client.post(EVENTS, json=event_body(date="June"), headers=bearer("ngo-1"))
        assert resp.status_code == 422
        body = resp.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert any(d["loc"][-1] == "date" for d in body["details"])

    async def test_boolean_slots_rejected(self, client: AsyncClient, bearer, event_body) -> None:
        resp = await client.post(EVENTS, json=event_body(slots=True), headers=bearer("ngo-1"))
        assert resp.status_code == 422


class TestRead:
    async def test_list_sorted_by_date(self, client: AsyncClient, create_event) -> None:
        await create_event(name="Later", date="2999-09-01")
        await create_event(name="Sooner", date="2999-03-01")
        resp = await client.get(EVENTS)
        assert resp.status_code == 200
        assert [e["name"] for e in resp.json()] == ["Sooner", "Later"]

    async def test_get_unknown_is_404(self, client: AsyncClient) -> None:
        resp = await client.get(f"{EVENTS}/missing")
        assert resp.status_code == 404
        assert resp.json()["error"] == "RESOURCE_NOT_FOUND"

    async def test_past_event_is_completed(self, client: AsyncClient, create_event) -> None:
        event = await create_event(date="2000-01-01")
        resp = await client.get(f"{EVENTS}/{event['id']}")
        assert resp.json()["completed"] is True

    async def test_unreadable_stored_event(
        self, client: AsyncClient, store: InMemoryDocumentStore, create_event
    ) -> None:
        await create_event(name="Readable")
        await store.create_document(
            "events", {"ngoId": "ngo-1", "slots": "lots", "date": "2999-01-01"}, "bad"
        )

        listed = await client.get(EVENTS)
        assert listed.status_code == 200
        assert [e["name"] for e in listed.json()] == ["Readable"]

        resp = await client.get(f"{EVENTS}/bad")
        assert resp.status_code == 500
        assert resp.json()["error"] == "CORRUPT_DOCUMENT"
        assert resp.json()["details"]["field"] == "slots"


class TestRegistration:
    async def test_capacity_scenario(self, client: AsyncClient, create_event, bearer) -> None:
        event = await create_event(slots=2)
        url = f"{EVENTS}/{event['id']}/registration"

        first = await client.post(url, headers=bearer("u1"))
        assert first.status_code == 200
        assert first.json()["enrolled_count"] == 1

        again = await client.post(url, headers=bearer("u1"))
        assert again.status_code == 409
        assert again.json()["error"] == "ALREADY_REGISTERED"

        second = await client.post(url, headers=bearer("u2"))
        assert second.json()["spots_left"] == 0

        full = await client.post(url, headers=bearer("u3"))
        assert full.status_code == 409
        assert full.json()["error"] == "CAPACITY_EXCEEDED"

        left = await client.delete(url, headers=bearer("u1"))
        assert left.status_code == 200
        assert left.json()["registered_users"] == ["u2"]

        third = await client.post(url, headers=bearer("u3"))
        assert third.status_code == 200
        assert third.json()["registered_users"] == ["u2", "u3"]
        assert third.json()["enrolled_count"] == 2

    async def test_concurrent_registrations_never_overbook(
        self, client: AsyncClient, create_event, bearer
    ) -> None:
        event = await create_event(slots=3)
        url = f"{EVENTS}/{event['id']}/registration"
        responses = await asyncio.gather(
            *(client.post(url, headers=bearer(f"u{i}")) for i in range(8))
        )
        codes = [r.status_code for r in responses]
        assert codes.count(200) == 3
        assert codes.count(409) == 5
        refused = [r.json()["error"] for r in responses if r.status_code == 409]
        assert refused == ["CAPACITY_EXCEEDED"] * 5
        final = (await client.get(f"{EVENTS}/{event['id']}")).json()
        assert final["enrolled_count"] == 3
        assert len(final["registered_users"]) == 3

    async def test_unregister_when_not_registered(
        self, client: AsyncClient, create_event, bearer
    ) -> None:
        event = await create_event()
        url = f"{EVENTS}/{event['id']}"
        await client.post(f"{url}/registration", headers=bearer("u2"))
        before = (await client.get(url)).json()

        resp = await client.delete(f"{url}/registration", headers=bearer("u1"))
        assert resp.status_code == 409
        assert resp.json()["error"] == "NOT_REGISTERED"
        after = (await client.get(url)).json()
        assert after == before
        assert after["enrolled_count"] == 1
        assert after["registered_users"] == ["u2"]

    async def test_register_unknown_event(self, client: AsyncClient, bearer) -> None:
        resp = await client.post(f"{EVENTS}/missing/registration", headers=bearer("u1"))
        assert resp.status_code == 404

    async def test_register_requires_token(self, client: AsyncClient, create_event) -> None:
        event = await create_event()
        resp = await client.post(f"{EVENTS}/{event['id']}/registration")
        assert resp.status_code == 401

    async def test_completed_event_blocks_registration(
        self, client: AsyncClient, create_event, bearer
    ) -> None:
        event = await create_event(date="2000-01-01")
        resp = await client.post(f"{EVENTS}/{event['id']}/registration", headers=bearer("u1"))
        assert resp.status_code == 409
        assert resp.json()["error"] == "EVENT_COMPLETED"


class TestLifecycle:
    async def test_close_and_reopen(self, client: AsyncClient, create_event, bearer) -> None:
        event = await create_event()
        base = f"{EVENTS}/{event['id']}"
        await client.post(f"{base}/registration", headers=bearer("u1"))

        closed = await client.post(f"{base}/close", headers=bearer("ngo-1"))
        assert closed.status_code == 200
        assert closed.json()["status"] == "closed"
        assert closed.json()["closed_by"] == "ngo-1"
        assert closed.json()["registered_users"] == ["u1"]

        blocked = await client.post(f"{base}/registration", headers=bearer("u2"))
        assert blocked.status_code == 409
        assert blocked.json()["error"] == "EVENT_CLOSED"

        # Leaving a closed event is still allowed.
        left = await client.delete(f"{base}/registration", headers=bearer("u1"))
        assert left.status_code == 200

        twice = await client.post(f"{base}/close", headers=bearer("ngo-1"))
        assert twice.status_code == 409
        assert twice.json()["error"] == "INVALID_TRANSITION"

        reopened = await client.post(f"{base}/reopen", headers=bearer("ngo-1"))
        assert reopened.json()["status"] == "active"
        assert reopened.json()["opened_by"] == "ngo-1"
        assert (await client.post(f"{base}/registration", headers=bearer("u2"))).status_code == 200

    async def test_only_owner_may_close(self, client: AsyncClient, create_event, bearer) -> None:
        event = await create_event()
        resp = await client.post(f"{EVENTS}/{event['id']}/close", headers=bearer("ngo-2"))
        assert resp.status_code == 403
        assert resp.json()["error"] == "PERMISSION_DENIED"

    async def test_delete(self, client: AsyncClient, create_event, bearer) -> None:
        event = await create_event()
        url = f"{EVENTS}/{event['id']}"
        assert (await client.delete(url, headers=bearer("ngo-2"))).status_code == 403
        assert (await client.delete(url, headers=bearer("ngo-1"))).status_code == 204
        assert (await client.get(url)).status_code == 404
        gone = await client.post(f"{url}/registration", headers=bearer("u1"))
        assert gone.status_code == 404


class TestAttendees:
    async def test_owner_sees_user_records(
        self, client: AsyncClient, create_event, bearer
    ) -> None:
        event = await create_event(slots="unlimited")
        base = f"{EVENTS}/{event['id']}"
        for uid, name in (("u1", "Amina"), ("u2", "Brian")):
            await client.put(
                "/api/v1/me/user",
                json={"name": name, "email": f"{uid}@example.org"},
                headers=bearer(uid),
            )
            await client.post(f"{base}/registration", headers=bearer(uid))
        # Registered without a user record: skipped in the listing.
        await client.post(f"{base}/registration", headers=bearer("ghost"))

        resp = await client.get(f"{base}/attendees", headers=bearer("ngo-1"))
        assert resp.status_code == 200
        assert [a["name"] for a in resp.json()] == ["Amina", "Brian"]
        assert resp.json()[0] == {
            "uid": "u1",
            "name": "Amina",
            "email": "u1@example.org",
            "role": "user",
        }

    async def test_non_owner_forbidden(self, client: AsyncClient, create_event, bearer) -> None:
        event = await create_event()
        resp = await client.get(f"{EVENTS}/{event['id']}/attendees", headers=bearer("u1"))
        assert resp.status_code == 403
