"""Tests for EventEntity rules, profile entities and domain enums."""

from dataclasses import replace
from datetime import date

import pytest

from eventlink.domain.entities import (
    EventEntity,
    NgoProfileEntity,
    UserRecordEntity,
    unique_tags,
)
from eventlink.domain.enums import EventStatus, UserRole
from eventlink.domain.exceptions import (
    AlreadyRegisteredException,
    CapacityExceededException,
    EventClosedException,
    EventCompletedException,
    ForbiddenException,
    InvalidTransitionException,
    NotRegisteredException,
    ValidationException,
)
from eventlink.domain.value_objects import FiniteCapacity, UnlimitedCapacity

TODAY = date(2025, 3, 10)


def _event(**overrides) -> EventEntity:
    base = {
        "id": "ev1",
        "ngo_id": "ngo1",
        "name": "Tree planting",
        "capacity": FiniteCapacity(2),
        "event_date": date(2025, 4, 1),
    }
    base.update(overrides)
    return EventEntity(**base)


class TestEventStatus:
    def test_values(self) -> None:
        assert EventStatus.values() == ["active", "closed"]

    def test_transition_table(self) -> None:
        assert EventStatus.ACTIVE.can_transition_to(EventStatus.CLOSED)
        assert EventStatus.CLOSED.can_transition_to(EventStatus.ACTIVE)
        assert not EventStatus.ACTIVE.can_transition_to(EventStatus.ACTIVE)
        assert not EventStatus.CLOSED.can_transition_to(EventStatus.CLOSED)

    def test_user_roles(self) -> None:
        assert UserRole.values() == ["user", "ngo"]


class TestEventEntityValidation:
    def test_requires_owner(self) -> None:
        with pytest.raises(ValidationException) as exc:
            _event(ngo_id="")
        assert exc.value.details["field"] == "ngoId"

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValidationException):
            _event(enrolled_count=-1)

    def test_duplicate_registrants_rejected(self) -> None:
        with pytest.raises(ValidationException):
            _event(registered_users=("u1", "u1"), enrolled_count=2)


class TestCompletedOverlay:
    def test_past_date_is_completed(self) -> None:
        assert _event(event_date=date(2025, 3, 9)).is_completed(TODAY)

    def test_today_is_not_completed(self) -> None:
        assert not _event(event_date=TODAY).is_completed(TODAY)

    def test_no_date_never_completed(self) -> None:
        assert not _event(event_date=None).is_completed(TODAY)

    def test_completed_independent_of_status(self) -> None:
        event = _event(event_date=date(2020, 1, 1), status=EventStatus.CLOSED)
        assert event.is_completed(TODAY)
        assert event.is_closed()


class TestRegistrationRules:
    """ensure_can_register checks: already registered, capacity, closed, completed."""

    def test_open_event_with_room_passes(self) -> None:
        _event().ensure_can_register("u1", TODAY)

    def test_already_registered_wins_over_full(self) -> None:
        event = _event(registered_users=("u1", "u2"), enrolled_count=2)
        with pytest.raises(AlreadyRegisteredException):
            event.ensure_can_register("u1", TODAY)

    def test_capacity_checked_before_closed(self) -> None:
        event = _event(
            status=EventStatus.CLOSED, registered_users=("a", "b"), enrolled_count=2
        )
        with pytest.raises(CapacityExceededException):
            event.ensure_can_register("u1", TODAY)

    def test_capacity_checked_before_completed(self) -> None:
        event = _event(
            event_date=date(2024, 1, 1), registered_users=("a", "b"), enrolled_count=2
        )
        with pytest.raises(CapacityExceededException):
            event.ensure_can_register("u1", TODAY)

    def test_closed_event_with_room(self) -> None:
        with pytest.raises(EventClosedException):
            _event(status=EventStatus.CLOSED).ensure_can_register("u1", TODAY)

    def test_closed_checked_before_completed(self) -> None:
        event = _event(status=EventStatus.CLOSED, event_date=date(2024, 1, 1))
        with pytest.raises(EventClosedException):
            event.ensure_can_register("u1", TODAY)

    def test_past_event_with_room(self) -> None:
        with pytest.raises(EventCompletedException):
            _event(event_date=date(2024, 1, 1)).ensure_can_register("u1", TODAY)

    def test_full_event_raises_capacity(self) -> None:
        event = _event(registered_users=("a", "b"), enrolled_count=2)
        with pytest.raises(CapacityExceededException) as exc:
            event.ensure_can_register("u1", TODAY)
        assert exc.value.details["capacity"] == 2

    def test_blocks_can_be_disabled(self) -> None:
        event = _event(status=EventStatus.CLOSED, event_date=date(2020, 1, 1))
        event.ensure_can_register("u1", TODAY, block_closed=False, block_completed=False)

    def test_unlimited_never_full(self) -> None:
        users = tuple(f"u{i}" for i in range(1000))
        event = _event(capacity=UnlimitedCapacity(), registered_users=users, enrolled_count=1000)
        event.ensure_can_register("new", TODAY)
        assert event.spots_left() is None

    def test_unregister_requires_membership(self) -> None:
        with pytest.raises(NotRegisteredException):
            _event().ensure_can_unregister("u1")
        _event(registered_users=("u1",), enrolled_count=1).ensure_can_unregister("u1")


class TestOwnershipAndTransitions:
    def test_owner_check(self) -> None:
        event = _event()
        event.ensure_owned_by("ngo1", "close")
        with pytest.raises(ForbiddenException) as exc:
            event.ensure_owned_by("someone", "close")
        assert exc.value.details == {"resource": "event", "action": "close"}
        assert not event.is_owned_by(None)

    def test_invalid_transition(self) -> None:
        event = _event()
        event.ensure_can_transition(EventStatus.CLOSED)
        with pytest.raises(InvalidTransitionException):
            event.ensure_can_transition(EventStatus.ACTIVE)
        replace(event, status=EventStatus.CLOSED).ensure_can_transition(EventStatus.ACTIVE)


class TestProfiles:
    def _profile(self, **overrides) -> NgoProfileEntity:
        base = {
            "owner_id": "ngo1",
            "name": "Green Shores",
            "description": "Coastal volunteers",
            "location": "Kampala",
            "contact": "0700",
            "email": "a@b.org",
            "established_year": "2012",
            "services": ("Education",),
            "languages": ("English",),
        }
        base.update(overrides)
        return NgoProfileEntity(**base)

    def test_tags_deduplicated(self) -> None:
        profile = self._profile(services=("Health", " Health", "Education", ""))
        assert profile.services == ("Health", "Education")

    def test_blank_name_rejected(self) -> None:
        with pytest.raises(ValidationException, match="NGO name"):
            self._profile(name="  ")

    def test_requires_a_language(self) -> None:
        with pytest.raises(ValidationException, match="language"):
            self._profile(languages=())

    def test_unique_tags_keeps_order(self) -> None:
        assert unique_tags(["b", "a", "b"]) == ("b", "a")

    def test_user_record_requires_uid(self) -> None:
        with pytest.raises(ValidationException):
            UserRecordEntity(uid="", name="x", email="x@y.z")
        assert UserRecordEntity(uid="u1", name="x", email="e").role is UserRole.USER
