"""AttendeeAggregator: bounded fan-out that drops missing or failing lookups."""

import asyncio
import logging
from unittest.mock import AsyncMock

import pytest

from eventlink.application.use_cases import AttendeeAggregator
from eventlink.domain.entities import UserRecordEntity


def _user(uid: str) -> UserRecordEntity:
    return UserRecordEntity(uid=uid, name=uid.upper(), email=f"{uid}@example.org")


async def test_keeps_order_and_drops_missing_and_failed(caplog: pytest.LogCaptureFixture) -> None:
    async def get(uid: str):
        if uid == "missing":
            return None
        if uid == "broken":
            raise RuntimeError("timeout")
        return _user(uid)

    repo = AsyncMock()
    repo.get = AsyncMock(side_effect=get)
    with caplog.at_level(logging.WARNING):
        result = await AttendeeAggregator(repo).resolve(["b", "missing", "a", "broken"])

    assert [u.uid for u in result] == ["b", "a"]
    assert "missing" in caplog.text
    assert "broken" in caplog.text


async def test_empty_list_makes_no_calls() -> None:
    repo = AsyncMock()
    assert await AttendeeAggregator(repo).resolve([]) == []
    repo.get.assert_not_called()


async def test_concurrency_is_bounded() -> None:
    in_flight = 0
    peak = 0

    async def get(uid: str):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.001)
        in_flight -= 1
        return _user(uid)

    repo = AsyncMock()
    repo.get = AsyncMock(side_effect=get)
    result = await AttendeeAggregator(repo, concurrency=3).resolve([f"u{i}" for i in range(12)])
    assert len(result) == 12
    assert peak <= 3


def test_concurrency_must_be_positive() -> None:
    with pytest.raises(ValueError):
        AttendeeAggregator(AsyncMock(), concurrency=0)
