from __future__ import annotations

import asyncio
from datetime import UTC, datetime

import pytest

from skyradar.models.log import LogEvent, LogLevel
from skyradar.models.provider import FlightProvider
from skyradar.models.snapshot import MachineState, Snapshot
from skyradar.sinks import LogChannel, SnapshotChannel


def _snapshot(session: int) -> Snapshot:
    return Snapshot(state=MachineState.SCANNING, provider=FlightProvider.ADSB_LOL, session=session)


def _event(message: str) -> LogEvent:
    return LogEvent(timestamp=datetime(2026, 1, 1, tzinfo=UTC), level=LogLevel.INFO, message=message)


@pytest.mark.asyncio
async def test_snapshot_channel_is_latest_wins() -> None:
    channel = SnapshotChannel()

    channel.publish(_snapshot(1))
    channel.publish(_snapshot(2))

    assert (await channel.get()).session == 2
    assert channel.latest is not None and channel.latest.session == 2
    with pytest.raises(TimeoutError):
        await asyncio.wait_for(channel.get(), timeout=0.01)


@pytest.mark.asyncio
async def test_snapshot_channel_wakes_waiting_consumer() -> None:
    channel = SnapshotChannel()
    waiter = asyncio.create_task(channel.get())
    await asyncio.sleep(0)

    channel.publish(_snapshot(7))

    assert (await asyncio.wait_for(waiter, timeout=1)).session == 7


def test_snapshot_listener_errors_do_not_propagate() -> None:
    channel = SnapshotChannel()
    received: list[int] = []

    def _boom(_snapshot: Snapshot) -> None:
        raise RuntimeError("bad consumer")

    channel.subscribe(_boom)
    unsubscribe = channel.subscribe(lambda s: received.append(s.session))
    channel.publish(_snapshot(1))
    unsubscribe()
    channel.publish(_snapshot(2))

    assert received == [1]


def test_snapshot_is_immutable() -> None:
    snapshot = _snapshot(1)

    with pytest.raises(ValueError):
        snapshot.session = 2  # type: ignore[misc]


@pytest.mark.asyncio
async def test_log_channel_is_fifo_and_capped() -> None:
    channel = LogChannel(capacity=2)

    for message in ("a", "b", "c"):
        channel.publish(_event(message))

    assert [e.message for e in channel.history()] == ["b", "c"]
    assert (await channel.get()).message == "b"
    assert (await channel.get()).message == "c"
    assert channel.capacity == 2


def test_log_event_naive_timestamp_becomes_utc() -> None:
    event = LogEvent(timestamp=datetime(2026, 1, 1), level=LogLevel.WARN, message="x")

    assert event.timestamp.tzinfo is UTC
