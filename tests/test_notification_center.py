# tests/test_notification_center.py

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta

import pytest

from flow_todo.core.ports import CalendarTrigger, NotificationRequest
from flow_todo.notifications.center import LocalNotificationCenter

from .fakes import RecordingSink

FIRE_AT = datetime(2031, 5, 4, 9, 0)


def _request(identifier: str = "A", body: str = "Reminder: x at 9:00 AM") -> NotificationRequest:
    return NotificationRequest(
        identifier=identifier,
        title="Flow.",
        body=body,
        trigger=CalendarTrigger.from_datetime(FIRE_AT),
    )


def _clock(seconds_before: float):
    now = FIRE_AT - timedelta(seconds=seconds_before)
    return lambda: now


@pytest.mark.asyncio
async def test_delivers_when_trigger_fires() -> None:
    sink = RecordingSink()
    center = LocalNotificationCenter(sink, clock=_clock(0.05))
    await center.request_authorization()

    center.add(_request())
    assert len(center.pending_requests()) == 1

    await asyncio.sleep(0.2)
    assert [r.identifier for r in sink.delivered] == ["A"]
    assert center.pending_requests() == []


@pytest.mark.asyncio
async def test_unauthorized_delivery_is_dropped() -> None:
    sink = RecordingSink()
    center = LocalNotificationCenter(sink, allow=False, clock=_clock(0.05))
    assert await center.request_authorization() is False

    center.add(_request())
    await asyncio.sleep(0.2)

    assert sink.delivered == []
    assert center.pending_requests() == []


@pytest.mark.asyncio
async def test_past_trigger_stays_pending_and_never_fires() -> None:
    sink = RecordingSink()
    center = LocalNotificationCenter(sink, clock=_clock(-60))
    await center.request_authorization()

    center.add(_request())
    await asyncio.sleep(0.1)

    assert sink.delivered == []
    assert [r.identifier for r in center.pending_requests()] == ["A"]


@pytest.mark.asyncio
async def test_remove_pending_disarms_timer() -> None:
    sink = RecordingSink()
    center = LocalNotificationCenter(sink, clock=_clock(0.05))
    await center.request_authorization()

    center.add(_request())
    center.remove_pending(["A", "unknown"])
    await asyncio.sleep(0.2)

    assert sink.delivered == []


@pytest.mark.asyncio
async def test_adding_same_identifier_replaces_request() -> None:
    sink = RecordingSink()
    center = LocalNotificationCenter(sink, clock=_clock(0.05))
    await center.request_authorization()

    center.add(_request(body="first"))
    center.add(_request(body="second"))
    await asyncio.sleep(0.2)

    assert [r.body for r in sink.delivered] == ["second"]


@pytest.mark.asyncio
async def test_failing_sink_is_contained() -> None:
    def boom(_request) -> None:
        raise RuntimeError("terminal gone")

    center = LocalNotificationCenter(boom, clock=_clock(0.01))
    await center.request_authorization()
    center.add(_request())
    await asyncio.sleep(0.1)

    assert center.pending_requests() == []


@pytest.mark.asyncio
async def test_empty_identifier_is_rejected() -> None:
    center = LocalNotificationCenter()
    with pytest.raises(ValueError):
        center.add(_request(identifier=""))
