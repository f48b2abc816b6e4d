"""
tests/test_poller.py
────────────────────
TelemetryPoller scheduling, failure recovery and teardown.

The network is replaced by fake fetch coroutines, except for the HTTP group
which runs the real aiohttp fetch against a local test server. Every test
drives its own event loop with asyncio.run and tears the poller down before
returning, so no timers outlive a test.
"""

from __future__ import annotations

import asyncio
from typing import List

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from humosync.telemetry import (
    Classification,
    DisplayState,
    StatusDecodeError,
    StatusSample,
    StatusTransportError,
    TelemetryPoller,
)
from humosync.ui import DashboardRenderer, DashboardSurface

URL = "http://device.local/status"


async def _run_for(poller: TelemetryPoller, seconds: float) -> None:
    async with poller:
        poller.start()
        await asyncio.sleep(seconds)


# ─────────────────────────────────────────────────────────────────────────────
# Cadence and teardown
# ─────────────────────────────────────────────────────────────────────────────

def test_fetches_every_interval_until_stopped() -> None:
    calls: List[float] = []

    async def fetch() -> StatusSample:
        calls.append(asyncio.get_running_loop().time())
        return StatusSample(human=1)

    async def scenario():
        poller = TelemetryPoller(URL, interval=0.02, fetch_status=fetch)
        await _run_for(poller, 0.2)
        stopped_at = len(calls)
        await asyncio.sleep(0.1)
        return poller, stopped_at

    poller, stopped_at = asyncio.run(scenario())

    assert stopped_at >= 5
    assert len(calls) == stopped_at
    assert not poller.is_running
    assert poller.in_flight == 0


def test_stop_cancels_hanging_requests() -> None:
    async def fetch() -> StatusSample:
        await asyncio.Event().wait()

    async def scenario():
        poller = TelemetryPoller(URL, interval=0.01, fetch_status=fetch, max_in_flight=2)
        await _run_for(poller, 0.1)
        return poller

    poller = asyncio.run(scenario())

    # Third and later ticks are skipped while two requests hang
    assert poller.ticks_started == 2
    assert poller.in_flight == 0
    assert not poller.is_running


def test_start_twice_returns_same_task() -> None:
    async def fetch() -> StatusSample:
        return StatusSample()

    async def scenario():
        async with TelemetryPoller(URL, interval=0.05, fetch_status=fetch) as poller:
            first = poller.start()
            second = poller.start()
            return first is second

    assert asyncio.run(scenario())


def test_invalid_arguments_rejected() -> None:
    with pytest.raises(ValueError):
        TelemetryPoller(URL, interval=0)
    with pytest.raises(ValueError):
        TelemetryPoller(URL, max_in_flight=0)


# ─────────────────────────────────────────────────────────────────────────────
# Failures
# ─────────────────────────────────────────────────────────────────────────────

def test_failed_tick_keeps_previous_render() -> None:
    surface = DashboardSurface()
    renderer = DashboardRenderer(surface)
    errors: List[Exception] = []
    responses = [StatusSample(human=90, animal=5, other=5, time_ms=120)]

    async def fetch() -> StatusSample:
        if responses:
            return responses.pop(0)
        raise StatusTransportError("HTTP 503")

    poller = TelemetryPoller(URL, on_state=renderer.render, on_error=errors.append,
                             interval=0.02, fetch_status=fetch)
    asyncio.run(_run_for(poller, 0.15))

    assert surface.updates == 1
    assert surface.main_label == "HUMAN DETECTED"
    assert surface.confidence_text == "90% Confidence"
    assert surface.bars['human'].text == "90%"
    assert surface.latency_text == "120 ms"

    assert len(errors) >= 3
    assert all(isinstance(e, StatusTransportError) for e in errors)
    assert poller.feed_status.status == "Disconnected"
    assert poller.feed_status.error_count == len(errors)
    assert poller.feed_status.samples_applied == 1


def test_loop_recovers_after_failures() -> None:
    attempts = []
    states: List[DisplayState] = []

    async def fetch() -> StatusSample:
        attempts.append(1)
        if len(attempts) <= 3:
            raise StatusDecodeError("Malformed status payload")
        return StatusSample(animal=60, other=40)

    poller = TelemetryPoller(URL, on_state=states.append, interval=0.02, fetch_status=fetch)
    asyncio.run(_run_for(poller, 0.2))

    assert states
    assert states[-1].dominant_label is Classification.ANIMAL
    assert poller.feed_status.status == "Connected"
    assert poller.feed_status.error_count == 0
    assert poller.feed_status.total_failures == 3


def test_unexpected_fetch_error_does_not_stop_polling() -> None:
    attempts = []

    async def fetch() -> StatusSample:
        attempts.append(1)
        raise KeyError("boom")

    poller = TelemetryPoller(URL, interval=0.02, fetch_status=fetch)
    asyncio.run(_run_for(poller, 0.15))

    assert len(attempts) >= 4
    assert poller.feed_status.last_error.startswith("KeyError")


def test_failing_state_callback_does_not_stop_polling() -> None:
    attempts = []

    async def fetch() -> StatusSample:
        attempts.append(1)
        return StatusSample(human=10)

    def broken_render(state: DisplayState) -> None:
        raise RuntimeError("display gone")

    poller = TelemetryPoller(URL, on_state=broken_render, interval=0.02, fetch_status=fetch)
    asyncio.run(_run_for(poller, 0.15))

    assert len(attempts) >= 4


def test_async_callbacks_are_awaited() -> None:
    seen: List[DisplayState] = []

    async def on_state(state: DisplayState) -> None:
        await asyncio.sleep(0)
        seen.append(state)

    async def fetch() -> StatusSample:
        return StatusSample(other=3)

    poller = TelemetryPoller(URL, on_state=on_state, interval=0.02, fetch_status=fetch)
    asyncio.run(_run_for(poller, 0.1))

    assert seen
    assert seen[0].dominant_label is Classification.OTHER


# ─────────────────────────────────────────────────────────────────────────────
# Overlapping requests
# ─────────────────────────────────────────────────────────────────────────────

def test_stale_sample_does_not_overwrite_newer_one() -> None:
    calls = []
    states: List[DisplayState] = []

    async def fetch() -> StatusSample:
        calls.append(1)
        if len(calls) == 1:
            await asyncio.sleep(0.08)
            return StatusSample(human=90)
        return StatusSample(animal=80)

    poller = TelemetryPoller(URL, on_state=states.append, interval=0.02, fetch_status=fetch)
    asyncio.run(_run_for(poller, 0.2))

    assert states
    assert all(state.dominant_label is Classification.ANIMAL for state in states)


def test_late_failure_of_older_request_keeps_feed_live() -> None:
    calls = []
    errors: List[Exception] = []
    states: List[DisplayState] = []

    async def fetch() -> StatusSample:
        calls.append(1)
        if len(calls) == 1:
            await asyncio.sleep(0.05)
            raise StatusTransportError("Status request timed out")
        return StatusSample(human=90)

    poller = TelemetryPoller(URL, on_state=states.append, on_error=errors.append,
                             interval=0.02, fetch_status=fetch)
    asyncio.run(_run_for(poller, 0.15))

    assert states
    assert errors == []
    assert poller.feed_status.status == "Connected"
    assert poller.feed_status.total_failures == 0


# ─────────────────────────────────────────────────────────────────────────────
# HTTP fetch
# ─────────────────────────────────────────────────────────────────────────────

async def _fetch_from(handler) -> StatusSample:
    app = web.Application()
    app.router.add_get('/status', handler)
    async with TestServer(app) as server:
        async with TelemetryPoller(str(server.make_url('/status'))) as poller:
            return await poller.fetch_status()


def test_http_fetch_decodes_payload() -> None:
    async def handler(request):
        return web.json_response({"human": 90, "animal": 5, "other": 5, "time": 120})

    sample = asyncio.run(_fetch_from(handler))
    assert sample == StatusSample(human=90, animal=5, other=5, time_ms=120)


def test_http_fetch_accepts_plain_text_content_type() -> None:
    async def handler(request):
        return web.Response(text='{"animal": 44}', content_type='text/plain')

    assert asyncio.run(_fetch_from(handler)).animal == 44


def test_http_error_status_is_transport_error() -> None:
    async def handler(request):
        return web.Response(status=500, text="camera busy")

    with pytest.raises(StatusTransportError, match="HTTP 500"):
        asyncio.run(_fetch_from(handler))


def test_http_garbage_is_decode_error() -> None:
    async def handler(request):
        return web.Response(text="<html>oops</html>", content_type='text/html')

    with pytest.raises(StatusDecodeError):
        asyncio.run(_fetch_from(handler))


def test_unreachable_device_is_transport_error() -> None:
    async def scenario():
        # Port 9 on localhost is closed on any sane test host
        async with TelemetryPoller("http://127.0.0.1:9/status") as poller:
            await poller.fetch_status()

    with pytest.raises(StatusTransportError):
        asyncio.run(scenario())


def test_fetch_without_session_fails() -> None:
    poller = TelemetryPoller(URL)
    with pytest.raises(RuntimeError):
        asyncio.run(poller.fetch_status())
