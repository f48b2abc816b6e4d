# humosync/telemetry/poller.py
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Set

import aiohttp

from ..config import MAX_IN_FLIGHT, NETWORK_TIMEOUTS, POLL_INTERVAL
from .decision import DisplayState, decide
from .errors import StatusTransportError, TelemetryError
from .sample import StatusSample, parse_status
from .status import FeedStatus

logger = logging.getLogger(__name__)

FetchStatus = Callable[[], Awaitable[StatusSample]]


class TelemetryPoller:
    """
    Polls the device status feed on a fixed cadence.

    Every tick runs as its own task so a slow request never delays the
    timer. Up to ``max_in_flight`` requests may overlap; when more are
    outstanding the tick is skipped. Ticks are numbered and a sample whose
    tick is older than the one already shown is dropped, so the display
    always reflects the newest issued request that succeeded. Failures of
    such older requests leave the feed status alone.
    """

    def __init__(self, status_url: str,
                 on_state: Optional[Callable[[DisplayState], Any]] = None,
                 on_error: Optional[Callable[[Exception], Any]] = None,
                 interval: float = POLL_INTERVAL,
                 fetch_status: Optional[FetchStatus] = None,
                 max_in_flight: int = MAX_IN_FLIGHT):
        """
        Initialize the poller.

        Args:
            status_url: URL of the device status endpoint
            on_state: Called with the DisplayState of every applied sample
            on_error: Called with the exception of every failed tick
            interval: Seconds between ticks
            fetch_status: Coroutine function replacing the HTTP fetch
            max_in_flight: Maximum number of overlapping requests
        """
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        if max_in_flight < 1:
            raise ValueError("max_in_flight must be at least 1")

        self.status_url = status_url
        self.interval = interval
        self.max_in_flight = max_in_flight
        self.feed_status = FeedStatus()
        self.ticks_started = 0

        self._on_state = on_state
        self._on_error = on_error
        self._fetch: FetchStatus = fetch_status or self.fetch_status
        self._uses_http = fetch_status is None
        self._session: Optional[aiohttp.ClientSession] = None
        self._is_running = False
        self._task: Optional[asyncio.Task] = None
        self._in_flight: Set[asyncio.Task] = set()
        self._next_seq = 0
        self._applied_seq = -1

    async def __aenter__(self):
        """Async context manager entry"""
        if self._uses_http:
            timeout = aiohttp.ClientTimeout(
                sock_connect=NETWORK_TIMEOUTS['connect'],
                sock_read=NETWORK_TIMEOUTS['read']
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.stop()
        if self._session and not self._session.closed:
            await self._session.close()

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    async def fetch_status(self) -> StatusSample:
        """
        Fetch and decode one sample from the status endpoint.

        Raises:
            StatusTransportError: On connection errors, timeouts or non-200
            StatusDecodeError: If the body is not a JSON object
        """
        if not self._session or self._session.closed:
            raise RuntimeError("HTTP session not initialized")

        try:
            async with self._session.get(self.status_url) as response:
                if response.status != 200:
                    raise StatusTransportError(f"HTTP {response.status}")
                body = await response.read()
        except asyncio.TimeoutError as e:
            raise StatusTransportError("Status request timed out") from e
        except aiohttp.ClientError as e:
            raise StatusTransportError(str(e) or type(e).__name__) from e

        return parse_status(body)

    def start(self) -> asyncio.Task:
        """Schedule run_forever on the running loop"""
        if self._task and not self._task.done():
            logger.info("Polling already running")
            return self._task
        self._task = asyncio.create_task(self.run_forever())
        return self._task

    async def run_forever(self):
        """Launch a tick every interval until stopped"""
        if self._is_running:
            logger.info("Polling already running")
            return

        logger.info(f"Polling {self.status_url} every {self.interval}s")
        self._is_running = True
        loop = asyncio.get_running_loop()
        next_tick = loop.time()

        try:
            while self._is_running:
                self._launch_tick()
                next_tick += self.interval
                delay = next_tick - loop.time()
                if delay < 0:
                    # Fell behind, resync instead of bursting
                    next_tick = loop.time()
                    delay = 0
                await asyncio.sleep(delay)
        finally:
            self._is_running = False

    async def stop(self):
        """Cancel the timer and any outstanding ticks"""
        self._is_running = False
        tasks = list(self._in_flight)
        if self._task and not self._task.done():
            tasks.append(self._task)

        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        self._in_flight.clear()
        self._task = None
        logger.info("Polling stopped")

    def _launch_tick(self):
        if len(self._in_flight) >= self.max_in_flight:
            logger.warning(
                f"{len(self._in_flight)} status requests still in flight, skipping tick"
            )
            return

        seq = self._next_seq
        self._next_seq += 1
        self.ticks_started += 1

        task = asyncio.create_task(self._tick(seq))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _tick(self, seq: int):
        """Fetch, decide and hand over one sample"""
        try:
            sample = await self._fetch()
        except TelemetryError as e:
            logger.warning(f"Status poll failed: {e}")
            await self._record_failure(seq, e)
            return
        except Exception as e:
            logger.exception(f"Unexpected error polling status: {e}")
            await self._record_failure(seq, e)
            return

        if seq < self._applied_seq:
            logger.debug(f"Dropping stale sample #{seq}, #{self._applied_seq} already shown")
            return

        self._applied_seq = seq
        self.feed_status.mark_success()
        await self._notify(self._on_state, decide(sample))

    async def _record_failure(self, seq: int, error: Exception):
        if seq < self._applied_seq:
            # A newer request already succeeded, the feed is live
            logger.debug(f"Ignoring failure of stale request #{seq}")
            return
        self.feed_status.mark_failure(error)
        await self._notify(self._on_error, error)

    @staticmethod
    async def _notify(callback: Optional[Callable], *args):
        """Invoke a sync or async callback, logging its failures"""
        if callback is None:
            return
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Error in poller callback: {e}")
