# humosync/imaging/stream.py
import asyncio
import logging
from typing import Any, Callable, List, Optional, Tuple

import aiohttp

from ..config import DOWNLOAD_CHUNK_SIZE, ERROR_RECOVERY_DELAY, NETWORK_TIMEOUTS
from .verification import verify_image

logger = logging.getLogger(__name__)

JPEG_SOI = b'\xff\xd8'
JPEG_EOI = b'\xff\xd9'
MAX_FRAME_BYTES = 2 * 1024 * 1024


def extract_frames(buffer: bytes) -> Tuple[List[bytes], bytes]:
    """
    Split complete JPEG frames out of an MJPEG byte stream.

    Multipart boundaries and headers between frames are skipped by scanning
    for the JPEG start/end markers.

    Args:
        buffer: Bytes received so far

    Returns:
        Tuple of (complete frames, bytes to keep for the next chunk)
    """
    frames = []
    pos = 0

    while True:
        start = buffer.find(JPEG_SOI, pos)
        if start < 0:
            # Keep a trailing 0xff, it may be the first half of a marker
            tail = buffer[-1:] if buffer.endswith(b'\xff') else b''
            return frames, tail

        end = buffer.find(JPEG_EOI, start + len(JPEG_SOI))
        if end < 0:
            remainder = buffer[start:]
            if len(remainder) > MAX_FRAME_BYTES:
                logger.warning("Discarding oversized partial frame")
                return frames, b''
            return frames, remainder

        end += len(JPEG_EOI)
        frames.append(buffer[start:end])
        pos = end


class StreamReader:
    """Reads the device's MJPEG stream and passes verified frames on"""

    def __init__(self, url: str, on_frame: Callable[[bytes], Any],
                 chunk_size: int = DOWNLOAD_CHUNK_SIZE,
                 retry_delay: float = ERROR_RECOVERY_DELAY):
        self.url = url
        self.on_frame = on_frame
        self.chunk_size = chunk_size
        self.retry_delay = retry_delay
        self.frames_received = 0
        self.frames_rejected = 0
        self._session: Optional[aiohttp.ClientSession] = None
        self._task: Optional[asyncio.Task] = None

    async def __aenter__(self):
        """Async context manager entry"""
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

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run())
        return self._task

    async def stop(self):
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None

    async def run(self):
        """Read the stream, reconnecting after failures"""
        logger.info(f"Reading camera stream from {self.url}")
        while True:
            try:
                await self._read_stream()
                logger.info("Camera stream closed by device")
            except Exception as e:
                logger.warning(f"Camera stream error: {type(e).__name__}: {e}")
            await asyncio.sleep(self.retry_delay)

    async def _read_stream(self):
        if not self._session or self._session.closed:
            raise RuntimeError("HTTP session not initialized")

        async with self._session.get(self.url) as response:
            if response.status != 200:
                raise ValueError(f"HTTP {response.status}")

            buffer = b''
            async for chunk in response.content.iter_chunked(self.chunk_size):
                frames, buffer = extract_frames(buffer + chunk)
                for frame in frames:
                    self.handle_frame(frame)

    def handle_frame(self, frame: bytes):
        if not verify_image(frame):
            self.frames_rejected += 1
            return
        self.frames_received += 1
        self.on_frame(frame)
