# humosync/system/lifecycle.py
import asyncio
import logging
import signal
from typing import Any, Dict
from contextlib import AsyncExitStack

from ..config import POLL_INTERVAL, DEVICE_URL, status_url, stream_url
from ..imaging import StreamReader
from ..telemetry import TelemetryPoller
from ..ui import DashboardRenderer, DashboardSurface, LogUIManager
from .state import SystemState

logger = logging.getLogger(__name__)


class SystemLifecycle:
    """Handles system lifecycle management including initialization and shutdown"""

    @staticmethod
    def create_ui(ui_mode: str):
        """Create the display backend for a UI mode"""
        if ui_mode == 'hdmi':
            from ..ui.fb_manager import FBUIManager
            return FBUIManager()
        if ui_mode == 'curses':
            from ..ui.curses_ui import CursesUIManager
            return CursesUIManager()
        if ui_mode == 'headless':
            return LogUIManager()
        raise ValueError(f"Unknown UI mode: {ui_mode}")

    @staticmethod
    async def initialize_components(state: SystemState, device_url: str = DEVICE_URL,
                                    interval: float = POLL_INTERVAL) -> tuple[Dict[str, Any], AsyncExitStack]:
        """
        Initialize all system components.

        Args:
            state: System state object
            device_url: Base URL of the camera device
            interval: Status poll interval in seconds

        Returns:
            Tuple of (components dict, AsyncExitStack)
        """
        components = {}
        exit_stack = AsyncExitStack()

        try:
            ui = SystemLifecycle.create_ui(state.ui_mode)
            components['ui'] = ui

            surface = DashboardSurface()
            components['surface'] = surface
            components['renderer'] = DashboardRenderer(surface)

            components['poller'] = await exit_stack.enter_async_context(
                TelemetryPoller(
                    status_url(device_url),
                    on_state=components['renderer'].render,
                    on_error=ui.report_poll_error,
                    interval=interval
                )
            )

            # Only the framebuffer UI can show frames
            if state.ui_mode == 'hdmi':
                components['stream'] = await exit_stack.enter_async_context(
                    StreamReader(stream_url(device_url), ui.set_current_image)
                )

            logger.info("System initialization complete")
            return components, exit_stack

        except Exception as e:
            logger.error(f"Initialization error: {e}")
            await exit_stack.aclose()
            if 'ui' in components:
                components['ui'].cleanup()
            raise

    @staticmethod
    def setup_signal_handlers(state: SystemState) -> None:
        """Set up system signal handlers"""
        def signal_handler(sig):
            logger.info(f"Received signal {sig}")
            state.shutdown_requested = True

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))

    @staticmethod
    async def cleanup_components(components: Dict[str, Any], exit_stack: AsyncExitStack) -> None:
        """Clean up system resources"""
        logger.info("Starting system cleanup")

        try:
            await exit_stack.aclose()
        except Exception as e:
            logger.error(f"Error during cleanup: {e}")

        ui = components.get('ui')
        if ui is not None:
            try:
                ui.cleanup()
            except Exception as e:
                logger.error(f"Error cleaning up UI: {e}")

        logger.info("System cleanup complete")
