# humosync/system/dashboard.py
import logging
from typing import Any, Dict

from .state import SystemState

logger = logging.getLogger(__name__)

QUIT_KEYS = ('q', 'Q')


class DashboardSystem:
    """Main dashboard controller"""

    def __init__(self, components: Dict[str, Any], state: SystemState):
        """
        Initialize the dashboard.

        Args:
            components: Dictionary of system components
            state: System state object
        """
        self.components = components
        self.state = state

    def start(self) -> None:
        """Start polling and, when present, the camera stream"""
        poller = self.components['poller']
        ui = self.components['ui']

        poller.start()
        ui.update_status_message(f"Polling {poller.status_url} every {poller.interval}s")

        stream = self.components.get('stream')
        if stream is not None:
            stream.start()
            ui.update_status_message(f"Reading camera stream {stream.url}")

    async def process_cycle(self) -> None:
        """Handle input and redraw the display"""
        ui = self.components['ui']

        if ui.poll_input() in QUIT_KEYS:
            logger.info("Quit requested from keyboard")
            self.state.shutdown_requested = True
            return

        feed_status = self.components['poller'].feed_status
        self._report_feed_change(feed_status)
        ui.update_display(self.components['surface'], feed_status)

    def _report_feed_change(self, feed_status) -> None:
        if feed_status.status == self.state.last_feed_status:
            return

        ui = self.components['ui']
        if feed_status.status == 'Connected':
            ui.update_status_message("Status feed connected", is_network=True)
        elif feed_status.status == 'Disconnected' and self.state.last_feed_status == 'Connected':
            ui.update_status_message("Lost connection to device - keeping last reading", is_alert=True)
        self.state.last_feed_status = feed_status.status
