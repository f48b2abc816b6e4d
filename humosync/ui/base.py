# humosync/ui/base.py
from datetime import datetime
from typing import List, Optional

from ..config import MAX_LOG_MESSAGES
from ..telemetry.status import FeedStatus
from .state import DashboardSurface


class BaseUIManager:
    """Shared operator log and interface for the display backends"""

    def __init__(self, max_log_messages: int = MAX_LOG_MESSAGES):
        self.status_messages: List[str] = []
        self.max_log_messages = max_log_messages

    def update_status_message(self, message: str, is_alert: bool = False, is_network: bool = False):
        """Update status messages with timestamps"""
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        prefix = "ALERT: " if is_alert else "NETWORK: " if is_network else ""
        self.status_messages.append(f"[{timestamp}] {prefix}{message}")

        while len(self.status_messages) > self.max_log_messages:
            self.status_messages.pop(0)

    def report_poll_error(self, error: Exception):
        self.update_status_message(f"Status poll failed: {error}", is_network=True)

    def poll_input(self) -> Optional[str]:
        """Return a pending key press, if the backend takes input"""
        return None

    def update_display(self, surface: DashboardSurface, feed_status: FeedStatus):
        """Draw the surface - to be implemented by subclasses"""
        raise NotImplementedError("Subclasses must implement update_display()")

    def cleanup(self):
        """Clean up resources - to be implemented by subclasses"""
        pass
