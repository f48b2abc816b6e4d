# humosync/ui/log_ui.py
import logging

from ..telemetry.status import FeedStatus
from .base import BaseUIManager
from .state import BAR_ORDER, DashboardSurface

logger = logging.getLogger(__name__)


class LogUIManager(BaseUIManager):
    """Headless backend that writes each new reading to the log"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._last_logged = 0
        self._last_status = None

    def update_status_message(self, message: str, is_alert: bool = False, is_network: bool = False):
        super().update_status_message(message, is_alert, is_network)
        if is_alert:
            logger.warning(message)
        elif is_network:
            # The poller already logs its failures
            logger.debug(message)
        else:
            logger.info(message)

    def update_display(self, surface: DashboardSurface, feed_status: FeedStatus):
        if feed_status.status != self._last_status:
            logger.info(f"Status feed: {feed_status.status}")
            self._last_status = feed_status.status

        if surface.updates == self._last_logged:
            return
        self._last_logged = surface.updates

        bars = ", ".join(
            f"{name}={surface.bars[name].text}" for name in BAR_ORDER
        )
        logger.info(
            f"{surface.main_label} - {surface.confidence_text} "
            f"[{bars}] inference {surface.latency_text}"
        )
