# humosync/ui/components/header.py
from PIL import ImageDraw

from ...config import UI_TITLE
from ...telemetry.status import FeedStatus
from ...telemetry.utils import format_time_ago
from ..colors import ColorManager
from .base import Component


class HeaderComponent(Component):
    """Title bar with the live-inference indicator"""

    def draw(self, draw: ImageDraw.ImageDraw, feed_status: FeedStatus):
        self._draw_centered(
            draw, UI_TITLE, 0, 10, self.layout.screen_width,
            fill=ColorManager.get('bar_human')
        )

        # Status dot
        x = self.layout.results_x
        y = self.layout.header_height + 6
        dot_color = ColorManager.get('live' if feed_status.is_live else 'offline')
        draw.ellipse([x, y + 3, x + 10, y + 13], fill=dot_color)

        status_text = "LIVE INFERENCE" if feed_status.is_live else feed_status.status.upper()
        draw.text((x + 18, y), status_text, font=self.font, fill=ColorManager.get('muted'))

        updated = f"Updated {format_time_ago(feed_status.last_success)}"
        updated_x = self.layout.results_x + self.layout.results_width - self._text_width(draw, updated)
        draw.text((updated_x, y), updated, font=self.font, fill=ColorManager.get('offline'))
