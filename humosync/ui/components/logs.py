# humosync/ui/components/logs.py
from PIL import ImageDraw
from typing import List

from ..colors import Color
from .base import Component

LINE_HEIGHT = 15


class LogComponent(Component):
    """Handles rendering of the operator log"""

    def draw(self, draw: ImageDraw.ImageDraw, x: int, y: int, width: int, height: int,
             messages: List[str]) -> None:
        """Draw the system log section"""
        self._draw_section_box(draw, "System Log", x, y, width, height)
        content_y = y + 22

        max_lines = max(0, (height - 26) // LINE_HEIGHT)
        visible_messages = messages[-max_lines:] if max_lines else []

        for i, message in enumerate(visible_messages):
            draw.text(
                (x + 10, content_y + i * LINE_HEIGHT),
                self._truncate_text(draw, message, width - 20),
                font=self.font,
                fill=self._get_message_color(message)
            )

    @staticmethod
    def _get_message_color(message: str) -> Color:
        """Get appropriate color for log message"""
        if 'ALERT:' in message:
            return (255, 0, 0)
        elif 'NETWORK:' in message:
            return (0, 255, 255)
        return (200, 200, 200)
