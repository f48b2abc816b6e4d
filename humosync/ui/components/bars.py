# humosync/ui/components/bars.py
from PIL import ImageDraw

from ..colors import ColorManager
from ..state import BAR_ORDER, DashboardSurface
from .base import Component

LABEL_WIDTH = 70
VALUE_WIDTH = 56
BAR_HEIGHT = 10


class BarsComponent(Component):
    """The three proportion bars and the inference time readout"""

    def draw(self, draw: ImageDraw.ImageDraw, x: int, y: int, width: int,
             surface: DashboardSurface) -> int:
        """Draw the bars, returning the y coordinate below them"""
        row_height = self.layout.bar_row_height
        track_x = x + LABEL_WIDTH
        track_width = max(1, width - LABEL_WIDTH - VALUE_WIDTH)

        for i, name in enumerate(BAR_ORDER):
            bar = surface.bars[name]
            row_y = y + i * row_height
            track_y = row_y + (row_height - BAR_HEIGHT) // 2

            draw.text((x, row_y + 4), name.title(), font=self.font, fill=ColorManager.get('normal'))
            draw.rounded_rectangle(
                [track_x, track_y, track_x + track_width, track_y + BAR_HEIGHT],
                radius=5,
                fill=ColorManager.get('bar_bg')
            )

            fill_width = int(track_width * bar.width / 100)
            if fill_width > 0:
                draw.rounded_rectangle(
                    [track_x, track_y, track_x + fill_width, track_y + BAR_HEIGHT],
                    radius=min(5, fill_width // 2),
                    fill=ColorManager.bar_color(name)
                )

            value_x = x + width - self._text_width(draw, bar.text)
            draw.text((value_x, row_y + 4), bar.text, font=self.font, fill=ColorManager.get('muted'))

        latency_y = y + len(BAR_ORDER) * row_height + 8
        self._draw_centered(
            draw, f"Inference Time: {surface.latency_text}", x, latency_y, width,
            fill=ColorManager.get('offline')
        )
        return latency_y + self.layout.latency_height
