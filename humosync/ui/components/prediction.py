# humosync/ui/components/prediction.py
from PIL import ImageDraw, ImageFont

from ..colors import ColorManager
from ..layout import Layout
from ..state import DashboardSurface
from .base import Component


class PredictionComponent(Component):
    """Main label card: dominant class and its confidence"""

    def __init__(self, font: ImageFont.FreeTypeFont, layout: Layout,
                 label_font: ImageFont.FreeTypeFont):
        super().__init__(font, layout)
        self.label_font = label_font

    def draw(self, draw: ImageDraw.ImageDraw, x: int, y: int, width: int,
             surface: DashboardSurface):
        height = self.layout.card_height
        self._draw_section_box(draw, "", x, y, width, height)

        self._draw_centered(
            draw, surface.main_label, x, y + 14, width,
            fill=ColorManager.for_label_class(surface.label_class),
            font=self.label_font
        )
        self._draw_centered(
            draw, surface.confidence_text, x, y + height - 26, width,
            fill=ColorManager.get('muted')
        )
