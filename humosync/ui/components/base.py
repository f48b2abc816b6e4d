# humosync/ui/components/base.py
from PIL import ImageDraw, ImageFont

from ..colors import Color, ColorManager
from ..layout import Layout


class Component:
    """Common drawing helpers for dashboard sections"""

    def __init__(self, font: ImageFont.FreeTypeFont, layout: Layout):
        self.font = font
        self.layout = layout

    def _text_width(self, draw: ImageDraw.ImageDraw, text: str, font=None) -> int:
        bbox = draw.textbbox((0, 0), text, font=font or self.font)
        return bbox[2] - bbox[0]

    def _draw_section_box(self, draw: ImageDraw.ImageDraw, title: str,
                          x: int, y: int, width: int, height: int):
        """Draw a card background with an optional title"""
        draw.rounded_rectangle(
            [x, y, x + width, y + height],
            radius=8,
            fill=ColorManager.get('card')
        )
        if title:
            draw.text((x + 10, y + 4), title, font=self.font, fill=ColorManager.get('muted'))

    def _truncate_text(self, draw: ImageDraw.ImageDraw, text: str, max_width: int) -> str:
        """Cut text to fit max_width pixels, with an ellipsis"""
        if self._text_width(draw, text) <= max_width:
            return text
        while text and self._text_width(draw, text + '...') > max_width:
            text = text[:-1]
        return text + '...'

    def _draw_centered(self, draw: ImageDraw.ImageDraw, text: str, x: int, y: int,
                       width: int, fill: Color, font=None):
        text_x = x + (width - self._text_width(draw, text, font)) // 2
        draw.text((text_x, y), text, font=font or self.font, fill=fill)
