# humosync/ui/components/camera.py
import logging
from PIL import Image, ImageDraw
from datetime import datetime
from typing import Optional

from ..colors import ColorManager
from .base import Component

logger = logging.getLogger(__name__)


class CameraComponent(Component):
    """Handles rendering of the camera view"""

    def draw(self, canvas: Image.Image, draw: ImageDraw.ImageDraw,
             image: Optional[Image.Image], x: int, y: int, width: int, height: int,
             timestamp: Optional[datetime] = None):
        """Draw the latest stream frame or a placeholder"""
        draw.rectangle([x, y, x + width, y + height], fill=(0, 0, 0), outline=(51, 51, 51))

        if image is not None:
            self._draw_camera_image(canvas, draw, image, x, y, width, height, timestamp)
        else:
            self._draw_placeholder(draw, x, y, width, height)

    def _draw_camera_image(self, canvas: Image.Image, draw: ImageDraw.ImageDraw,
                           image: Image.Image, x: int, y: int, width: int, height: int,
                           timestamp: Optional[datetime]):
        try:
            img_copy = image.copy()
            img_copy.thumbnail(
                (width - 4, height - 4),
                Image.Resampling.LANCZOS
            )

            # Calculate centered position
            img_x = x + 2 + (width - 4 - img_copy.width) // 2
            img_y = y + 2 + (height - 4 - img_copy.height) // 2
            canvas.paste(img_copy, (img_x, img_y))

            if timestamp:
                draw.text(
                    (x + 6, y + 6),
                    f"Frame: {timestamp.strftime('%H:%M:%S')}",
                    font=self.font,
                    fill=(255, 255, 0)
                )

        except Exception as e:
            logger.error(f"Error drawing camera image: {e}")
            self._draw_placeholder(draw, x, y, width, height)

    def _draw_placeholder(self, draw: ImageDraw.ImageDraw,
                          x: int, y: int, width: int, height: int):
        self._draw_centered(
            draw, "Waiting for stream...", x, y + height // 2 - 10, width,
            fill=ColorManager.get('offline')
        )
