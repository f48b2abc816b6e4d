# humosync/ui/fb_manager.py
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..config import UI_FONT_SIZE
from ..telemetry.status import FeedStatus
from .base import BaseUIManager
from .colors import ColorManager
from .components import (
    BarsComponent,
    CameraComponent,
    HeaderComponent,
    LogComponent,
    PredictionComponent,
)
from .framebuffer import FramebufferInfo, FramebufferManager
from .layout import LayoutManager
from .state import DashboardSurface

logger = logging.getLogger(__name__)

FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf"
]

BOLD_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
]


class FBUIManager(BaseUIManager):
    """Manages framebuffer-based UI rendering with double buffering"""

    def __init__(self, fb: Optional[FramebufferInfo] = None, **kwargs):
        """
        Initialize the UI manager.

        Args:
            fb: Framebuffer to draw on, the system device is opened if omitted
        """
        super().__init__(**kwargs)
        self.current_image: Optional[Image.Image] = None
        self.image_timestamp: Optional[datetime] = None

        self.fb = fb or FramebufferManager.init_framebuffer()
        self._owns_fb = fb is None

        self.font = self._init_font(FONT_PATHS, UI_FONT_SIZE)
        self.label_font = self._init_font(BOLD_FONT_PATHS + FONT_PATHS, UI_FONT_SIZE * 2)

        # Image buffer for double buffering
        self.image = Image.new('RGB', (self.fb.width, self.fb.height), ColorManager.get('background'))
        self.draw = ImageDraw.Draw(self.image)

        self.layout = LayoutManager.calculate_layout(self.fb.width, self.fb.height)
        self.components = {
            'header': HeaderComponent(self.font, self.layout),
            'camera': CameraComponent(self.font, self.layout),
            'prediction': PredictionComponent(self.font, self.layout, self.label_font),
            'bars': BarsComponent(self.font, self.layout),
            'logs': LogComponent(self.font, self.layout),
        }

        logger.info("FBUIManager initialized successfully")

    @staticmethod
    def _init_font(font_paths: Sequence[str], size: int) -> ImageFont.FreeTypeFont:
        """Initialize system font with fallbacks"""
        for font_path in font_paths:
            if Path(font_path).exists():
                try:
                    return ImageFont.truetype(font_path, size)
                except Exception as e:
                    logger.warning(f"Failed to load font {font_path}: {e}")

        logger.warning("No system fonts found, using default font")
        return ImageFont.load_default()

    def set_current_image(self, image_data: bytes):
        """Update the camera panel with a new stream frame"""
        try:
            temp_image = Image.open(io.BytesIO(image_data))
            if temp_image.mode != 'RGB':
                temp_image = temp_image.convert('RGB')
            else:
                temp_image.load()

            self.current_image = temp_image
            self.image_timestamp = datetime.now()

        except Exception as e:
            logger.error(f"Error loading stream frame: {e}")

    def compose(self, surface: DashboardSurface, feed_status: FeedStatus) -> Image.Image:
        """Draw every section into the back buffer"""
        layout = self.layout
        pad = layout.padding

        self.draw.rectangle([0, 0, self.fb.width, self.fb.height], fill=ColorManager.get('background'))

        self.components['header'].draw(self.draw, feed_status)

        content_y = layout.header_height
        self.components['camera'].draw(
            self.image,
            self.draw,
            self.current_image,
            pad,
            content_y,
            layout.camera_width - 2 * pad,
            self.fb.height - content_y - pad,
            self.image_timestamp
        )

        y = content_y + 30
        self.components['prediction'].draw(
            self.draw, layout.results_x, y, layout.results_width, surface
        )

        y += layout.card_height + pad
        y = self.components['bars'].draw(
            self.draw, layout.results_x, y, layout.results_width, surface
        )

        log_height = self.fb.height - y - pad
        if log_height > 40:
            self.components['logs'].draw(
                self.draw, layout.results_x, y, layout.results_width, log_height,
                self.status_messages
            )

        return self.image

    def update_display(self, surface: DashboardSurface, feed_status: FeedStatus):
        """Compose the dashboard and push it to the framebuffer"""
        try:
            self.compose(surface, feed_status)
            self._write_to_framebuffer()
        except Exception as e:
            logger.error(f"Error updating display: {e}")
            self.update_status_message(f"Display error: {str(e)}", is_alert=True)

    def _write_to_framebuffer(self):
        """Convert and write image data to framebuffer"""
        rows = ColorManager.image_to_rgb565(self.image)

        # Pad each row out to the device stride
        padding = self.fb.line_length - rows.shape[1]
        if padding > 0:
            rows = np.pad(rows, ((0, 0), (0, padding)))

        self.fb.fb.seek(0)
        self.fb.fb.write(rows.tobytes())

    def cleanup(self):
        """Clean up resources"""
        if not self._owns_fb:
            return
        try:
            FramebufferManager.close(self.fb)
            logger.info("UI resources cleaned up successfully")
        except Exception as e:
            logger.error(f"Error during cleanup: {e}")
