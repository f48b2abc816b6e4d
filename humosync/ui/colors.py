# humosync/ui/colors.py
from typing import Optional, Tuple

import numpy as np
from PIL import Image

from ..config import UI_COLORS

Color = Tuple[int, int, int]

LABEL_COLORS = {
    'detected-human': 'human',
    'detected-animal': 'animal',
    'detected-other': 'other',
}


class ColorManager:
    """Manages color lookups and conversions"""

    @staticmethod
    def get(name: str) -> Color:
        return UI_COLORS.get(name, UI_COLORS['normal'])

    @staticmethod
    def for_label_class(label_class: Optional[str]) -> Color:
        """Text color of the main label for a style class"""
        return ColorManager.get(LABEL_COLORS.get(label_class, 'normal'))

    @staticmethod
    def bar_color(name: str) -> Color:
        return ColorManager.get(f'bar_{name}')

    @staticmethod
    def rgb_to_rgb565(r: int, g: int, b: int) -> int:
        """Convert RGB888 to RGB565 format"""
        r = (r >> 3) & 0x1F
        g = (g >> 2) & 0x3F
        b = (b >> 3) & 0x1F
        return (r << 11) | (g << 5) | b

    @staticmethod
    def image_to_rgb565(image: Image.Image) -> np.ndarray:
        """Convert an RGB image to little-endian RGB565 bytes, shape (h, w * 2)"""
        image_array = np.asarray(image.convert('RGB'))
        height, width, _ = image_array.shape

        r = image_array[:, :, 0].astype(np.uint16)
        g = image_array[:, :, 1].astype(np.uint16)
        b = image_array[:, :, 2].astype(np.uint16)
        rgb565 = ((r >> 3) << 11) | ((g >> 2) << 5) | (b >> 3)

        fb_bytes = np.zeros((height, width, 2), dtype=np.uint8)
        fb_bytes[:, :, 0] = rgb565 & 0xFF
        fb_bytes[:, :, 1] = (rgb565 >> 8) & 0xFF
        return fb_bytes.reshape(height, width * 2)
