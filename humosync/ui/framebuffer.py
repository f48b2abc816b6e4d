# humosync/ui/framebuffer.py
import os
import mmap
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config import FRAMEBUFFER_DEVICE

logger = logging.getLogger(__name__)


@dataclass
class FramebufferInfo:
    """Stores framebuffer device information"""
    dev: Optional[int]
    fb: Any  # mmap.mmap, or any seekable writable buffer
    width: int
    height: int
    size: int
    line_length: int
    bits_per_pixel: int = 16  # Assuming RGB565


class FramebufferManager:
    """Handles framebuffer initialization"""

    @staticmethod
    def init_framebuffer(device: str = FRAMEBUFFER_DEVICE) -> FramebufferInfo:
        """Initialize framebuffer device with error handling"""
        try:
            if not os.path.exists(device):
                raise RuntimeError(f"Framebuffer device {device} not found")

            fb_dev = os.open(device, os.O_RDWR)
            fb_info = FramebufferManager._get_fb_info()

            size = fb_info['size']
            fb = mmap.mmap(fb_dev, size, mmap.MAP_SHARED, mmap.PROT_READ | mmap.PROT_WRITE)

            logger.info(
                f"Framebuffer {device}: {fb_info['width']}x{fb_info['height']}, "
                f"line length {fb_info['line_length']}"
            )
            return FramebufferInfo(
                dev=fb_dev,
                fb=fb,
                width=fb_info['width'],
                height=fb_info['height'],
                size=size,
                line_length=fb_info['line_length']
            )

        except Exception as e:
            logger.error(f"Failed to initialize framebuffer: {e}")
            FramebufferManager._log_fb_debug_info(device)
            raise

    @staticmethod
    def _get_fb_info() -> Dict[str, int]:
        """Get framebuffer information using fbset"""
        fb_info_str = os.popen('fbset -i').read()
        return FramebufferManager.parse_fbset(fb_info_str)

    @staticmethod
    def parse_fbset(fb_info_str: str) -> Dict[str, int]:
        """Parse `fbset -i` output into geometry values"""
        width, height = 800, 480  # Default values
        line_length = None

        for line in fb_info_str.split('\n'):
            if 'geometry' in line:
                parts = line.split()
                width = int(parts[1])
                height = int(parts[2])
            elif 'LineLength' in line:
                parts = line.split()
                line_length = int(parts[2])

        if not line_length:
            line_length = width * 2  # Assume 16-bit color

        return {
            'width': width,
            'height': height,
            'line_length': line_length,
            'size': line_length * height
        }

    @staticmethod
    def close(info: FramebufferInfo):
        if info.fb is not None:
            info.fb.close()
        if info.dev is not None:
            os.close(info.dev)

    @staticmethod
    def _log_fb_debug_info(device: str):
        """Log debug information for framebuffer initialization"""
        logger.debug("Framebuffer Debug Information:")
        try:
            logger.debug(f"Framebuffer device exists: {os.path.exists(device)}")
            logger.debug(f"Groups: {os.popen('groups').read().strip()}")
            logger.debug(f"Framebuffer permissions: {os.popen(f'ls -l {device}').read().strip()}")
        except Exception as e:
            logger.error(f"Error collecting debug info: {e}")
