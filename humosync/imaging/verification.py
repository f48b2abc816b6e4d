# humosync/imaging/verification.py
from PIL import Image
import io
import logging

logger = logging.getLogger(__name__)

MIN_FRAME_BYTES = 100
MIN_FRAME_SIDE = 10


def verify_image(image_data: bytes) -> bool:
    """
    Verify a camera frame before it is displayed.

    Args:
        image_data: Raw JPEG bytes

    Returns:
        bool: True if the frame decodes and has sane dimensions
    """
    try:
        if len(image_data) < MIN_FRAME_BYTES:
            raise ValueError("Frame data suspiciously small")

        with io.BytesIO(image_data) as bio:
            img = Image.open(bio)
            img.verify()

            # verify() leaves the image unusable, reopen to fully decode
            bio.seek(0)
            img = Image.open(bio)
            img.load()

            if img.size[0] < MIN_FRAME_SIDE or img.size[1] < MIN_FRAME_SIDE:
                raise ValueError("Frame dimensions too small")

        return True

    except Exception as e:
        logger.debug(f"Frame verification failed: {e}")
        return False
