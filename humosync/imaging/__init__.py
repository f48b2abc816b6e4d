# humosync/imaging/__init__.py

from .stream import StreamReader, extract_frames
from .verification import verify_image
