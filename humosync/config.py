# humosync/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env(name: str, default):
    """Read a HUMOSYNC_ environment override, cast to the default's type"""
    value = os.getenv(f"HUMOSYNC_{name}")
    if value is None:
        return default
    return type(default)(value)


# Device Configuration
# -------------------
# Endpoints
DEVICE_URL = _env('DEVICE_URL', "http://192.168.4.1")
STATUS_PATH = _env('STATUS_PATH', "/status")
STREAM_PATH = _env('STREAM_PATH', "/stream")

# Polling
POLL_INTERVAL = _env('POLL_INTERVAL', 0.5)  # seconds
MAX_IN_FLIGHT = _env('MAX_IN_FLIGHT', 4)    # overlapping status requests

# Network Timeouts (in seconds)
NETWORK_TIMEOUTS = {
    'connect': _env('CONNECT_TIMEOUT', 2.0),  # Time to establish connection
    'read': _env('READ_TIMEOUT', 2.0),        # Time to receive data
}

# Chunk size for streaming downloads (in bytes)
DOWNLOAD_CHUNK_SIZE = 8192

# Error Handling Configuration
ERROR_RECOVERY_DELAY = _env('ERROR_RECOVERY_DELAY', 2.0)  # seconds


# Display Configuration
# -------------------
UI_REFRESH_RATE = _env('UI_REFRESH_RATE', 0.1)  # seconds
MAX_LOG_MESSAGES = 8
FRAMEBUFFER_DEVICE = _env('FRAMEBUFFER_DEVICE', '/dev/fb0')
UI_FONT_SIZE = 14
UI_TITLE = "HumoSync Safety AI"
UI_COLORS = {
    'normal': (255, 255, 255),
    'background': (18, 18, 18),
    'card': (30, 30, 30),
    'muted': (170, 170, 170),
    'human': (17, 153, 142),    # --accent-green
    'animal': (255, 75, 31),    # --accent-red
    'other': (255, 255, 255),
    'bar_bg': (51, 51, 51),
    'bar_human': (0, 242, 254),
    'bar_animal': (255, 94, 98),
    'bar_other': (215, 221, 232),
    'live': (17, 153, 142),
    'offline': (85, 85, 85),
}


# Logging Configuration
# -------------------
LOG_LEVEL = _env('LOG_LEVEL', "INFO")
LOG_FILE = _env('LOG_FILE', "humosync_dashboard.log")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def status_url(device_url: str = DEVICE_URL) -> str:
    return device_url.rstrip('/') + STATUS_PATH


def stream_url(device_url: str = DEVICE_URL) -> str:
    return device_url.rstrip('/') + STREAM_PATH
