# humosync/telemetry/__init__.py

from .decision import BarValues, Classification, DisplayState, decide
from .errors import StatusDecodeError, StatusTransportError, TelemetryError
from .poller import TelemetryPoller
from .sample import StatusSample, decode_status, parse_status
from .status import FeedStatus
