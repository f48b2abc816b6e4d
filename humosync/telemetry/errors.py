# humosync/telemetry/errors.py

class TelemetryError(Exception):
    """Base class for status feed failures"""


class StatusTransportError(TelemetryError):
    """The status endpoint was unreachable or answered with a non-200"""


class StatusDecodeError(TelemetryError, ValueError):
    """The status payload could not be decoded as a JSON object"""
