# humosync/telemetry/sample.py
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Union

from .errors import StatusDecodeError

logger = logging.getLogger(__name__)

SCORE_FIELDS = ('human', 'animal', 'other')
TIME_FIELD = 'time'


@dataclass(frozen=True)
class StatusSample:
    """One classification reading from the device's status feed"""
    human: float = 0
    animal: float = 0
    other: float = 0
    time_ms: float = 0


def coerce_number(value: Any) -> float:
    """
    Coerce a payload field to a number.

    Anything that is not a finite int or float (missing, null, strings,
    booleans, NaN, infinities) becomes 0.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return value


def decode_status(payload: Any) -> StatusSample:
    """
    Build a StatusSample from a decoded JSON payload.

    Args:
        payload: The decoded JSON document

    Returns:
        StatusSample: Sample with invalid fields defaulted to 0

    Raises:
        StatusDecodeError: If the payload is not a JSON object
    """
    if not isinstance(payload, dict):
        raise StatusDecodeError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    scores: Dict[str, float] = {
        name: coerce_number(payload.get(name)) for name in SCORE_FIELDS
    }
    time_ms = coerce_number(payload.get(TIME_FIELD))
    if time_ms < 0:
        logger.debug(f"Negative inference time {time_ms} treated as 0")
        time_ms = 0

    return StatusSample(time_ms=time_ms, **scores)


def parse_status(raw: Union[str, bytes]) -> StatusSample:
    """Decode a raw status response body"""
    try:
        payload = json.loads(raw)
    except (ValueError, TypeError) as e:
        raise StatusDecodeError(f"Malformed status payload: {e}") from e
    return decode_status(payload)
