# humosync/telemetry/utils.py
from datetime import datetime, timedelta
from typing import Optional


def format_time_ago(timestamp: Optional[datetime]) -> str:
    """Format a timestamp as a human-readable time ago string"""
    if not timestamp:
        return "Never"

    delta = datetime.now() - timestamp

    if delta < timedelta(minutes=1):
        return f"{delta.seconds}s ago"
    elif delta < timedelta(hours=1):
        minutes = delta.seconds // 60
        return f"{minutes}m ago"
    elif delta < timedelta(days=1):
        hours = delta.seconds // 3600
        return f"{hours}h ago"
    else:
        return f"{delta.days}d ago"


def format_number(value: float) -> str:
    """Print a reading the way the device reports it (90, not 90.0)"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
