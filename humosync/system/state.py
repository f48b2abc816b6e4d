# humosync/system/state.py
from dataclasses import dataclass
from typing import Optional


@dataclass
class SystemState:
    """Represents the current state of the dashboard"""
    ui_mode: str = "curses"
    shutdown_requested: bool = False
    error_state: bool = False
    last_feed_status: Optional[str] = None
