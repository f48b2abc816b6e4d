# humosync/telemetry/status.py
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class FeedStatus:
    """Represents the current health of the status feed"""
    status: str = "Unknown"
    last_check: Optional[datetime] = None
    last_success: Optional[datetime] = None
    error_count: int = 0
    total_failures: int = 0
    last_error: Optional[str] = None
    samples_applied: int = 0

    @property
    def is_live(self) -> bool:
        return self.status == "Connected"

    def mark_success(self):
        """Record a successful poll"""
        now = datetime.now()
        self.status = "Connected"
        self.last_check = now
        self.last_success = now
        self.error_count = 0
        self.samples_applied += 1

    def mark_failure(self, error: Exception):
        """Record a failed poll"""
        self.status = "Disconnected"
        self.last_check = datetime.now()
        self.error_count += 1
        self.total_failures += 1
        self.last_error = f"{type(error).__name__}: {error}"
