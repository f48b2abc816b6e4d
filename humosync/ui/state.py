# humosync/ui/state.py
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

BAR_ORDER = ('human', 'animal', 'other')


@dataclass
class BarState:
    """One proportion bar: fill width in percent and its value text"""
    width: float = 0
    text: str = "0%"


@dataclass
class DashboardSurface:
    """The named visual elements of the dashboard"""
    main_label: str = "DETECTING..."
    label_class: Optional[str] = None
    confidence_text: str = "0% Confidence"
    bars: Dict[str, BarState] = field(
        default_factory=lambda: {name: BarState() for name in BAR_ORDER}
    )
    latency_text: str = "0 ms"
    last_update: Optional[datetime] = None
    updates: int = 0
