# humosync/ui/renderer.py
import logging
from datetime import datetime

from ..telemetry.decision import Classification, DisplayState
from ..telemetry.utils import format_number
from .state import BAR_ORDER, DashboardSurface

logger = logging.getLogger(__name__)

LABELS = {
    Classification.HUMAN: "HUMAN DETECTED",
    Classification.ANIMAL: "ANIMAL DETECTED",
    Classification.OTHER: "OTHERS",
}

STYLE_CLASSES = {
    Classification.HUMAN: 'detected-human',
    Classification.ANIMAL: 'detected-animal',
    Classification.OTHER: 'detected-other',
}


def clamp_percent(value: float) -> float:
    return max(0, min(100, value))


class DashboardRenderer:
    """Projects DisplayStates onto a DashboardSurface"""

    def __init__(self, surface: DashboardSurface):
        self.surface = surface

    def render(self, state: DisplayState) -> None:
        """Apply one DisplayState to every element of the surface"""
        surface = self.surface

        for name in BAR_ORDER:
            value = getattr(state.bar_values, name)
            bar = surface.bars[name]
            # Out-of-range readings are shown as-is but never overflow the bar
            bar.width = clamp_percent(value)
            bar.text = f"{format_number(value)}%"

        surface.latency_text = f"{format_number(state.latency_ms)} ms"
        surface.main_label = LABELS[state.dominant_label]
        surface.label_class = STYLE_CLASSES[state.dominant_label]
        surface.confidence_text = (
            f"{format_number(state.dominant_confidence)}% Confidence"
        )
        surface.last_update = datetime.now()
        surface.updates += 1

        logger.debug(
            f"Rendered {surface.main_label} ({surface.confidence_text}), "
            f"latency {surface.latency_text}"
        )
