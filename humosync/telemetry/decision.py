# humosync/telemetry/decision.py
from dataclasses import dataclass
from enum import Enum

from .sample import StatusSample


class Classification(Enum):
    HUMAN = 'human'
    ANIMAL = 'animal'
    OTHER = 'other'


@dataclass(frozen=True)
class BarValues:
    human: float
    animal: float
    other: float


@dataclass(frozen=True)
class DisplayState:
    """What the dashboard shows for a single status sample"""
    dominant_label: Classification
    dominant_confidence: float
    bar_values: BarValues
    latency_ms: float


def decide(sample: StatusSample) -> DisplayState:
    """
    Pick the dominant class for a sample.

    HUMAN or ANIMAL win only when strictly greater than both other scores.
    Every other case, ties included, resolves to OTHER with the "other"
    score as confidence, even when that score is not the highest.
    """
    human, animal, other = sample.human, sample.animal, sample.other

    if human > animal and human > other:
        label, confidence = Classification.HUMAN, human
    elif animal > human and animal > other:
        label, confidence = Classification.ANIMAL, animal
    else:
        label, confidence = Classification.OTHER, other

    return DisplayState(
        dominant_label=label,
        dominant_confidence=confidence,
        bar_values=BarValues(human=human, animal=animal, other=other),
        latency_ms=sample.time_ms,
    )
