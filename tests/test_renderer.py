"""
tests/test_renderer.py
──────────────────────
DashboardRenderer output on the display surface: headline, confidence,
proportion bars and inference latency.

Bar widths are clamped to 0..100 while the displayed text keeps the raw
value, the same split the device page makes.
"""

from __future__ import annotations

from humosync.telemetry import StatusSample, decide
from humosync.ui import DashboardRenderer, DashboardSurface
from humosync.ui.renderer import clamp_percent


def _render(**fields) -> DashboardSurface:
    surface = DashboardSurface()
    DashboardRenderer(surface).render(decide(StatusSample(**fields)))
    return surface


# ─────────────────────────────────────────────────────────────────────────────
# Rendering a reading
# ─────────────────────────────────────────────────────────────────────────────

def test_initial_surface_matches_device_page() -> None:
    surface = DashboardSurface()
    assert surface.main_label == "DETECTING..."
    assert surface.label_class is None
    assert surface.confidence_text == "0% Confidence"
    assert [bar.text for bar in surface.bars.values()] == ["0%", "0%", "0%"]
    assert surface.latency_text == "0 ms"
    assert surface.last_update is None


def test_render_human_reading() -> None:
    surface = _render(human=90, animal=5, other=5, time_ms=120)

    assert surface.main_label == "HUMAN DETECTED"
    assert surface.label_class == "detected-human"
    assert surface.confidence_text == "90% Confidence"
    assert surface.bars['human'].width == 90
    assert surface.bars['animal'].text == "5%"
    assert surface.bars['other'].text == "5%"
    assert surface.latency_text == "120 ms"
    assert surface.updates == 1
    assert surface.last_update is not None


def test_render_animal_reading() -> None:
    surface = _render(human=10, animal=70, other=20)
    assert surface.main_label == "ANIMAL DETECTED"
    assert surface.label_class == "detected-animal"


def test_render_tie_as_others() -> None:
    surface = _render(human=40, animal=40, other=20)
    assert surface.main_label == "OTHERS"
    assert surface.label_class == "detected-other"
    assert surface.confidence_text == "20% Confidence"


def test_style_classes_replace_each_other() -> None:
    surface = DashboardSurface()
    renderer = DashboardRenderer(surface)

    renderer.render(decide(StatusSample(human=80)))
    renderer.render(decide(StatusSample(animal=80)))

    assert surface.label_class == "detected-animal"
    assert surface.updates == 2


# ─────────────────────────────────────────────────────────────────────────────
# Number formatting and clamping
# ─────────────────────────────────────────────────────────────────────────────

def test_fractional_and_integral_floats_formatting() -> None:
    surface = _render(human=62.5, animal=30.0, other=7.5, time_ms=101.0)

    assert surface.bars['human'].text == "62.5%"
    assert surface.bars['animal'].text == "30%"
    assert surface.confidence_text == "62.5% Confidence"
    assert surface.latency_text == "101 ms"


def test_out_of_range_values_clamp_bar_width_only() -> None:
    surface = _render(human=140, animal=-10, other=0)

    assert surface.bars['human'].width == 100
    assert surface.bars['human'].text == "140%"
    assert surface.bars['animal'].width == 0
    assert surface.bars['animal'].text == "-10%"


def test_clamp_percent() -> None:
    assert clamp_percent(-1) == 0
    assert clamp_percent(55) == 55
    assert clamp_percent(101) == 100
