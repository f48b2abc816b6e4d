# humosync/ui/layout.py
from dataclasses import dataclass


@dataclass
class Layout:
    """Stores UI layout dimensions"""
    screen_width: int
    screen_height: int
    header_height: int
    padding: int
    camera_width: int
    results_x: int
    results_width: int
    card_height: int
    bar_row_height: int
    latency_height: int


class LayoutManager:
    """Handles UI layout calculations"""

    @staticmethod
    def calculate_layout(screen_width: int, screen_height: int) -> Layout:
        """Camera on the left, results column on the right"""
        padding = 10
        camera_width = int(screen_width * 0.55)
        return Layout(
            screen_width=screen_width,
            screen_height=screen_height,
            header_height=40,
            padding=padding,
            camera_width=camera_width,
            results_x=camera_width + padding,
            results_width=screen_width - camera_width - 2 * padding,
            card_height=80,
            bar_row_height=24,
            latency_height=24
        )
