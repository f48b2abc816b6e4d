# humosync/ui/curses_ui.py
import curses
import logging
from datetime import datetime
from typing import Dict, Optional

from ..config import UI_TITLE
from ..telemetry.status import FeedStatus
from ..telemetry.utils import format_time_ago
from .base import BaseUIManager
from .renderer import clamp_percent
from .state import BAR_ORDER, DashboardSurface

logger = logging.getLogger(__name__)

BAR_FILLED = '█'
BAR_EMPTY = '░'


def render_bar(percent: float, cells: int) -> str:
    """Draw a proportion bar as a fixed-width string"""
    if cells <= 0:
        return ''
    filled = int(round(clamp_percent(percent) / 100 * cells))
    return BAR_FILLED * filled + BAR_EMPTY * (cells - filled)


class CursesUIManager(BaseUIManager):
    """Terminal dashboard"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.stdscr = curses.initscr()
        try:
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
            self.stdscr.nodelay(True)
            try:
                curses.curs_set(0)
            except curses.error:
                pass  # Terminal can't hide the cursor
            self.colors = self._init_colors()
        except Exception as e:
            logger.error(f"Terminal setup failed: {e}")
            self.cleanup()
            raise
        self.height = 0
        self.width = 0
        logger.info("CursesUIManager initialized")

    @staticmethod
    def _init_colors() -> Dict[str, int]:
        if not curses.has_colors():
            return {}
        curses.start_color()
        curses.use_default_colors()

        palette = {
            'detected-human': curses.COLOR_GREEN,
            'detected-animal': curses.COLOR_RED,
            'detected-other': curses.COLOR_WHITE,
            'bar': curses.COLOR_CYAN,
            'network': curses.COLOR_YELLOW,
        }
        attrs = {}
        for pair, (name, color) in enumerate(palette.items(), start=1):
            curses.init_pair(pair, color, -1)
            attrs[name] = curses.color_pair(pair)
        return attrs

    def poll_input(self) -> Optional[str]:
        key = self.stdscr.getch()
        if key == -1 or not 0 <= key < 256:
            return None
        return chr(key)

    def update_display(self, surface: DashboardSurface, feed_status: FeedStatus):
        """Draw the curses-based UI"""
        self.height, self.width = self.stdscr.getmaxyx()
        self.stdscr.erase()

        self._addstr(0, (self.width - len(UI_TITLE)) // 2, UI_TITLE, curses.A_BOLD)
        self._draw_time()
        self._draw_feed_status(2, feed_status)

        label_attr = curses.A_BOLD | self.colors.get(surface.label_class, 0)
        self._addstr(4, 2, surface.main_label, label_attr)
        self._addstr(5, 2, surface.confidence_text, curses.A_DIM)

        y = self._draw_bars(7, surface)
        self._addstr(y + 1, 2, f"Inference Time: {surface.latency_text}")
        self._draw_log_section(y + 3)

        self.stdscr.refresh()

    def _draw_feed_status(self, y: int, feed_status: FeedStatus):
        if feed_status.is_live:
            self._addstr(y, 2, "● LIVE INFERENCE", curses.A_BOLD | self.colors.get('detected-human', 0))
        else:
            text = f"○ {feed_status.status.upper()}"
            if feed_status.error_count:
                text += f" ({feed_status.error_count} failed polls)"
            self._addstr(y, 2, text, curses.A_BOLD | self.colors.get('network', 0))
        self._addstr(y, 40, f"Last update: {format_time_ago(feed_status.last_success)}", curses.A_DIM)

    def _draw_bars(self, start_y: int, surface: DashboardSurface) -> int:
        cells = max(10, min(50, self.width - 24))
        for i, name in enumerate(BAR_ORDER):
            bar = surface.bars[name]
            y = start_y + i
            self._addstr(y, 2, f"{name.title():<8}")
            self._addstr(y, 11, render_bar(bar.width, cells), self.colors.get('bar', 0))
            self._addstr(y, 12 + cells, f"{bar.text:>6}")
        return start_y + len(BAR_ORDER)

    def _draw_log_section(self, start_y: int):
        """Draw system log messages"""
        self._addstr(start_y, 2, "System Log:", curses.A_UNDERLINE)
        for i, message in enumerate(self.status_messages):
            if start_y + i + 1 >= self.height - 1:
                break
            attr = (curses.A_BOLD if "ALERT:" in message else
                    self.colors.get('network', curses.A_DIM) if "NETWORK:" in message else
                    curses.A_NORMAL)
            self._addstr(start_y + i + 1, 4, message, attr)

    def _draw_time(self):
        """Draw current time in top right corner"""
        time_str = datetime.now().strftime("%H:%M:%S")
        self._addstr(0, self.width - len(time_str) - 2, time_str)

    def _addstr(self, y: int, x: int, text: str, attr: int = curses.A_NORMAL):
        if y >= self.height or x >= self.width or x < 0:
            return
        text = text[:self.width - x - 1]
        try:
            self.stdscr.addstr(y, x, text, attr)
        except curses.error:
            pass  # Ignore if screen too small

    def cleanup(self):
        """Restore the terminal"""
        try:
            self.stdscr.keypad(False)
            curses.nocbreak()
            curses.echo()
        except curses.error as e:
            logger.error(f"Error restoring terminal: {e}")
        finally:
            curses.endwin()
        logger.info("Terminal restored")
