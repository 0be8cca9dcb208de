"""Full-screen interactive view using curses."""

import curses
from typing import List, TYPE_CHECKING

from .text import format_grid, format_status

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..model.state import SimulationState


QUIT_HINT = "Use Control-C to quit."


class TerminalView:
    """
    Redraws the city in place once per cycle.

    Cells are separated by a space so the grid reads as a square.
    Lines that do not fit the window are clipped rather than failing.
    """

    def __init__(self, window: "curses.window", config: "SimulationConfig"):
        self.window = window
        self.config = config
        curses.curs_set(0)

    def lines(self, state: "SimulationState") -> List[str]:
        grid = format_grid(state, separator=' ', trailing=' ')
        return grid + format_status(state, self.config) + [QUIT_HINT]

    def draw(self, state: "SimulationState") -> None:
        height, width = self.window.getmaxyx()
        self.window.erase()
        for y, line in enumerate(self.lines(state)):
            if y >= height:
                break
            try:
                self.window.addnstr(y, 0, line, max(0, width - 1))
            except curses.error:
                # writing the bottom-right cell raises after the cursor wraps
                pass
        self.window.refresh()
