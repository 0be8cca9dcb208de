"""Plain-text rendering shared by batch and interactive output."""

import sys
from typing import List, TextIO, TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..model.state import SimulationState


def format_grid(state: "SimulationState", separator: str = '',
                trailing: str = '') -> List[str]:
    """One line per grid row, one symbol per cell."""
    return [row + trailing for row in state.rows(separator)]


def format_status(state: "SimulationState",
                  config: "SimulationConfig") -> List[str]:
    """Statistics lines printed under every grid."""
    prefs = config.preferences
    return [
        f"cycle: {state.cycle}",
        f"moves this cycle: {state.moves}",
        f"teams' \"happiness\": {state.happiness:.4f}",
        f"dim: {config.grid.dimension}, %strength of preference: "
        f"{prefs.strength}%, %vacancy: {prefs.vacancy}%, "
        f"%end: {prefs.endline}%",
    ]


class TextPrinter:
    """Writes each snapshot as a grid dump followed by its statistics."""

    def __init__(self, config: "SimulationConfig", stream: TextIO = None):
        self.config = config
        self.stream = stream if stream is not None else sys.stdout

    def write(self, state: "SimulationState") -> None:
        lines = format_grid(state) + format_status(state, self.config)
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()
