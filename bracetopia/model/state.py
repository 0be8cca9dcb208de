"""State snapshot dataclasses for Bracetopia."""

from dataclasses import dataclass, field
from typing import Dict, List
import numpy as np

from .cell import cells_to_rows


@dataclass(frozen=True)
class CycleResult:
    """Outcome of one engine cycle."""
    moves: int
    aggregate_happiness: float  # summed over every cell before moving
    contented: int
    discontented: int


@dataclass
class SimulationState:
    """Snapshot of the city as displayed for a given cycle."""
    cycle: int
    cells: np.ndarray  # grid before this cycle's moves
    moves: int         # relocations made by the previous cycle
    happiness: float   # aggregate happiness / occupied count
    metrics: Dict[str, float] = field(default_factory=dict)

    def rows(self, separator: str = '') -> List[str]:
        return cells_to_rows(self.cells, separator)

    def to_csv_row(self) -> Dict:
        """Convert to CSV-compatible format."""
        return {
            "cycle": self.cycle,
            "moves": self.moves,
            "happiness": f"{self.happiness:.4f}",
            "contented": int(self.metrics.get('contented', 0)),
            "discontented": int(self.metrics.get('discontented', 0)),
        }
