"""Summary report generation for Bracetopia."""

import numpy as np
from typing import Dict, Optional, TYPE_CHECKING
from pathlib import Path
from scipy.ndimage import label

from ..model.cell import CellValue

if TYPE_CHECKING:
    from ..config import SimulationConfig
    from ..model.state import SimulationState


# 8-connected clusters, matching the Moore neighborhood
CLUSTER_STRUCTURE = np.ones((3, 3), dtype=int)


def count_clusters(cells: np.ndarray) -> Dict[CellValue, int]:
    """Number of connected same-style neighborhoods per style."""
    clusters = {}
    for kind in (CellValue.NEWLINE, CellValue.ENDLINE):
        _, count = label(cells == kind, structure=CLUSTER_STRUCTURE)
        clusters[kind] = int(count)
    return clusters


class Reporter:
    """Generates summary statistics and formatted text report."""

    def __init__(self, config_path: Optional[str], seed: Optional[int]):
        self.config_path = config_path
        self.seed = seed
        self.initial_happiness: Optional[float] = None
        self.initial_clusters: Optional[Dict[CellValue, int]] = None
        self.total_moves = 0
        self.settled_cycle: Optional[int] = None

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per cycle."""
        if self.initial_happiness is None:
            self.initial_happiness = state.happiness
            self.initial_clusters = count_clusters(state.cells)

        self.total_moves += state.moves

        # First cycle reached with nobody moving in the cycle before it
        if self.settled_cycle is None and state.cycle > 0 and state.moves == 0:
            self.settled_cycle = state.cycle

    def generate_summary(self, final_state: "SimulationState",
                         config: "SimulationConfig") -> str:
        """Returns formatted text report."""
        output_dir = config.out_dir
        prefs = config.preferences
        final_clusters = count_clusters(final_state.cells)
        initial_clusters = self.initial_clusters or final_clusters
        settled = (f"cycle {self.settled_cycle}"
                   if self.settled_cycle is not None else "not settled")

        # Build report
        lines = [
            "",
            "=" * 80,
            "                       BRACETOPIA SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path or '(command line)'}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            f"Dimension: {config.grid.dimension}  Strength: {prefs.strength}%  "
            f"Vacancy: {prefs.vacancy}%  Endline: {prefs.endline}%",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Cycles Shown:          {final_state.cycle + 1}",
            f"Total Moves:           {self.total_moves}",
            f"Initial Happiness:     {self.initial_happiness or 0.0:.4f}",
            f"Final Happiness:       {final_state.happiness:.4f}",
            f"Settled:               {settled}",
            "",
            "SEGREGATION",
            "-" * 40,
            f"Newline Clusters:      {initial_clusters[CellValue.NEWLINE]} -> "
            f"{final_clusters[CellValue.NEWLINE]}",
            f"Endline Clusters:      {initial_clusters[CellValue.ENDLINE]} -> "
            f"{final_clusters[CellValue.ENDLINE]}",
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        # Output file paths
        if config.csv_enabled:
            lines.append(f"CSV Log:    {Path(output_dir) / 'cycle_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if config.snapshot_enabled:
            lines.append(f"Snapshot:   {Path(output_dir) / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if config.gif_enabled:
            lines.append(f"Animation:  {Path(output_dir) / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
