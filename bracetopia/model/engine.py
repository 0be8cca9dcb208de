"""Simulation engine for Bracetopia."""

import numpy as np
from collections import deque
from typing import Dict, Optional, TYPE_CHECKING

from .cell import CellValue
from .grid import NeighborhoodGrid
from .happiness import happiness_map, contentment_map
from .population import (
    PopulationCounts, derive_counts, generate_population, shuffle_population
)
from .state import CycleResult, SimulationState

if TYPE_CHECKING:
    from ..config import SimulationConfig


class SimulationEngine:
    """
    Orchestrates the discrete-time relocation cycle.

    Implements:
    1. Population generation, shuffling and grid layout
    2. Happiness snapshot of every cell
    3. Greedy relocation of discontented occupants
    4. Resolution of the cycle's bookkeeping masks
    """

    def __init__(self, config: "SimulationConfig",
                 rng: Optional[np.random.Generator] = None,
                 grid: Optional[NeighborhoodGrid] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        dimension = config.grid.dimension
        prefs = config.preferences
        if grid is None:
            self.counts = derive_counts(dimension * dimension,
                                        prefs.vacancy, prefs.endline)
            pool = generate_population(dimension * dimension,
                                       prefs.vacancy, prefs.endline)
            shuffle_population(pool, self.rng)
            grid = NeighborhoodGrid.from_pool(pool, dimension)
        else:
            present = grid.counts()
            self.counts = PopulationCounts(
                total=grid.size,
                vacant=present[CellValue.VACANT],
                endline=present[CellValue.ENDLINE],
                newline=present[CellValue.NEWLINE]
            )
        self.grid = grid

        self.current_cycle = 0
        self.last_moves = 0
        self.total_moves = 0

    @property
    def occupied_count(self) -> int:
        """Divisor for the displayed happiness, fixed at configuration time."""
        return self.counts.occupied

    def step(self) -> CycleResult:
        """
        Execute one cycle, mutating the grid in place.

        1. Snapshot happiness and contentment of every cell
        2. Move each discontented occupant to the first vacancy
        3. Turn freed cells into vacancies and count the moves
        """
        strength = self.config.preferences.strength

        # Phase 1: snapshot before any moves
        happiness = happiness_map(self.grid.cells)
        occupied = self.grid.occupied_mask()
        contented = contentment_map(happiness, strength) & occupied
        discontented = occupied & ~contented
        aggregate = float(np.sum(happiness))

        # Phase 2 & 3: relocate and resolve
        moves = self._relocate(discontented)
        self.total_moves += moves

        return CycleResult(
            moves=moves,
            aggregate_happiness=aggregate,
            contented=int(np.count_nonzero(contented)),
            discontented=int(np.count_nonzero(discontented))
        )

    def _relocate(self, discontented: np.ndarray) -> int:
        """
        Greedy row-major relocation.

        Vacancies consumed during a cycle are always the first remaining
        one in scan order, and freed cells only become vacant at
        resolution, so the candidate targets are the cycle's initial
        vacancies taken front to back.
        """
        shape = self.grid.cells.shape
        cells = self.grid.cells.reshape(-1).copy()
        wants_move = discontented.reshape(-1)
        moved = np.zeros(cells.size, dtype=bool)
        freed = np.zeros(cells.size, dtype=bool)
        targets = deque(int(i) for i in self.grid.vacancies())

        for index in range(cells.size):
            if not targets:
                break  # no vacancy left, everyone else stays put
            if moved[index] or not wants_move[index]:
                continue
            target = targets.popleft()
            cells[target] = cells[index]
            moved[target] = True
            freed[index] = True

        cells[freed] = CellValue.VACANT
        self.grid.cells[:, :] = cells.reshape(shape)
        return int(np.count_nonzero(freed))

    def advance(self) -> SimulationState:
        """
        Produce the snapshot for the current cycle, then run the cycle.

        The snapshot shows the grid before moving together with the move
        count of the previous cycle, so cycle 0 is the initial city.
        """
        cells = self.grid.copy_cells()
        result = self.step()
        occupied = self.occupied_count
        happiness = result.aggregate_happiness / occupied if occupied > 0 else 0.0

        state = SimulationState(
            cycle=self.current_cycle,
            cells=cells,
            moves=self.last_moves,
            happiness=happiness,
            metrics={
                'contented': result.contented,
                'discontented': result.discontented,
                'aggregate_happiness': result.aggregate_happiness,
                'cycle_moves': result.moves,
            }
        )
        self.last_moves = result.moves
        self.current_cycle += 1
        return state

    def is_finished(self) -> bool:
        """Batch runs stop after cycle_limit + 1 snapshots; interactive never."""
        limit = self.config.cycle_limit
        return limit is not None and self.current_cycle > limit

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        counts = self.grid.counts()
        return {
            'cycles': self.current_cycle,
            'total_moves': self.total_moves,
            'vacant': counts[CellValue.VACANT],
            'newline': counts[CellValue.NEWLINE],
            'endline': counts[CellValue.ENDLINE],
        }
