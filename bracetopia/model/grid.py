"""Grid management for Bracetopia."""

import numpy as np
from typing import Dict, List, Optional, Tuple

from .cell import CellValue


# Moore neighborhood, (row, col) offsets
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1)
)


class NeighborhoodGrid:
    """
    Square city of cells, stored as a (dimension, dimension) int8 array.

    Coordinate convention: (row, col), indexed as cells[row, col].
    Flat indices are row-major.
    """

    def __init__(self, dimension: int):
        self.dimension = dimension
        self.cells = np.zeros((dimension, dimension), dtype=np.int8)

    @classmethod
    def from_pool(cls, pool: np.ndarray, dimension: int) -> "NeighborhoodGrid":
        """Lay a flat pool out row by row."""
        if len(pool) != dimension * dimension:
            raise ValueError(
                f"pool of {len(pool)} cells does not fill a "
                f"{dimension}x{dimension} grid"
            )
        grid = cls(dimension)
        grid.cells[:, :] = np.asarray(pool, dtype=np.int8).reshape(dimension, dimension)
        return grid

    @property
    def size(self) -> int:
        return self.dimension * self.dimension

    def is_valid(self, row: int, col: int) -> bool:
        """Check if (row, col) lies inside the grid."""
        return 0 <= row < self.dimension and 0 <= col < self.dimension

    def get_neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Return the in-grid Moore neighbors of a cell; no wraparound."""
        neighbors = []
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if self.is_valid(nr, nc):
                neighbors.append((nr, nc))
        return neighbors

    def vacancies(self) -> np.ndarray:
        """Flat indices of vacant cells in row-major order."""
        return np.flatnonzero(self.cells == CellValue.VACANT)

    def first_vacancy(self) -> Optional[Tuple[int, int]]:
        """First vacant cell in row-major scan order, or None."""
        vacant = self.vacancies()
        if vacant.size == 0:
            return None
        return self.position(int(vacant[0]))

    def position(self, index: int) -> Tuple[int, int]:
        """Convert a flat index into (row, col)."""
        row, col = divmod(index, self.dimension)
        return row, col

    def occupied_mask(self) -> np.ndarray:
        return self.cells != CellValue.VACANT

    def counts(self) -> Dict[CellValue, int]:
        """Number of cells holding each value."""
        return {
            value: int(np.count_nonzero(self.cells == value))
            for value in CellValue
        }

    def copy_cells(self) -> np.ndarray:
        return self.cells.copy()
