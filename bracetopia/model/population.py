"""Population generation and shuffling for Bracetopia."""

from dataclasses import dataclass

import numpy as np

from .cell import CellValue


@dataclass(frozen=True)
class PopulationCounts:
    """Exact number of cells of each kind for a configuration."""
    total: int
    vacant: int
    endline: int
    newline: int

    @property
    def occupied(self) -> int:
        return self.total - self.vacant


def _clamp(value: int, upper: int) -> int:
    return max(0, min(value, upper))


def derive_counts(total: int, vacancy: int, endline: int) -> PopulationCounts:
    """
    Split ``total`` cells into vacant, endline and newline counts.

    Vacancy is truncated first; the style split is applied to the
    remaining occupied cells, so the three counts always sum to total.
    """
    vacant = _clamp(total * vacancy // 100, total)
    occupied = total - vacant
    endline_count = _clamp(occupied * endline // 100, occupied)
    return PopulationCounts(
        total=total,
        vacant=vacant,
        endline=endline_count,
        newline=occupied - endline_count
    )


def generate_population(total: int, vacancy: int, endline: int) -> np.ndarray:
    """
    Build the unshuffled pool: vacant cells, then endline, then newline.
    """
    counts = derive_counts(total, vacancy, endline)
    pool = np.full(total, CellValue.NEWLINE, dtype=np.int8)
    pool[:counts.vacant] = CellValue.VACANT
    pool[counts.vacant:counts.vacant + counts.endline] = CellValue.ENDLINE
    return pool


def shuffle_population(pool: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """
    Fisher-Yates shuffle of ``pool`` in place, low index to high.

    For each i, a j is drawn uniformly from [i, n) and the two entries
    are swapped. Returns the same array for convenience.
    """
    n = len(pool)
    for i in range(n - 1):
        j = int(rng.integers(i, n))
        pool[i], pool[j] = pool[j], pool[i]
    return pool
