"""Happiness evaluation for Bracetopia occupants."""

import numpy as np
from scipy.ndimage import convolve

from .cell import CellValue
from .grid import NeighborhoodGrid


# Counts the 8 Moore neighbors, excluding the cell itself
MOORE_KERNEL = np.array([
    [1, 1, 1],
    [1, 0, 1],
    [1, 1, 1]
], dtype=np.int32)


def evaluate(grid: NeighborhoodGrid, row: int, col: int) -> float:
    """
    Fraction of same-style occupants among a cell's real neighbors.

    Vacant cells have happiness 0. Off-grid neighbors are ignored and
    vacant neighbors do not count as real neighbors. An occupant with
    no real neighbors is fully happy (1.0).
    """
    kind = grid.cells[row, col]
    if kind == CellValue.VACANT:
        return 0.0

    valid = 0
    vacant = 0
    same = 0
    for nr, nc in grid.get_neighbors(row, col):
        valid += 1
        neighbor = grid.cells[nr, nc]
        if neighbor == CellValue.VACANT:
            vacant += 1
        elif neighbor == kind:
            same += 1

    real = valid - vacant
    if real == 0:
        return 1.0
    return same / real


def is_contented(happiness: float, strength: int) -> bool:
    """An occupant is contented unless happiness * 100 falls below strength."""
    return not (happiness * 100 < strength)


def happiness_map(cells: np.ndarray) -> np.ndarray:
    """
    Happiness of every cell at once, matching ``evaluate`` cell by cell.

    Neighbor counts come from a 3x3 convolution with zero padding, so
    off-grid positions contribute nothing.
    """
    occupied = (cells != CellValue.VACANT).astype(np.int32)
    real = convolve(occupied, MOORE_KERNEL, mode='constant', cval=0)

    same = np.zeros(cells.shape, dtype=np.int32)
    for kind in (CellValue.NEWLINE, CellValue.ENDLINE):
        mask = (cells == kind).astype(np.int32)
        same += mask * convolve(mask, MOORE_KERNEL, mode='constant', cval=0)

    ratio = np.where(real > 0, same / np.maximum(real, 1), 1.0)
    return np.where(occupied == 1, ratio, 0.0)


def contentment_map(happiness: np.ndarray, strength: int) -> np.ndarray:
    """Boolean contentment for every cell of a happiness map."""
    return ~(happiness * 100 < strength)
