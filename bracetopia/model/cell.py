"""Cell values and their text symbols."""

from enum import IntEnum
from typing import List

import numpy as np


class CellValue(IntEnum):
    """Possible contents of a grid cell."""
    VACANT = 0
    NEWLINE = 1  # first style
    ENDLINE = 2  # second style


SYMBOLS = {
    CellValue.VACANT: '.',
    CellValue.NEWLINE: 'n',
    CellValue.ENDLINE: 'e',
}


def symbol_for(value: int) -> str:
    """Return the display character for a cell value."""
    return SYMBOLS[CellValue(int(value))]


def cells_to_rows(cells: np.ndarray, separator: str = '') -> List[str]:
    """Render each grid row as a string of cell symbols."""
    return [separator.join(symbol_for(v) for v in row) for row in cells]
