"""CSV export functionality for Bracetopia."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.state import SimulationState


FIELDNAMES = ['cycle', 'moves', 'happiness', 'contented', 'discontented']


class CSVWriter:
    """
    Exports per-cycle statistics to CSV format incrementally.

    Output format:
        cycle,moves,happiness,contented,discontented
        0,0,0.5123,101,79
        ...
    """

    def __init__(self, output_path: Path):
        self.output_path = Path(output_path)
        self.file: Optional[object] = None
        self.writer: Optional[csv.DictWriter] = None
        self._is_open = False

    def open(self) -> None:
        """Initialize file and write header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=FIELDNAMES)
        self.writer.writeheader()
        self._is_open = True

    def append(self, state: "SimulationState") -> None:
        """Write the statistics row for one cycle."""
        if not self._is_open:
            self.open()
        self.writer.writerow(state.to_csv_row())
        self.file.flush()

    def close(self) -> None:
        """Close file handle."""
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None
            self._is_open = False

