"""I/O package for Bracetopia."""

from .csv_writer import CSVWriter
from .visualizer import Visualizer
from .reporter import Reporter, count_clusters
from .text import TextPrinter, format_grid, format_status

__all__ = [
    'CSVWriter',
    'Visualizer',
    'Reporter',
    'count_clusters',
    'TextPrinter',
    'format_grid',
    'format_status',
]
