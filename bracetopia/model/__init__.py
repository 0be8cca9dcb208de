"""Model package for Bracetopia."""

from .cell import CellValue, symbol_for, cells_to_rows
from .population import (
    PopulationCounts, derive_counts, generate_population, shuffle_population
)
from .grid import NeighborhoodGrid
from .happiness import evaluate, is_contented, happiness_map
from .state import CycleResult, SimulationState
from .engine import SimulationEngine

__all__ = [
    'CellValue',
    'symbol_for',
    'cells_to_rows',
    'PopulationCounts',
    'derive_counts',
    'generate_population',
    'shuffle_population',
    'NeighborhoodGrid',
    'evaluate',
    'is_contented',
    'happiness_map',
    'CycleResult',
    'SimulationState',
    'SimulationEngine',
]
