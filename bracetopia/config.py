"""Configuration dataclasses and YAML loader for Bracetopia."""

from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path
import yaml


DEFAULT_DELAY_US = 900000
DEFAULT_DIMENSION = 15
DEFAULT_STRENGTH = 50
DEFAULT_VACANCY = 20
DEFAULT_ENDLINE = 60

MIN_DIMENSION = 5
MAX_DIMENSION = 39


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


@dataclass
class GridConfig:
    dimension: int = DEFAULT_DIMENSION


@dataclass
class PreferenceConfig:
    strength: int = DEFAULT_STRENGTH  # % of same-style neighbors wanted
    vacancy: int = DEFAULT_VACANCY    # % of cells left empty
    endline: int = DEFAULT_ENDLINE    # % of occupants preferring endline


@dataclass
class SimulationConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    preferences: PreferenceConfig = field(default_factory=PreferenceConfig)
    cycle_limit: Optional[int] = None  # None runs interactively forever
    delay_us: int = DEFAULT_DELAY_US

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = False
    snapshot_enabled: bool = False
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))

    @property
    def batch(self) -> bool:
        return self.cycle_limit is not None


def _check_percent(name: str, value: int) -> None:
    if value < 1 or value > 99:
        raise ConfigError(f"{name} ({value}) must be a value in [1...99]")


def validate_config(config: SimulationConfig) -> SimulationConfig:
    """
    Check ranges, raising ConfigError on the first bad value.

    A negative delay is not an error; it falls back to the default.
    """
    if config.delay_us < 0:
        config.delay_us = DEFAULT_DELAY_US

    if config.cycle_limit is not None and config.cycle_limit < 0:
        raise ConfigError(
            f"count ({config.cycle_limit}) must be a non-negative integer."
        )

    dimension = config.grid.dimension
    if dimension < MIN_DIMENSION or dimension > MAX_DIMENSION:
        raise ConfigError(
            f"dimension ({dimension}) must be a value in "
            f"[{MIN_DIMENSION}...{MAX_DIMENSION}]"
        )

    prefs = config.preferences
    _check_percent("preference strength", prefs.strength)
    _check_percent("vacancy", prefs.vacancy)
    _check_percent("endline proportion", prefs.endline)
    return config


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"section '{name}' must be a mapping")
    return value


def load_config(config_path: Path) -> SimulationConfig:
    """Load YAML configuration file; absent keys keep their defaults."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: top level must be a mapping")

    grid_raw = _section(raw, 'grid')
    grid = GridConfig(
        dimension=int(grid_raw.get('dimension', DEFAULT_DIMENSION))
    )

    prefs_raw = _section(raw, 'preferences')
    preferences = PreferenceConfig(
        strength=int(prefs_raw.get('strength', DEFAULT_STRENGTH)),
        vacancy=int(prefs_raw.get('vacancy', DEFAULT_VACANCY)),
        endline=int(prefs_raw.get('endline', DEFAULT_ENDLINE))
    )

    sim_raw = _section(raw, 'simulation')
    cycle_limit = sim_raw.get('cycle_limit')

    # Parse export config (optional)
    export_raw = _section(raw, 'export')

    return SimulationConfig(
        grid=grid,
        preferences=preferences,
        cycle_limit=int(cycle_limit) if cycle_limit is not None else None,
        delay_us=int(sim_raw.get('delay_us', DEFAULT_DELAY_US)),
        seed=sim_raw.get('seed'),
        csv_enabled=export_raw.get('csv', False),
        snapshot_enabled=export_raw.get('snapshot', False),
        gif_enabled=export_raw.get('gif', False)
    )
