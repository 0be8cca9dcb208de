#!/usr/bin/env python3
"""
Bracetopia

A Schelling-style segregation simulation of programmers who prefer
neighbors sharing their brace style (endline or newline).

Usage:
    bracetopia [-h] [-t N] [-c N] [-d dim] [-s %str] [-v %vac] [-e %end]

Examples:
    bracetopia                        # interactive, Control-C to quit
    bracetopia -c 5 -d 7 -s 30        # batch, prints cycles 0..5
    bracetopia --config configs/default.yaml -c 20 --csv --gif --seed 42
"""

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

import yaml

from .config import (
    ConfigError, SimulationConfig, load_config, validate_config
)
from .model.engine import SimulationEngine
from .model.state import SimulationState
from .export.csv_writer import CSVWriter
from .export.visualizer import Visualizer
from .export.reporter import Reporter
from .export.text import TextPrinter


MAX_GIF_FRAMES = 300


class UsageHelpAction(argparse.Action):
    """Print help on stderr and exit with a failure status."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS,
                 default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest,
                         default=default, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help(sys.stderr)
        parser.exit(1)


class BracetopiaParser(argparse.ArgumentParser):
    """Argument parser whose errors exit with status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    """Create the command line parser."""
    parser = BracetopiaParser(
        prog='bracetopia',
        add_help=False,
        description='Brace style segregation simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    bracetopia -t 5000
    bracetopia -c 4 -d 7 -s 30 -v 30 -e 75
    bracetopia --config configs/default.yaml -c 20 --csv --gif --seed 42
        """
    )

    parser.add_argument('-h', '--help', action=UsageHelpAction,
                        help='print this usage message')

    # Simulation parameters (override the config file)
    parser.add_argument('-t', dest='delay', type=int, default=None, metavar='N',
                        help='microseconds cycle delay (default: 900000)')
    parser.add_argument('-c', dest='count', type=int, default=None, metavar='N',
                        help='count cycle maximum value; switches to batch output')
    parser.add_argument('-d', dest='dimension', type=int, default=None, metavar='dim',
                        help='width and height dimension (default: 15)')
    parser.add_argument('-s', dest='strength', type=int, default=None, metavar='str',
                        help='strength of preference (default: 50)')
    parser.add_argument('-v', dest='vacancy', type=int, default=None, metavar='vac',
                        help='percent vacancies (default: 20)')
    parser.add_argument('-e', dest='endline', type=int, default=None, metavar='end',
                        help='percent Endline braces; others want Newline (default: 60)')

    parser.add_argument('--config', type=Path, default=None,
                        help='Path to YAML configuration file')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')
    parser.add_argument('--out-dir', type=Path, default=None,
                        help='Output directory for exports (default: ./output)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable per-cycle CSV log')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable per-cycle CSV log')
    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Save a PNG of the final grid')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')
    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')
    parser.add_argument('--report', action='store_true', default=False,
                        help='Print a summary report when the run ends')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress status messages')

    return parser


def apply_overrides(config: SimulationConfig, args: argparse.Namespace) -> SimulationConfig:
    """Copy command line values over the loaded configuration."""
    if args.delay is not None:
        config.delay_us = args.delay
    if args.count is not None:
        config.cycle_limit = args.count
    if args.dimension is not None:
        config.grid.dimension = args.dimension
    if args.strength is not None:
        config.preferences.strength = args.strength
    if args.vacancy is not None:
        config.preferences.vacancy = args.vacancy
    if args.endline is not None:
        config.preferences.endline = args.endline
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    if args.seed is not None:
        config.seed = args.seed
    if args.out_dir is not None:
        config.out_dir = args.out_dir
    config.quiet = args.quiet
    return config


def status(config: SimulationConfig, message: str) -> None:
    """Print a status line to stderr unless running quietly."""
    if not config.quiet:
        print(message, file=sys.stderr)


class Recorder:
    """Feeds every snapshot to the enabled exporters."""

    def __init__(self, config: SimulationConfig, config_path: Optional[Path]):
        self.config = config
        self.csv_writer = None
        if config.csv_enabled:
            self.csv_writer = CSVWriter(config.out_dir / 'cycle_log.csv')
            self.csv_writer.open()
        self.visualizer = Visualizer(config.grid.dimension)
        self.reporter = Reporter(str(config_path) if config_path else None,
                                 config.seed)
        self.final_state: Optional[SimulationState] = None

    def record(self, state: SimulationState) -> None:
        self.final_state = state
        if self.csv_writer:
            self.csv_writer.append(state)
        if self.config.gif_enabled and len(self.visualizer.frames) < MAX_GIF_FRAMES:
            self.visualizer.buffer_frame(state)
        self.reporter.update(state)

    def finish(self) -> None:
        """Close the CSV log and write image exports."""
        config = self.config
        if self.csv_writer:
            self.csv_writer.close()
            status(config, f"CSV saved: {config.out_dir / 'cycle_log.csv'}")

        if config.snapshot_enabled and self.final_state:
            snapshot_path = config.out_dir / 'final_state.png'
            self.visualizer.save_snapshot(self.final_state, snapshot_path)
            status(config, f"Snapshot saved: {snapshot_path}")

        if config.gif_enabled:
            gif_path = config.out_dir / 'simulation.gif'
            status(config, f"Generating GIF ({len(self.visualizer.frames)} frames)...")
            self.visualizer.generate_gif(gif_path)
            self.visualizer.clear_frames()
            status(config, f"Animation saved: {gif_path}")


def run_batch(engine: SimulationEngine, recorder: Recorder,
              stream=None) -> None:
    """Print cycle_limit + 1 snapshots as plain text."""
    printer = TextPrinter(engine.config, stream)
    while not engine.is_finished():
        state = engine.advance()
        printer.write(state)
        recorder.record(state)


def run_interactive(window, engine: SimulationEngine, recorder: Recorder) -> None:
    """Redraw the city every cycle until interrupted."""
    # curses is only needed on this path
    from .export.terminal import TerminalView

    view = TerminalView(window, engine.config)
    delay = engine.config.delay_us / 1_000_000
    while not engine.is_finished():
        state = engine.advance()
        view.draw(state)
        recorder.record(state)
        time.sleep(delay)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config) if args.config else SimulationConfig()
        config = validate_config(apply_overrides(config, args))
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except ConfigError as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except (yaml.YAMLError, TypeError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    engine = SimulationEngine(config)
    recorder = Recorder(config, args.config)

    try:
        if config.batch:
            run_batch(engine, recorder)
        else:
            import curses
            curses.wrapper(run_interactive, engine, recorder)
    except KeyboardInterrupt:
        status(config, "Simulation interrupted by user.")

    recorder.finish()

    summary = engine.get_summary()
    status(config, f"Finished after {summary['cycles']} cycles, "
                   f"{summary['total_moves']} moves.")

    # Print summary report
    if args.report and recorder.final_state:
        print(recorder.reporter.generate_summary(recorder.final_state, config))

    return 0


if __name__ == '__main__':
    sys.exit(main())
