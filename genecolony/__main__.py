"""Entry point for ``python -m genecolony``.

Loads the default YAML config, seeds a colony and evolves it, logging a
summary line per generation.
"""

from __future__ import annotations

import argparse
import pathlib

from genecolony.evolution.evolution import GenerationLog
from genecolony.logger_setup import setup_logger
from genecolony.simulation.config import SimulationConfig
from genecolony.simulation.engine import SimulationEngine
from genecolony.visualization.visualizer import LoggingVisualizer

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def main() -> None:
    """Parse CLI args, build the engine, run the evolution."""
    parser = argparse.ArgumentParser(
        prog="genecolony",
        description="genecolony - genetic-algorithm colony simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "-g",
        "--generations",
        type=int,
        default=None,
        help="Generations to evolve (default: from config)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Console log level (default: from config)",
    )
    parser.add_argument(
        "--log-file",
        type=pathlib.Path,
        default=None,
        help="Also write the log to this file",
    )
    parser.add_argument(
        "--audit",
        action="store_true",
        help="Log every newly built organism (implies DEBUG output)",
    )
    args = parser.parse_args()

    config = SimulationConfig.from_yaml(args.config)
    level = "DEBUG" if args.audit else args.log_level or config.log_level
    setup_logger(level, args.log_file, audit=args.audit)

    engine = SimulationEngine(config=config, visualizer=LoggingVisualizer())
    history = GenerationLog()
    engine.add_listener(history)
    colony = engine.run(args.generations)
    print(colony)


if __name__ == "__main__":
    main()
