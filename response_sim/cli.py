"""
Command-line entry point for the emergency response simulation.

Usage:
    python run_simulation.py              # Play five rounds
    python run_simulation.py --seed 42    # Reproducible incidents
    python run_simulation.py --log-level DEBUG --no-debrief
"""

import argparse
import logging
import random
import sys

from response_sim import config
from response_sim.console import run_simulation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Emergency response dispatch simulation"
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for incident generation (default: random)"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=config.DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {config.DEFAULT_LOG_LEVEL})"
    )
    parser.add_argument(
        "--no-debrief",
        action="store_true",
        help="Skip the round log after the final score"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # Logging goes to stderr so it never interleaves with the game text
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=config.LOG_FORMAT,
        stream=sys.stderr
    )

    run_simulation(
        rng=random.Random(args.seed),
        show_debrief=not args.no_debrief
    )
    return 0
