"""Command line entry point for the intersection signal controller."""

from __future__ import annotations

import argparse
import logging
import sys

from intersection_control import IntersectionConfig, TrafficSystem
from intersection_control.stimulus import load_predefined_scenarios

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    scenarios = [scenario.name for scenario in load_predefined_scenarios()]
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--cycles", type=int, default=20, help="Number of cycles to run")
    parser.add_argument("--mode", choices=["console", "pygame"], default="console")
    parser.add_argument("--seed", type=int, help="Random seed for reproducible traffic")
    parser.add_argument("--scenario", choices=scenarios, help="Replay a predefined scenario")
    parser.add_argument("--base-green", type=int, default=20)
    parser.add_argument("--min-green", type=int, default=10)
    parser.add_argument("--max-green", type=int, default=60)
    parser.add_argument("--yellow", type=int, default=3)
    parser.add_argument("--crossing", type=float, default=3.0, help="Pedestrian walk duration")
    parser.add_argument("--interval", type=float, default=0.5, help="Simulated time between cycles")
    parser.add_argument("--density", type=int, default=5, help="Initial lane density (0-10)")
    parser.add_argument("--delay", type=float, default=0.0, help="Wall-clock pause after each cycle")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    config = IntersectionConfig(
        mode=args.mode,
        cycles=args.cycles,
        seed=args.seed,
        scenario=args.scenario,
        base_green_time=args.base_green,
        min_green_time=args.min_green,
        max_green_time=args.max_green,
        yellow_time=args.yellow,
        crossing_time=args.crossing,
        cycle_interval=args.interval,
        initial_density=args.density,
        cycle_delay=args.delay,
    )
    try:
        system = TrafficSystem(config)
    except (ValueError, RuntimeError) as exc:
        logger.error("Cannot start the simulation: %s", exc)
        return 2

    try:
        system.run()
    except Exception:
        logger.exception("Unhandled error in intersection simulation")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
