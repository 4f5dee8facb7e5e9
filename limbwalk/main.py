"""
Main Walk Demo Program
Runs a headless creature simulation and logs a summary
"""

import sys
import logging
import argparse

from limbwalk.creature.simulation import Simulation
from limbwalk.utils.config import Config
from limbwalk.utils.logger import setup_logger

logger = logging.getLogger("limbwalk.main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="limbwalk - procedural limb animation demo"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file"
    )
    parser.add_argument(
        "--variant",
        choices=["walker", "rotor"],
        default=None,
        help="Creature variant (overrides config)"
    )
    parser.add_argument(
        "--layout",
        type=str,
        default=None,
        help="Limb layout: spider, hexapod, quadruped, quad_rotor"
    )
    parser.add_argument(
        "--terrain",
        choices=["flat", "hills"],
        default=None,
        help="Terrain type (overrides config)"
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=600,
        help="Number of ticks to simulate"
    )
    parser.add_argument(
        "--target",
        type=float,
        nargs=2,
        metavar=("X", "Z"),
        default=(0.0, 12.0),
        help="Walk target on the ground plane"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        help="Also write logs to this directory"
    )
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> None:
    if args.variant:
        config.set("creature.variant", args.variant)
        if args.variant == "rotor" and not args.layout:
            config.set("creature.layout", "quad_rotor")
    if args.layout:
        config.set("creature.layout", args.layout)
    if args.terrain and args.terrain != config.get("terrain.type"):
        # Terrain parameters only apply to the type they were written for
        config.set("terrain", {"type": args.terrain})
    if args.debug:
        config.set("system.debug", True)


def main(argv=None) -> int:
    """Main program entry point"""
    args = build_parser().parse_args(argv)

    config = Config(args.config)
    apply_overrides(config, args)

    level = logging.DEBUG if config.get("system.debug") else logging.INFO
    setup_logger("limbwalk", level=level, log_dir=args.log_dir)

    logger.info(
        f"Starting {config.get('creature.variant')} creature "
        f"({config.get('creature.layout')}) for {args.ticks} ticks"
    )

    simulation = Simulation.from_config(config)
    target = (args.target[0], 0.0, args.target[1])
    simulation.run(args.ticks, target)

    summary = simulation.summary()
    logger.info(f"Root: {summary['root']}, camera: {summary['camera']}, arrived: {summary['arrived']}")
    logger.info(f"Skips: {summary['skips']}")
    if "gait" in summary:
        gait = summary["gait"]
        logger.info(f"Steps per limb: {gait['steps_taken']} (total {gait['total_steps']})")
        logger.info(f"Peak concurrent swing groups: {summary['peak_swing_groups']}")
    return 0


def run(argv=None) -> int:
    """Console entry point: main() with interrupt and fatal error handling"""
    try:
        return main(argv)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down...")
        return 0
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(run())
