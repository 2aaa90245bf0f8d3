#!/usr/bin/env python3
"""
Dive log analysis CLI.

Usage:
    python run_divelog.py dive.xml show                     # Every sample
    python run_divelog.py dive.xml histo                    # Depth histogram / deco time
    python run_divelog.py dive.xml maxdepth                 # Max depth
    python run_divelog.py dive.xml match --time "2019:11:07 14:45:32"
    python run_divelog.py dive.xml play                     # Ceiling clearance
    python run_divelog.py dive.xml plot --output dive.png   # Depth/ceiling plot
"""

import argparse
import logging
import os
import sys
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from divelog import DiveAnalysis, Diagnostics, load_config
from divelog.report import print_all, print_histo
from ingest import load_shearwater_log

logger = logging.getLogger("run_divelog")

MATCH_TIME_FORMAT = "%Y:%m:%d %H:%M:%S"


def setup_logging(verbose: bool = False):
    """Set up logging configuration."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=log_format,
        handlers=[logging.StreamHandler()],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Analyze a Shearwater XML dive log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_divelog.py sw.xml histo
  python run_divelog.py sw.xml match --time "2019:11:07 14:45:32" --adjust 1
  python run_divelog.py --trace sw.xml play --no-ppo2
        """
    )
    parser.add_argument("logfile", help="Shearwater XML log file")
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to analysis config YAML (default: config.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--trace", action="store_true",
        help="Write analysis trace to stderr",
    )
    parser.add_argument(
        "--print-model", action="store_true",
        help="Dump decompression model state to stdout during playback",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("show", help="Print every sample")
    subparsers.add_parser("histo", help="Print depth histogram and deco time")
    subparsers.add_parser("maxdepth", help="Print the maximum depth")

    match_parser = subparsers.add_parser("match", help="Depth at a given time")
    match_parser.add_argument(
        "--time", required=True,
        help='Target time, "YYYY:MM:DD HH:MM:SS" in the log timezone',
    )
    match_parser.add_argument(
        "--adjust", type=int, default=0,
        help="Hours added to log times before matching",
    )

    play_parser = subparsers.add_parser("play", help="Replay through the deco model")
    play_parser.add_argument(
        "--no-ppo2", action="store_true",
        help="Breathe the baseline mix instead of the logged PPO2",
    )

    plot_parser = subparsers.add_parser("plot", help="Plot depth and ceiling")
    plot_parser.add_argument(
        "--output", default="dive_playback.png",
        help="PNG file to write",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    diagnostics = Diagnostics()
    if args.trace:
        diagnostics.enable_trace(sys.stderr)
    if args.print_model:
        diagnostics.enable_model_print(sys.stdout)

    dive = load_shearwater_log(args.logfile)
    analysis = DiveAnalysis(dive, config, diagnostics)

    if args.command == "show":
        print_all(dive)

    elif args.command == "histo":
        print_histo(dive, histogram=analysis.histogram())

    elif args.command == "maxdepth":
        print(f"max depth {analysis.max_depth():g}")

    elif args.command == "match":
        target = datetime.strptime(args.time, MATCH_TIME_FORMAT)
        depth, found = analysis.find_best_match(target, args.adjust)
        if found:
            print(f"depth {depth:g} at {args.time}")
        else:
            print(f"no confident match at {args.time} (closest depth {depth:g})")
            return 1

    elif args.command in ("play", "plot"):
        use_ppo2 = False if getattr(args, "no_ppo2", False) else None
        result = analysis.playback(use_ppo2=use_ppo2)
        print(f"max ceiling distance {result.max_clearance:.1f}")
        if result.min_clearance is None:
            print("min ceiling distance: none qualified")
        else:
            print(f"min ceiling distance {result.min_clearance:.1f}")

        if args.command == "plot":
            from divelog.plotting import plot_playback
            path = plot_playback(dive, result, args.output)
            print(f"Saved: {path}")

    return 0


def main():
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return

    setup_logging(args.verbose)

    try:
        status = run(args)
    except (OSError, ValueError) as e:
        logger.error(f"{e}")
        sys.exit(1)
    sys.exit(status)


if __name__ == "__main__":
    main()
