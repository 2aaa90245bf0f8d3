"""Plain-text reports over a dive and its histogram."""

import sys
from typing import Optional, TextIO

from .dive import Dive, format_unix_date
from .histogram import DepthHistogram, depth_histogram, SAMPLE_INTERVAL_SECONDS


def print_all(dive: Dive, out: Optional[TextIO] = None) -> None:
    """Print the dive summary followed by the key fields of every sample."""
    out = out or sys.stdout
    print(dive, file=out)
    for sample in dive.samples:
        t = dive.sample_time(sample)
        print(
            f"{format_unix_date(t)} depth {sample.depth:g} ppo2 {sample.average_ppo2:g} "
            f"mix {sample.fraction_o2:g}/{sample.fraction_he:g}",
            file=out,
        )


def print_histo(
    dive: Dive,
    out: Optional[TextIO] = None,
    sample_interval: float = SAMPLE_INTERVAL_SECONDS,
    histogram: Optional[DepthHistogram] = None,
) -> None:
    """Print average depth, per-depth deco minutes and total deco time."""
    out = out or sys.stdout
    if histogram is None:
        histogram = depth_histogram(dive, sample_interval)

    print(f"Avg {histogram.average_depth:4d}ft {histogram.total_minutes}min", file=out)
    print("Deco(ft,min):", file=out)
    for depth, minutes in sorted(histogram.deco_minutes.items()):
        print(f"{depth:4d} {minutes}", file=out)
    print(f"total deco {histogram.total_deco_minutes}", file=out)
