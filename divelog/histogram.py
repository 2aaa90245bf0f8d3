"""
Depth histogram and decompression-time estimate.

Samples are bucketed by depth rounded to the nearest 10 units. Each sample
stands for one sampling interval, so a bucket's count converts directly into
minutes spent at that depth. Time at a non-surface depth beyond the first
minute is attributed to a decompression stop.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

import numpy as np

from .diagnostics import Diagnostics
from .dive import Dive

BUCKET_WIDTH = 10
HISTO_LIMIT = 1000  # bucket keys at or beyond this are dropped
SAMPLE_INTERVAL_SECONDS = 10


@dataclass
class DepthHistogram:
    """Aggregates derived from the depth histogram of one dive."""

    average_depth: int
    total_deco_minutes: int
    total_minutes: int
    deco_minutes: Dict[int, int] = field(default_factory=dict)  # bucket -> minutes
    bucket_counts: Dict[int, int] = field(default_factory=dict)  # bucket -> samples


def samples_to_minutes(count: int, sample_interval: float = SAMPLE_INTERVAL_SECONDS) -> int:
    """Minutes represented by count samples, truncated toward zero."""
    return int(count * (sample_interval / 60.0))


def bucket_keys(depths: np.ndarray) -> np.ndarray:
    """Nearest multiple of BUCKET_WIDTH for each depth, halves rounded up."""
    return (np.floor(depths / BUCKET_WIDTH + 0.5) * BUCKET_WIDTH).astype(int)


def depth_histogram(
    dive: Dive,
    sample_interval: float = SAMPLE_INTERVAL_SECONDS,
    diagnostics: Optional[Diagnostics] = None,
) -> DepthHistogram:
    """
    Bucket a dive by depth and derive average depth and deco time.

    Args:
        dive: Dive to aggregate
        sample_interval: Seconds of real time each sample represents
        diagnostics: Optional trace sink

    Returns:
        DepthHistogram. An empty dive yields all-zero aggregates.
    """
    diag = diagnostics or Diagnostics()

    depths = np.array([s.depth for s in dive.samples], dtype=float)
    keys = bucket_keys(depths)
    keys = keys[(keys >= 0) & (keys < HISTO_LIMIT)]
    if len(keys) < len(depths):
        diag.trace(f"histogram: dropped {len(depths) - len(keys)} out-of-range samples")

    counts = np.bincount(keys, minlength=HISTO_LIMIT)
    occupied = np.nonzero(counts)[0]

    total = int(counts.sum())
    weighted = int(np.sum(occupied * counts[occupied]))
    average = weighted // total if total else 0

    deco_minutes = {}
    for key in occupied:
        if key == 0:
            continue
        minutes = samples_to_minutes(int(counts[key]), sample_interval)
        if minutes > 1:
            deco_minutes[int(key)] = minutes - 1
            diag.trace(f"histogram: deco {key} {minutes - 1}")

    return DepthHistogram(
        average_depth=average,
        total_deco_minutes=sum(deco_minutes.values()),
        total_minutes=samples_to_minutes(total, sample_interval),
        deco_minutes=deco_minutes,
        bucket_counts={int(k): int(counts[k]) for k in occupied},
    )
