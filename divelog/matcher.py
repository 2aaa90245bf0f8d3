"""
Nearest-time matching: correlate an external event time with a logged depth.

Samples are walked in offset order. The search returns the closest sample at or
before the target and stops as soon as it passes the target, relying on the
ordering that Dive enforces on construction.
"""

from datetime import datetime, timedelta
from typing import NamedTuple, Optional

from .diagnostics import Diagnostics
from .dive import Dive, format_unix_date

MATCH_TOLERANCE_SECONDS = 10


class MatchResult(NamedTuple):
    """Depth of the best match and whether it is a confident correlation."""

    depth: float
    found: bool


def find_best_match(
    dive: Dive,
    target: datetime,
    adjust_hours: int = 0,
    tolerance_seconds: float = MATCH_TOLERANCE_SECONDS,
    diagnostics: Optional[Diagnostics] = None,
) -> MatchResult:
    """
    Find the depth logged closest to, and not after, a target time.

    Args:
        dive: Dive to search
        target: Absolute time to locate. A naive datetime is taken to be in
            the timezone of the dive start.
        adjust_hours: Whole hours added to every sample time before comparing,
            for logs recorded in a different timezone than the query.
        tolerance_seconds: Largest gap to the preceding sample that still
            counts as a confident match.
        diagnostics: Optional trace sink.

    Returns:
        MatchResult(depth, found). When the closest preceding sample is more
        than tolerance_seconds away the depth is still returned, with
        found=False. An empty dive gives (0.0, False).
    """
    diag = diagnostics or Diagnostics()
    if target.tzinfo is None and dive.start_time.tzinfo is not None:
        target = target.replace(tzinfo=dive.start_time.tzinfo)

    tolerance = timedelta(seconds=tolerance_seconds)
    target_str = format_unix_date(target)

    depth = 0.0
    found = False
    delta: Optional[timedelta] = None

    for index, sample in enumerate(dive.samples):
        t = dive.sample_time(sample, adjust_hours)

        if t == target:
            diag.trace(f"perfect match {target_str} {format_unix_date(t)}")
            return MatchResult(sample.depth, True)

        if t > target:
            if index == 0:
                # Target predates the whole log; the first sample is the best we have
                diag.trace(f"before first {target_str} {format_unix_date(t)}")
                return MatchResult(sample.depth, True)
            diag.trace(f"past it {target_str} {format_unix_date(t)} delta {delta}")
            break

        if delta is None or target - t < delta:
            delta = target - t
            depth = sample.depth
            found = True
            diag.trace(
                f"{target_str} {format_unix_date(t)} delta {delta} depth {depth}"
            )

    if found and delta > tolerance:
        diag.trace(f"best match {delta} away exceeds {tolerance}")
        return MatchResult(depth, False)

    return MatchResult(depth, found)
