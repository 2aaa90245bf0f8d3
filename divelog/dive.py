"""
Dive log data model.

A Dive is an immutable, time-ordered sequence of samples anchored at a single
start timestamp. Every analysis in this package consumes a Dive read-only.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Tuple


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def format_unix_date(t: datetime) -> str:
    """Report and trace timestamp, e.g. "Thu Nov  7 14:45:32 UTC 2019" (day space-padded)."""
    return _join(f"{t:%a %b} {t.day:2d} {t:%H:%M:%S}", t.strftime("%Z"), str(t.year))


def format_log_date(t: datetime) -> str:
    """Shearwater startDate/endDate layout, e.g. "Thu Nov  7 14:00:00 2019 UTC"."""
    return _join(f"{t:%a %b} {t.day:2d} {t:%H:%M:%S %Y}", t.strftime("%Z"))


class SampleOrderError(ValueError):
    """Raised when samples are not ordered by non-decreasing offset."""


@dataclass(frozen=True)
class Sample:
    """One logged instant. Depth in log units (feet for imperial logs)."""

    offset_seconds: int
    depth: float
    average_ppo2: float = 0.0
    fraction_o2: float = 0.21
    fraction_he: float = 0.0

    # Shearwater extras, carried through untouched
    first_stop_depth: int = 0
    first_stop_time: int = 0
    tts_minutes: int = 0

    def __str__(self) -> str:
        return f"record time={self.offset_seconds}, depth={self.depth}"


@dataclass(frozen=True)
class Dive:
    """A dive log: start time plus samples ordered by offset_seconds."""

    start_time: datetime
    samples: Tuple[Sample, ...] = field(default_factory=tuple)

    number: int = 0
    gf_min: int = 0
    gf_max: int = 0
    imperial_units: bool = True
    logged_max_depth: float = 0.0
    max_time: int = 0
    end_time: Optional[datetime] = None

    def __post_init__(self):
        # Accept any iterable of samples but store a tuple
        samples = tuple(self.samples)
        object.__setattr__(self, "samples", samples)

        for i in range(1, len(samples)):
            if samples[i].offset_seconds < samples[i - 1].offset_seconds:
                raise SampleOrderError(
                    f"sample {i} at {samples[i].offset_seconds}s precedes "
                    f"sample {i - 1} at {samples[i - 1].offset_seconds}s"
                )

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    def __str__(self) -> str:
        text = (
            f"log number={self.number}, maxdepth={self.logged_max_depth:g}, "
            f"maxtime={self.max_time}, from {format_log_date(self.start_time)}"
        )
        if self.end_time is not None:
            text += f" to {format_log_date(self.end_time)}"
        return text

    def sample_time(self, sample: Sample, adjust_hours: int = 0) -> datetime:
        """Absolute time of a sample, optionally shifted by whole hours."""
        seconds = sample.offset_seconds
        if adjust_hours:
            seconds += adjust_hours * 60 * 60
        return self.start_time + timedelta(seconds=seconds)


def find_max_depth(dive: Dive) -> float:
    """Return the maximum depth reached on the dive (0.0 for an empty log)."""
    max_depth = 0.0
    for sample in dive.samples:
        if sample.depth > max_depth:
            max_depth = sample.depth
    return max_depth

