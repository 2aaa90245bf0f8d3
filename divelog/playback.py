"""
Decompression playback: replay a dive log through a decompression model.

Each sample is treated as one sampling interval spent at its depth. The model
is advanced sample by sample; at every whole-minute boundary its ceiling is
compared with the logged depth, and the extreme clearances are kept subject to
the windowing guards below. The model is any object implementing DecoModel,
supplied and owned by the caller.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, TextIO, Tuple

from .buhlmann import ZHL16C, GF_DEFAULT
from .diagnostics import Diagnostics
from .dive import Dive
from .gas import GasMix, trimix, current_ccr_mix, feet_to_atm

logger = logging.getLogger(__name__)

SAMPLE_INTERVAL_SECONDS = 10

# Clearance is only considered while genuinely submerged
MIN_SUBMERGED_DEPTH = 10.0
# ...and above this depth, where transients dominate
MAX_GUARD_DEPTH = 100.0
# Whole minutes that must have elapsed before each extreme is tracked
MAX_CLEARANCE_AFTER_MINUTE = 60
MIN_CLEARANCE_AFTER_MINUTE = 30

INITIAL_MAX_CLEARANCE = 0.0
# Only clearances below this count as a minimum
MIN_CLEARANCE_THRESHOLD = 10.0


def default_baseline_mix() -> GasMix:
    return trimix(18, 45)


class DecoModel(Protocol):
    """Capability interface the playback driver needs from a model."""

    def level_off(self, duration: float, depth: float, mix: GasMix) -> None:
        ...

    def ceiling(self) -> float:
        ...


@dataclass
class PlaybackResult:
    """Extreme clearances found while replaying a dive.

    max_clearance: largest depth - ceiling after minute 60 (0.0 if none larger)
    min_clearance: smallest depth - ceiling below 10.0 after minute 30, or None
                   when no sample qualified
    ceilings: (minute, depth, ceiling) at each whole-minute boundary
    """

    max_clearance: float
    min_clearance: Optional[float]
    ceilings: List[Tuple[int, float, float]] = field(default_factory=list)


def _dump_model(model, sink: TextIO, label: str) -> None:
    dump = getattr(model, "dump", None)
    if dump is not None:
        dump(sink, label, True)


def playback(
    dive: Dive,
    model: Optional[DecoModel] = None,
    use_ppo2: bool = True,
    sample_interval: float = SAMPLE_INTERVAL_SECONDS,
    baseline_mix: Optional[GasMix] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> PlaybackResult:
    """
    Replay a dive through a decompression model and report ceiling clearance.

    Args:
        dive: Dive to replay
        model: Decompression model. A fresh ZH-L16C GF 20/70 is used if None.
            A supplied model is advanced in place and can be inspected after.
        use_ppo2: Derive each step's mix from the sample's average PPO2, as a
            rebreather would, instead of breathing the baseline mix.
        sample_interval: Seconds of real time each sample represents
        baseline_mix: Open-circuit mix / rebreather diluent. Trimix 18/45 if None.
        diagnostics: Optional trace and model-print sinks

    Returns:
        PlaybackResult with the max and min clearance
    """
    diag = diagnostics or Diagnostics()
    if model is None:
        model = ZHL16C(GF_DEFAULT.gf_low, GF_DEFAULT.gf_high)
    if baseline_mix is None:
        baseline_mix = default_baseline_mix()

    step = sample_interval / 60.0
    elapsed = 0.0
    last_minute = 0
    max_clearance = INITIAL_MAX_CLEARANCE
    min_clearance = MIN_CLEARANCE_THRESHOLD
    min_found = False
    ceilings = []

    mix = baseline_mix
    for sample in dive.samples:
        depth = sample.depth
        elapsed += step
        diag.trace(f"playit: depth {depth} time {elapsed}")

        if use_ppo2:
            mix = current_ccr_mix(baseline_mix, feet_to_atm(depth), sample.average_ppo2)

        model.level_off(step, depth, mix)

        minute = int(elapsed)
        if minute == last_minute:
            continue

        ceil = model.ceiling()
        ceilings.append((minute, depth, ceil))
        diag.trace(f"playit: Ceiling {ceil}")
        if diag.printing_model:
            _dump_model(model, diag.model_sink, f"playit{minute}")

        if depth > MIN_SUBMERGED_DEPTH:
            diag.trace(f"playit: depth {depth} ceil {ceil}")
            clearance = depth - ceil
            if (clearance > max_clearance
                    and minute > MAX_CLEARANCE_AFTER_MINUTE
                    and depth < MAX_GUARD_DEPTH):
                max_clearance = clearance
            if (clearance < min_clearance
                    and minute > MIN_CLEARANCE_AFTER_MINUTE
                    and depth < MAX_GUARD_DEPTH):
                min_clearance = clearance
                min_found = True
                diag.trace(
                    f"playit: ceiling distance reset at {minute} min / "
                    f"{depth:.2f} ft  {min_clearance:.2f}"
                )
        last_minute = minute

    diag.trace(f"playit: max distance {max_clearance:f} min distance {min_clearance:f}")
    logger.debug(
        f"Playback of {len(dive)} samples: max clearance {max_clearance:.2f}, "
        f"min clearance {min_clearance if min_found else None}"
    )
    return PlaybackResult(
        max_clearance=max_clearance,
        min_clearance=min_clearance if min_found else None,
        ceilings=ceilings,
    )
