"""
DiveAnalysis: one dive, one configuration, one set of diagnostic switches.

Convenience wrapper over the module-level analysis functions so that callers
running several analyses do not have to thread settings through every call.
"""

from datetime import datetime
from typing import Optional

from .config import AnalysisConfig
from .diagnostics import Diagnostics
from .dive import Dive, find_max_depth
from .histogram import DepthHistogram, depth_histogram
from .matcher import MatchResult, find_best_match
from .playback import DecoModel, PlaybackResult, playback


class DiveAnalysis:
    """Analysis session over a single dive."""

    def __init__(
        self,
        dive: Dive,
        config: Optional[AnalysisConfig] = None,
        diagnostics: Optional[Diagnostics] = None,
    ):
        self.dive = dive
        self.config = config or AnalysisConfig()
        self.diagnostics = diagnostics or Diagnostics()

    def max_depth(self) -> float:
        return find_max_depth(self.dive)

    def find_best_match(self, target: datetime, adjust_hours: int = 0) -> MatchResult:
        return find_best_match(
            self.dive,
            target,
            adjust_hours,
            tolerance_seconds=self.config.match_tolerance_seconds,
            diagnostics=self.diagnostics,
        )

    def histogram(self) -> DepthHistogram:
        return depth_histogram(
            self.dive,
            sample_interval=self.config.sample_interval_seconds,
            diagnostics=self.diagnostics,
        )

    def playback(
        self, model: Optional[DecoModel] = None, use_ppo2: Optional[bool] = None
    ) -> PlaybackResult:
        """Replay the dive; a fresh configured model is used if none is given."""
        if model is None:
            model = self.config.create_model()
        if use_ppo2 is None:
            use_ppo2 = self.config.use_ppo2
        return playback(
            self.dive,
            model,
            use_ppo2=use_ppo2,
            sample_interval=self.config.sample_interval_seconds,
            baseline_mix=self.config.baseline_mix(),
            diagnostics=self.diagnostics,
        )
