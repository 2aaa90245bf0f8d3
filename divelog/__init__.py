"""
Dive log analysis: statistics and decompression exposure from logged samples.

Modules:
    - dive: Sample and Dive data model, max depth
    - matcher: nearest-preceding-sample search for an external event time
    - histogram: depth histogram, average depth and deco time estimate
    - playback: replay a dive through a decompression model, ceiling clearance
    - buhlmann: default ZH-L16C gradient factor model
    - gas: gas mixtures and depth/pressure conversion
    - diagnostics: trace and model-print switches
    - config: config.yaml loading
    - analysis: DiveAnalysis session
    - report: plain-text reports
    - plotting: depth/ceiling plot
"""

from .dive import Dive, Sample, SampleOrderError, find_max_depth
from .matcher import MatchResult, find_best_match
from .histogram import DepthHistogram, depth_histogram
from .playback import DecoModel, PlaybackResult, playback
from .buhlmann import ZHL16C, GradientFactors, GF_DEFAULT
from .gas import GasMix, trimix, current_ccr_mix, feet_to_atm
from .diagnostics import Diagnostics
from .config import AnalysisConfig, load_config
from .analysis import DiveAnalysis

__all__ = [
    "Dive",
    "Sample",
    "SampleOrderError",
    "find_max_depth",
    "MatchResult",
    "find_best_match",
    "DepthHistogram",
    "depth_histogram",
    "DecoModel",
    "PlaybackResult",
    "playback",
    "ZHL16C",
    "GradientFactors",
    "GF_DEFAULT",
    "GasMix",
    "trimix",
    "current_ccr_mix",
    "feet_to_atm",
    "Diagnostics",
    "AnalysisConfig",
    "load_config",
    "DiveAnalysis",
]
