"""
Analysis settings loaded from config.yaml.

Missing file or missing keys fall back to the built-in defaults, so analysis
works out of the box; a present but invalid value raises ValueError.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import yaml

from .buhlmann import GradientFactors, GF_DEFAULT, ZHL16C
from .gas import GasMix, trimix

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "config.yaml"
)


@dataclass(frozen=True)
class AnalysisConfig:
    """Resolved analysis settings."""

    sample_interval_seconds: float = 10.0
    match_tolerance_seconds: float = 10.0
    gf: GradientFactors = GF_DEFAULT
    baseline_o2_percent: float = 18.0
    baseline_he_percent: float = 45.0
    use_ppo2: bool = True
    config_path: Optional[str] = None

    def __post_init__(self):
        if self.sample_interval_seconds <= 0:
            raise ValueError(
                f"sample_interval_seconds must be positive, got {self.sample_interval_seconds}"
            )
        if self.match_tolerance_seconds < 0:
            raise ValueError(
                f"match_tolerance_seconds must be >= 0, got {self.match_tolerance_seconds}"
            )
        if not isinstance(self.use_ppo2, bool):
            raise ValueError(f"use_ppo2 must be true or false, got {self.use_ppo2!r}")
        # GasMix validates the fractions
        self.baseline_mix()

    def baseline_mix(self) -> GasMix:
        return trimix(self.baseline_o2_percent, self.baseline_he_percent)

    def create_model(self) -> ZHL16C:
        """Fresh default decompression model with the configured gradient factors."""
        return ZHL16C(self.gf.gf_low, self.gf.gf_high)


def load_config(config_path: Optional[str] = None) -> AnalysisConfig:
    """Load configuration from config.yaml.

    Args:
        config_path: YAML file to read. Defaults to config.yaml at the repo root.

    Returns:
        AnalysisConfig with file values layered over the defaults
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not os.path.exists(config_path):
        logger.debug(f"No config at {config_path}, using defaults")
        return AnalysisConfig()

    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    defaults = AnalysisConfig()

    model_cfg = config.get("model", {}) or {}
    gf = GradientFactors(
        gf_low=float(model_cfg.get("gf_low", defaults.gf.gf_low)),
        gf_high=float(model_cfg.get("gf_high", defaults.gf.gf_high)),
    )

    mix_cfg = config.get("baseline_mix", {}) or {}
    playback_cfg = config.get("playback", {}) or {}

    result = AnalysisConfig(
        sample_interval_seconds=float(
            config.get("sample_interval_seconds", defaults.sample_interval_seconds)
        ),
        match_tolerance_seconds=float(
            config.get("match_tolerance_seconds", defaults.match_tolerance_seconds)
        ),
        gf=gf,
        baseline_o2_percent=float(mix_cfg.get("o2", defaults.baseline_o2_percent)),
        baseline_he_percent=float(mix_cfg.get("he", defaults.baseline_he_percent)),
        use_ppo2=playback_cfg.get("use_ppo2", defaults.use_ppo2),
        config_path=config_path,
    )
    logger.debug(f"Loaded config from {config_path}: {result}")
    return result
