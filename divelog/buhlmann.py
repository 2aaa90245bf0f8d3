"""
Bühlmann ZH-L16C tissue model with gradient factors.

This is the default decompression model handed to the playback driver when
the caller supplies none. It implements the stepwise model protocol:

    level_off(duration_min, depth_ft, mix)  -- load tissues at constant depth
    ceiling()                               -- current stop ceiling in feet
    dump(sink, label, verbose)              -- tissue state for diagnostics

Tissue math is vectorized across the 16 compartments with numpy. Pressures are
absolute atmospheres; depths are feet of seawater.
"""

import math
from dataclasses import dataclass
from typing import TextIO, Tuple

import numpy as np

from .gas import GasMix, FEET_PER_ATM, SURFACE_PRESSURE_ATM

NUM_COMPARTMENTS = 16

# Half-times in minutes
ZH_L16C_N2_HALFTIMES: Tuple[float, ...] = (
    4.0, 8.0, 12.5, 18.5, 27.0, 38.3, 54.3, 77.0,
    109.0, 146.0, 187.0, 239.0, 305.0, 390.0, 498.0, 635.0,
)

# M-value coefficients: M(P) = a + P/b
ZH_L16C_N2_A: Tuple[float, ...] = (
    1.2599, 1.0000, 0.8618, 0.7562, 0.6200, 0.5043, 0.4410, 0.4000,
    0.3750, 0.3500, 0.3295, 0.3065, 0.2835, 0.2610, 0.2480, 0.2327,
)

ZH_L16C_N2_B: Tuple[float, ...] = (
    0.5050, 0.6514, 0.7222, 0.7825, 0.8126, 0.8434, 0.8693, 0.8910,
    0.9092, 0.9222, 0.9319, 0.9403, 0.9477, 0.9544, 0.9602, 0.9653,
)

ZH_L16C_HE_HALFTIMES: Tuple[float, ...] = (
    1.51, 3.02, 4.72, 6.99, 10.21, 14.48, 20.53, 29.11,
    41.20, 55.19, 70.69, 90.34, 115.29, 147.42, 188.24, 240.03,
)

ZH_L16C_HE_A: Tuple[float, ...] = (
    1.7424, 1.3830, 1.1919, 1.0458, 0.9220, 0.8205, 0.7305, 0.6502,
    0.5950, 0.5545, 0.5333, 0.5189, 0.5181, 0.5176, 0.5172, 0.5119,
)

ZH_L16C_HE_B: Tuple[float, ...] = (
    0.4245, 0.5747, 0.6527, 0.7223, 0.7582, 0.7957, 0.8279, 0.8553,
    0.8757, 0.8903, 0.8997, 0.9073, 0.9122, 0.9171, 0.9217, 0.9267,
)

WATER_VAPOR_PRESSURE = 0.0627
SURFACE_N2_FRACTION = 0.7902

# Ceilings are reported on this stop grid, rounded up
STOP_INCREMENT_FEET = 10.0


@dataclass(frozen=True)
class GradientFactors:
    """Gradient factor pair for Bühlmann decompression adjustments.

    gf_low:  applied at the deepest ceiling (first stop), sets the first stop depth
    gf_high: applied at the surface, shapes the final ascent
    Values are fractions (0.0–1.0), where 1.0 = use full M-value (standard Bühlmann).
    """
    gf_low: float
    gf_high: float

    def __post_init__(self):
        if not (0.0 < self.gf_low <= 1.0):
            raise ValueError(f"gf_low must be in (0, 1.0], got {self.gf_low}")
        if not (0.0 < self.gf_high <= 1.0):
            raise ValueError(f"gf_high must be in (0, 1.0], got {self.gf_high}")
        if self.gf_low > self.gf_high:
            raise ValueError(
                f"gf_low ({self.gf_low}) must be <= gf_high ({self.gf_high})"
            )


GF_DEFAULT = GradientFactors(gf_low=0.20, gf_high=0.70)


def alveolar_pressure(ambient_pressure: float, fraction: float) -> float:
    """Inspired inert gas pressure in the lungs, net of water vapour."""
    return (ambient_pressure - WATER_VAPOR_PRESSURE) * fraction


def haldane_vec(pt0: np.ndarray, palv: float, t: float, k: np.ndarray) -> np.ndarray:
    """Haldane equation at constant ambient pressure, for all compartments.

    P(t) = Palv + (P0 - Palv) * exp(-k t)
    """
    return palv + (pt0 - palv) * np.exp(-k * t)


class ZHL16C:
    """Stepwise ZH-L16C-GF tissue model."""

    def __init__(
        self,
        gf_low: float = GF_DEFAULT.gf_low,
        gf_high: float = GF_DEFAULT.gf_high,
        stop_increment: float = STOP_INCREMENT_FEET,
    ):
        self.gf = GradientFactors(gf_low=gf_low, gf_high=gf_high)
        if stop_increment <= 0:
            raise ValueError(f"stop_increment must be positive, got {stop_increment}")
        self.stop_increment = stop_increment

        self.n2_a = np.array(ZH_L16C_N2_A)
        self.n2_b = np.array(ZH_L16C_N2_B)
        self.he_a = np.array(ZH_L16C_HE_A)
        self.he_b = np.array(ZH_L16C_HE_B)

        # Decay constants k = ln(2) / halftime
        self.n2_k = np.log(2) / np.array(ZH_L16C_N2_HALFTIMES)
        self.he_k = np.log(2) / np.array(ZH_L16C_HE_HALFTIMES)

        # Surface equilibrium on air
        self.n2_p = np.full(
            NUM_COMPARTMENTS, alveolar_pressure(SURFACE_PRESSURE_ATM, SURFACE_N2_FRACTION)
        )
        self.he_p = np.zeros(NUM_COMPARTMENTS)
        self.runtime = 0.0

    @property
    def gf_low(self) -> float:
        return self.gf.gf_low

    @property
    def gf_high(self) -> float:
        return self.gf.gf_high

    def level_off(self, duration: float, depth: float, mix: GasMix) -> None:
        """Load tissues for duration minutes at a constant depth (feet) on mix."""
        if duration <= 0:
            return
        p = depth / FEET_PER_ATM + SURFACE_PRESSURE_ATM
        self.n2_p = haldane_vec(self.n2_p, alveolar_pressure(p, mix.n2), duration, self.n2_k)
        self.he_p = haldane_vec(self.he_p, alveolar_pressure(p, mix.he), duration, self.he_k)
        self.runtime += duration

    def _combined_coefficients(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Inert tension and He/N2-weighted a, b per compartment."""
        p_inert = self.n2_p + self.he_p
        a = (self.n2_a * self.n2_p + self.he_a * self.he_p) / p_inert
        b = (self.n2_b * self.n2_p + self.he_b * self.he_p) / p_inert
        return p_inert, a, b

    def ceiling_pressures(self, gf: float) -> np.ndarray:
        """Per-compartment tolerated ambient pressure (atm) at a gradient factor.

        Solves p_inert = P + gf * (a + P/b - P) for P.
        """
        p_inert, a, b = self._combined_coefficients()
        return (p_inert - gf * a) / (gf / b + 1.0 - gf)

    def ceiling_depth(self) -> float:
        """Unrounded ceiling in feet, using gf_low. Zero when surfacing is allowed."""
        p_ceil = float(np.max(self.ceiling_pressures(self.gf.gf_low)))
        return max(0.0, (p_ceil - SURFACE_PRESSURE_ATM) * FEET_PER_ATM)

    def ceiling(self) -> float:
        """Shallowest allowed stop in feet, rounded up to the next stop_increment.

        0.0 if safe to surface directly.
        """
        depth = self.ceiling_depth()
        if depth <= 0.0:
            return 0.0
        return math.ceil(depth / self.stop_increment) * self.stop_increment

    def surface_gradient(self) -> float:
        """Largest tissue supersaturation at the surface as a fraction of gf_high.

        1.0 means the leading compartment sits exactly on the gf_high-adjusted
        surface M-value.
        """
        p_inert, a, b = self._combined_coefficients()
        p = SURFACE_PRESSURE_ATM
        m_value = a + p / b
        allowed = self.gf.gf_high * (m_value - p)
        return float(np.max((p_inert - p) / allowed))

    def dump(self, sink: TextIO, label: str = "", verbose: bool = True) -> None:
        """Write the tissue state to sink."""
        sink.write(
            f"{label} runtime {self.runtime:.2f}min gf {self.gf.gf_low:.2f}/{self.gf.gf_high:.2f} "
            f"ceiling {self.ceiling():.0f}ft ({self.ceiling_depth():.1f}) surface gradient {self.surface_gradient():.3f}\n"
        )
        if not verbose:
            return
        ceilings = self.ceiling_pressures(self.gf.gf_low)
        for c in range(NUM_COMPARTMENTS):
            sink.write(
                f"  {c + 1:2d} n2 {self.n2_p[c]:.4f} he {self.he_p[c]:.4f} "
                f"ceil {ceilings[c]:.4f}atm\n"
            )
