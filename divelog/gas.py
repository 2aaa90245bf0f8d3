"""
Breathing gas mixtures and pressure conversion.

Depths are in feet of seawater; pressures are absolute, in atmospheres.
"""

from dataclasses import dataclass

FEET_PER_ATM = 33.0
SURFACE_PRESSURE_ATM = 1.0


@dataclass(frozen=True)
class GasMix:
    """Gas fractions (0.0-1.0). Nitrogen is the remainder."""

    o2: float
    he: float = 0.0

    def __post_init__(self):
        if not (0.0 <= self.o2 <= 1.0):
            raise ValueError(f"o2 fraction must be in [0, 1], got {self.o2}")
        if not (0.0 <= self.he <= 1.0):
            raise ValueError(f"he fraction must be in [0, 1], got {self.he}")
        if self.o2 + self.he > 1.0 + 1e-9:
            raise ValueError(
                f"o2 ({self.o2}) + he ({self.he}) must not exceed 1.0"
            )

    @property
    def n2(self) -> float:
        return max(0.0, 1.0 - self.o2 - self.he)

    def __str__(self) -> str:
        return f"{self.o2 * 100:.0f}/{self.he * 100:.0f}"


AIR = GasMix(o2=0.21)


def trimix(o2_percent: float, he_percent: float) -> GasMix:
    """Fixed mix from percentages, e.g. trimix(18, 45) for Tx 18/45."""
    return GasMix(o2=o2_percent / 100.0, he=he_percent / 100.0)


def feet_to_atm(depth: float) -> float:
    """Absolute pressure (atm) at a depth in feet of seawater."""
    return depth / FEET_PER_ATM + SURFACE_PRESSURE_ATM


def current_ccr_mix(diluent: GasMix, ambient_atm: float, ppo2: float) -> GasMix:
    """
    Effective mix breathed on a closed-circuit rebreather.

    The loop holds oxygen at the logged ppo2, so fO2 = ppo2 / ambient. The
    remaining inert fraction keeps the diluent's He:N2 ratio. The loop can
    never run leaner than the diluent itself or richer than pure oxygen.

    Args:
        diluent: Diluent (baseline) mix
        ambient_atm: Absolute ambient pressure in atm
        ppo2: Loop oxygen partial pressure in atm

    Returns:
        GasMix in the loop at this pressure
    """
    if ambient_atm <= 0:
        raise ValueError(f"ambient pressure must be positive, got {ambient_atm}")

    f_o2 = ppo2 / ambient_atm
    if f_o2 <= diluent.o2:
        return diluent
    f_o2 = min(f_o2, 1.0)

    inert = 1.0 - f_o2
    diluent_inert = diluent.he + diluent.n2
    f_he = inert * diluent.he / diluent_inert if diluent_inert > 0 else 0.0
    return GasMix(o2=f_o2, he=f_he)
