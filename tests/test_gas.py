"""Tests for gas mixtures and pressure conversion."""

import pytest

from divelog.gas import AIR, GasMix, current_ccr_mix, feet_to_atm, trimix


class TestGasMix:

    def test_nitrogen_is_remainder(self):
        mix = GasMix(o2=0.18, he=0.45)
        assert mix.n2 == pytest.approx(0.37)

    def test_trimix_from_percent(self):
        mix = trimix(18, 45)
        assert mix.o2 == pytest.approx(0.18)
        assert mix.he == pytest.approx(0.45)
        assert str(mix) == "18/45"

    def test_air(self):
        assert AIR.o2 == 0.21
        assert AIR.he == 0.0
        assert AIR.n2 == pytest.approx(0.79)

    def test_invalid_fractions(self):
        with pytest.raises(ValueError):
            GasMix(o2=1.2)
        with pytest.raises(ValueError):
            GasMix(o2=0.21, he=-0.1)
        with pytest.raises(ValueError):
            GasMix(o2=0.6, he=0.6)

    def test_pure_oxygen_valid(self):
        assert GasMix(o2=1.0).n2 == 0.0


class TestFeetToAtm:

    def test_surface(self):
        assert feet_to_atm(0.0) == 1.0

    def test_33_feet_is_two_atm(self):
        assert feet_to_atm(33.0) == pytest.approx(2.0)

    def test_linear(self):
        assert feet_to_atm(165.0) == pytest.approx(6.0)


class TestCurrentCCRMix:
    """Loop mix holds the setpoint, inert gas keeps the diluent ratio."""

    def test_setpoint_determines_oxygen(self):
        mix = current_ccr_mix(trimix(18, 45), 5.0, 1.3)
        assert mix.o2 == pytest.approx(0.26)

    def test_inert_ratio_preserved(self):
        diluent = trimix(18, 45)
        mix = current_ccr_mix(diluent, 5.0, 1.3)
        assert mix.he / mix.n2 == pytest.approx(diluent.he / diluent.n2)
        assert mix.o2 + mix.he + mix.n2 == pytest.approx(1.0)

    def test_capped_at_pure_oxygen(self):
        mix = current_ccr_mix(trimix(18, 45), 1.0, 1.3)
        assert mix.o2 == 1.0
        assert mix.he == 0.0

    def test_never_leaner_than_diluent(self):
        diluent = trimix(18, 45)
        assert current_ccr_mix(diluent, 10.0, 1.0) == diluent

    def test_zero_ppo2_breathes_diluent(self):
        diluent = trimix(18, 45)
        assert current_ccr_mix(diluent, 3.0, 0.0) == diluent

    def test_diluent_without_inert_gas(self):
        mix = current_ccr_mix(GasMix(o2=1.0), 2.0, 1.3)
        assert mix == GasMix(o2=1.0)

    def test_invalid_pressure(self):
        with pytest.raises(ValueError):
            current_ccr_mix(AIR, 0.0, 1.3)
