"""Tests for the DiveAnalysis session and diagnostics isolation."""

import io
from datetime import datetime, timedelta, timezone

import pytest

from divelog.analysis import DiveAnalysis
from divelog.buhlmann import GradientFactors
from divelog.config import AnalysisConfig
from divelog.diagnostics import Diagnostics
from divelog.dive import Dive, Sample
from divelog.histogram import depth_histogram
from divelog.playback import playback

START = datetime(2019, 11, 7, 14, 0, 0, tzinfo=timezone.utc)


def _profile_dive():
    """Descent to 150ft, bottom time, staged ascent with stops, about 92 minutes."""
    depths = (
        [15.0 * i for i in range(1, 11)]
        + [150.0] * 240
        + [90.0] * 60
        + [60.0] * 60
        + [40.0] * 90
        + [20.0] * 72
        + [0.0] * 18
    )
    samples = [
        Sample(offset_seconds=i * 10, depth=d, average_ppo2=1.2,
               fraction_o2=0.18, fraction_he=0.45)
        for i, d in enumerate(depths)
    ]
    return Dive(start_time=START, samples=samples)


class TestSession:

    def test_max_depth(self):
        assert DiveAnalysis(_profile_dive()).max_depth() == 150.0

    def test_histogram_matches_function(self):
        dive = _profile_dive()
        assert DiveAnalysis(dive).histogram() == depth_histogram(dive)

    def test_playback_matches_function_defaults(self):
        dive = _profile_dive()
        assert DiveAnalysis(dive).playback() == playback(dive)

    def test_playback_uses_fresh_model(self):
        analysis = DiveAnalysis(_profile_dive())
        assert analysis.playback() == analysis.playback()

    def test_config_tolerance_used(self):
        dive = _profile_dive()
        target = START + timedelta(seconds=2000)
        gap_dive = Dive(start_time=START, samples=[dive.samples[0]])
        assert DiveAnalysis(gap_dive).find_best_match(target).found is False
        lenient = AnalysisConfig(match_tolerance_seconds=5000)
        assert DiveAnalysis(gap_dive, lenient).find_best_match(target).found is True

    def test_config_gf_changes_playback(self):
        dive = _profile_dive()
        default = DiveAnalysis(dive).playback()
        liberal = DiveAnalysis(dive, AnalysisConfig(gf=GradientFactors(0.9, 0.95))).playback()
        assert [c for _, _, c in liberal.ceilings] != [c for _, _, c in default.ceilings]

    def test_config_use_ppo2(self):
        dive = _profile_dive()
        oc = DiveAnalysis(dive, AnalysisConfig(use_ppo2=False)).playback()
        assert oc == playback(dive, use_ppo2=False)
        # Explicit argument overrides config
        ccr = DiveAnalysis(dive, AnalysisConfig(use_ppo2=False)).playback(use_ppo2=True)
        assert ccr == playback(dive, use_ppo2=True)


class TestDiagnosticsIsolation:
    """Switches belong to a session and never alter results."""

    def test_sessions_do_not_share_switches(self):
        dive = _profile_dive()
        traced = DiveAnalysis(dive, diagnostics=Diagnostics())
        quiet = DiveAnalysis(dive)
        sink = io.StringIO()
        traced.diagnostics.enable_trace(sink)

        quiet.histogram()
        assert sink.getvalue() == ""
        assert quiet.diagnostics.tracing is False

    @pytest.mark.parametrize("trace,print_model", [
        (False, False), (True, False), (False, True), (True, True),
    ])
    def test_all_results_unchanged(self, trace, print_model):
        dive = _profile_dive()
        baseline = DiveAnalysis(dive)

        diag = Diagnostics()
        if trace:
            diag.enable_trace(io.StringIO())
        if print_model:
            diag.enable_model_print(io.StringIO())
        session = DiveAnalysis(dive, diagnostics=diag)

        target = START + timedelta(seconds=1234)
        assert session.find_best_match(target) == baseline.find_best_match(target)
        assert session.histogram() == baseline.histogram()
        assert session.playback() == baseline.playback()
        assert session.max_depth() == baseline.max_depth()
