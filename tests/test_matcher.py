"""Tests for nearest-preceding-sample matching."""

import io
from datetime import datetime, timedelta, timezone

from divelog.diagnostics import Diagnostics
from divelog.dive import Dive, Sample
from divelog.matcher import MatchResult, find_best_match

START = datetime(2019, 11, 7, 14, 0, 0, tzinfo=timezone.utc)


def _make_dive(depths, interval=10):
    samples = [Sample(offset_seconds=i * interval, depth=d) for i, d in enumerate(depths)]
    return Dive(start_time=START, samples=samples)


def _at(seconds):
    return START + timedelta(seconds=seconds)


class TestExactMatch:
    """A target equal to a sample time returns that sample."""

    def test_exact_match_mid_dive(self):
        dive = _make_dive([0.0, 10.0, 20.0, 30.0, 40.0])
        assert find_best_match(dive, _at(30)) == MatchResult(30.0, True)

    def test_exact_match_first_sample(self):
        dive = _make_dive([5.0, 10.0, 20.0])
        depth, found = find_best_match(dive, _at(0))
        assert depth == 5.0
        assert found is True

    def test_exact_match_last_sample(self):
        dive = _make_dive([5.0, 10.0, 20.0])
        assert find_best_match(dive, _at(20)) == (20.0, True)

    def test_every_sample_time_matches_its_depth(self):
        depths = [0.0, 12.5, 33.1, 80.4, 160.6, 120.2, 60.0, 10.0]
        dive = _make_dive(depths)
        for i, depth in enumerate(depths):
            assert find_best_match(dive, _at(i * 10)) == (depth, True)


class TestClosestPreceding:
    """Between samples the closest preceding sample wins."""

    def test_between_samples_takes_preceding(self):
        dive = _make_dive([0.0, 10.0, 20.0, 30.0, 40.0])
        assert find_best_match(dive, _at(38)) == (30.0, True)

    def test_preceding_even_when_following_is_closer(self):
        """39s is 1s from the next sample but 9s from the preceding one."""
        dive = _make_dive([0.0, 10.0, 20.0, 30.0, 40.0])
        assert find_best_match(dive, _at(39)) == (30.0, True)

    def test_target_before_whole_dive(self):
        """Target predating every sample gives the first sample, found."""
        dive = _make_dive([7.0, 10.0, 20.0])
        assert find_best_match(dive, _at(-3600)) == (7.0, True)

    def test_target_after_last_within_tolerance(self):
        dive = _make_dive([0.0, 10.0, 20.0])
        assert find_best_match(dive, _at(25)) == (20.0, True)


class TestTolerance:
    """Matches further than 10 seconds away are not confident."""

    def test_gap_larger_than_tolerance_before_next_sample(self):
        samples = [Sample(0, 5.0), Sample(100, 50.0)]
        dive = Dive(start_time=START, samples=samples)
        assert find_best_match(dive, _at(50)) == (5.0, False)

    def test_exactly_tolerance_is_confident(self):
        samples = [Sample(0, 5.0), Sample(100, 50.0)]
        dive = Dive(start_time=START, samples=samples)
        assert find_best_match(dive, _at(10)) == (5.0, True)

    def test_target_long_after_last_sample(self):
        dive = _make_dive([0.0, 10.0, 20.0])
        depth, found = find_best_match(dive, _at(200))
        assert depth == 20.0
        assert found is False

    def test_custom_tolerance(self):
        samples = [Sample(0, 5.0), Sample(100, 50.0)]
        dive = Dive(start_time=START, samples=samples)
        assert find_best_match(dive, _at(50), tolerance_seconds=60) == (5.0, True)


class TestAdjustHours:
    """Hour adjustment shifts log times before comparing."""

    def test_positive_adjust(self):
        dive = _make_dive([0.0, 10.0, 20.0, 30.0])
        target = _at(20) + timedelta(hours=1)
        assert find_best_match(dive, target, 1) == (20.0, True)
        # Without adjustment the target lies an hour past the log
        assert find_best_match(dive, target) == (30.0, False)

    def test_negative_adjust(self):
        dive = _make_dive([0.0, 10.0, 20.0, 30.0])
        target = _at(10) - timedelta(hours=2)
        assert find_best_match(dive, target, -2) == (10.0, True)


class TestEdgeCases:

    def test_empty_dive(self):
        dive = Dive(start_time=START)
        assert find_best_match(dive, START) == (0.0, False)

    def test_naive_target_uses_dive_timezone(self):
        dive = _make_dive([0.0, 10.0, 20.0])
        naive = datetime(2019, 11, 7, 14, 0, 10)
        assert find_best_match(dive, naive) == (10.0, True)

    def test_result_unpacks(self):
        dive = _make_dive([0.0, 10.0])
        result = find_best_match(dive, _at(10))
        depth, found = result
        assert result.depth == depth == 10.0
        assert result.found is found is True


class TestTrace:
    """Tracing writes text but never changes the result."""

    def test_trace_written_when_enabled(self):
        dive = _make_dive([0.0, 10.0, 20.0, 30.0])
        sink = io.StringIO()
        diag = Diagnostics()
        diag.enable_trace(sink)
        find_best_match(dive, _at(25), diagnostics=diag)
        assert "past it" in sink.getvalue()

    def test_no_trace_when_disabled(self):
        dive = _make_dive([0.0, 10.0, 20.0, 30.0])
        sink = io.StringIO()
        diag = Diagnostics()
        diag.enable_trace(sink)
        diag.disable_trace()
        find_best_match(dive, _at(25), diagnostics=diag)
        assert sink.getvalue() == ""

    def test_results_identical_with_trace(self):
        dive = _make_dive([0.0, 10.0, 20.0, 30.0])
        diag = Diagnostics()
        diag.enable_trace(io.StringIO())
        for seconds in (-5, 0, 5, 15, 30, 45, 500):
            assert find_best_match(dive, _at(seconds), diagnostics=diag) == \
                find_best_match(dive, _at(seconds))
