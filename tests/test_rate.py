"""
Unit tests for BPM estimation and confidence tagging.
Run with:  pytest tests/test_rate.py
"""

from __future__ import annotations

import numpy as np

from heartbeat_audio.rate import Confidence, clamp_bpm, classify, estimate_bpm


class TestEstimateBpm:

    def test_needs_two_peaks(self):
        assert estimate_bpm(np.array([], dtype=np.int64), 44100) is None
        assert estimate_bpm(np.array([100]), 44100) is None

    def test_regular_intervals(self):
        # 0.75 s between beats -> 80 BPM
        peaks = np.arange(5) * 33075
        assert estimate_bpm(peaks, 44100) == 80

    def test_mean_of_intervals(self):
        # intervals 800 and 1200 samples at 1 kHz -> mean 1 s -> 60 BPM
        assert estimate_bpm(np.array([0, 800, 2000]), 1000) == 60

    def test_result_is_rounded(self):
        # 60 * 1000 / 700 = 85.71...
        assert estimate_bpm(np.array([0, 700]), 1000) == 86

    def test_half_rounds_up(self):
        # 60 * 44100 / 42336 == 62.5 exactly
        assert estimate_bpm(np.array([0, 42336]), 44100) == 63

    def test_half_at_lower_bound_counts_as_in_range(self):
        # 60 * 79 / 120 == 39.5 -> 40, a plausible reading
        raw = estimate_bpm(np.array([0, 120, 240]), 79)
        assert raw == 40
        assert classify(raw) is Confidence.MEDIUM


class TestConfidence:

    def test_in_range_is_medium(self):
        assert classify(40) is Confidence.MEDIUM
        assert classify(120) is Confidence.MEDIUM
        assert classify(200) is Confidence.MEDIUM

    def test_out_of_range_is_low(self):
        assert classify(39) is Confidence.LOW
        assert classify(201) is Confidence.LOW

    def test_string_values(self):
        assert Confidence.LOW.value == "low"
        assert Confidence("medium") is Confidence.MEDIUM


class TestClamp:

    def test_clamp(self):
        assert clamp_bpm(10) == 40
        assert clamp_bpm(75) == 75
        assert clamp_bpm(320) == 200
