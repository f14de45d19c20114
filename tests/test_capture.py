"""
Unit tests for SampleAccumulator.
Run with:  pytest tests/test_capture.py
"""

from __future__ import annotations

import threading
from queue import Queue

import numpy as np
import pytest

from heartbeat_audio.capture import SampleAccumulator
from heartbeat_audio.exceptions import CaptureCancelled, InvalidInput
from heartbeat_audio.pipeline import detect_heart_rate


class TestSampleAccumulator:

    def test_target_from_rate_and_duration(self):
        acc = SampleAccumulator(sample_rate=44100, duration_seconds=15.0)
        assert acc.target_samples == 661500

    def test_fill_ratio_grows(self):
        acc = SampleAccumulator(sample_rate=100, duration_seconds=1.0)
        assert acc.fill_ratio == 0.0
        acc.push(np.full(25, 128, dtype=np.uint8))
        assert acc.fill_ratio == pytest.approx(0.25)
        assert not acc.is_complete

    def test_overflow_truncated(self):
        acc = SampleAccumulator(sample_rate=10, duration_seconds=1.0)
        assert acc.push(np.arange(6, dtype=np.uint8)) is False
        assert acc.push(np.arange(6, 12, dtype=np.uint8)) is True
        out = acc.finish()
        np.testing.assert_array_equal(out, np.arange(10, dtype=np.uint8))
        assert out.dtype == np.uint8

    def test_push_into_full_buffer_rejected(self):
        acc = SampleAccumulator(sample_rate=10, duration_seconds=1.0)
        assert acc.push(np.zeros(10, dtype=np.float32)) is True
        with pytest.raises(RuntimeError, match="already full"):
            acc.push(np.zeros(1, dtype=np.float32))
        assert acc.finish().size == 10

    def test_push_after_finish_rejected(self):
        acc = SampleAccumulator(sample_rate=10, duration_seconds=1.0)
        acc.push(np.zeros(10, dtype=np.float32))
        acc.finish()
        with pytest.raises(RuntimeError):
            acc.push(np.zeros(1, dtype=np.float32))
        with pytest.raises(RuntimeError):
            acc.finish()

    def test_short_buffer_handed_over(self):
        acc = SampleAccumulator(sample_rate=10, duration_seconds=1.0)
        acc.push(np.ones(4, dtype=np.float32))
        assert acc.finish().size == 4

    def test_cancel_raises_on_finish(self):
        acc = SampleAccumulator(sample_rate=10, duration_seconds=1.0)
        acc.push(np.ones(4, dtype=np.float32))
        acc.cancel("user pressed stop")
        assert acc.is_cancelled
        with pytest.raises(CaptureCancelled, match="user pressed stop"):
            acc.finish()

    @pytest.mark.parametrize("rate, duration", [(0, 1.0), (100, 0.0)])
    def test_invalid_parameters(self, rate, duration):
        with pytest.raises(InvalidInput):
            SampleAccumulator(sample_rate=rate, duration_seconds=duration)


class TestDrain:

    def test_drain_until_full_from_producer_thread(self):
        """A producer thread feeds 1024-sample chunks until the buffer is full."""
        fs = 8000
        acc = SampleAccumulator(sample_rate=fs, duration_seconds=2.0)
        chunks: Queue = Queue(maxsize=8)
        stop = threading.Event()

        def producer() -> None:
            while not stop.is_set():
                chunks.put(np.full(1024, 128, dtype=np.uint8))

        worker = threading.Thread(target=producer, daemon=True)
        worker.start()
        try:
            samples = acc.drain(chunks, poll_timeout=0.1)
        finally:
            stop.set()
            while not chunks.empty():
                chunks.get_nowait()
            worker.join(timeout=1.0)

        assert samples.size == 16000
        result = detect_heart_rate(samples, fs, 2.0)
        assert result.bpm == 0

    def test_drain_stops_at_end_of_stream(self):
        acc = SampleAccumulator(sample_rate=100, duration_seconds=1.0)
        chunks: Queue = Queue()
        chunks.put(np.zeros(30, dtype=np.float32))
        chunks.put(None)
        assert acc.drain(chunks, poll_timeout=0.05).size == 30

    def test_drain_cancelled(self):
        acc = SampleAccumulator(sample_rate=100, duration_seconds=1.0)
        chunks: Queue = Queue()
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(CaptureCancelled):
            acc.drain(chunks, cancel_event=cancel, poll_timeout=0.05)
