"""
Heart-rate detection pipeline.

Algorithm
---------
1. Normalise the raw recording (unsigned bytes or floats) to [-1, 1].
2. Smooth it with an edge-truncated moving average (default ±20 samples).
3. Find strict local maxima above 0.01, at least ~100 ms apart.
4. Convert the mean peak-to-peak interval into BPM, tag the reading with a
   confidence and clamp it into 40 – 200 BPM.

Every stage is a pure function: the pipeline keeps no state between calls
and can be run repeatedly, or in parallel, on independent recordings.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from heartbeat_audio.exceptions import InvalidInput
from heartbeat_audio.normalizer import SampleEncoding, normalize
from heartbeat_audio.peaks import DEFAULT_THRESHOLD, find_peaks, min_distance_for
from heartbeat_audio.rate import (
    MAX_BPM,
    MIN_BPM,
    Confidence,
    clamp_bpm,
    classify,
    estimate_bpm,
)
from heartbeat_audio.smoothing import DEFAULT_HALF_WIDTH, moving_average

logger = logging.getLogger(__name__)

# Relative mismatch between buffer length and nominal duration that is logged.
_DURATION_TOLERANCE = 0.10


@dataclass(frozen=True)
class PipelineConfig:
    """
    Tunable parameters of the detection pipeline.

    Parameters
    ----------
    half_width:
        Moving-average half window in samples.
    threshold:
        Minimum smoothed amplitude of an accepted peak.
    min_distance:
        Minimum spacing between accepted peaks in samples.  *None* derives
        it from the sample rate (about 100 ms).
    """

    half_width: int = DEFAULT_HALF_WIDTH
    threshold: float = DEFAULT_THRESHOLD
    min_distance: int | None = None

    def resolve_min_distance(self, sample_rate: int) -> int:
        if self.min_distance is not None:
            return self.min_distance
        return min_distance_for(sample_rate)


@dataclass(frozen=True, eq=False)
class DetectionResult:
    """Outcome of one detection run."""

    bpm: int
    confidence: Confidence
    peaks: np.ndarray = field(repr=False)
    waveform: np.ndarray = field(repr=False)

    @property
    def detected(self) -> bool:
        """*True* when enough peaks were found to produce a reading."""
        return self.bpm > 0


def detect_heart_rate(
    samples,
    sample_rate: int,
    duration_seconds: float,
    encoding: SampleEncoding | None = None,
    config: PipelineConfig | None = None,
) -> DetectionResult:
    """
    Estimate the pulse rate of one recording.

    Parameters
    ----------
    samples:
        Raw recording, ``uint8`` bytes or floats in [-1, 1].
    sample_rate:
        Sample rate of the recording in Hz.
    duration_seconds:
        Nominal recording length in seconds.
    encoding:
        Encoding of *samples*; inferred from the dtype when omitted.
    config:
        Pipeline parameters; defaults to :class:`PipelineConfig`.

    Returns
    -------
    DetectionResult
        ``bpm == 0`` with ``Confidence.LOW`` and no peaks when fewer than
        two pulses were found.  Otherwise ``bpm`` lies in 40 – 200 and a
        clamped reading is tagged ``Confidence.LOW``.

    Raises
    ------
    InvalidInput
        On a non-positive sample rate or duration, or unrecognised samples.
    """
    if sample_rate <= 0:
        raise InvalidInput(f"sample_rate must be positive, got {sample_rate}")
    if duration_seconds <= 0:
        raise InvalidInput(f"duration_seconds must be positive, got {duration_seconds}")
    cfg = config or PipelineConfig()

    normalized = normalize(samples, encoding)
    _check_duration(normalized.size, sample_rate, duration_seconds)

    waveform = moving_average(normalized, cfg.half_width)
    peaks = find_peaks(waveform, cfg.resolve_min_distance(sample_rate), cfg.threshold)

    raw_bpm = estimate_bpm(peaks, sample_rate)
    logger.debug(
        "Detection: samples=%d peaks=%d raw_bpm=%s",
        normalized.size, peaks.size, raw_bpm,
    )
    if raw_bpm is None:
        return DetectionResult(
            bpm=0,
            confidence=Confidence.LOW,
            peaks=np.zeros(0, dtype=np.int64),
            waveform=waveform,
        )

    confidence = classify(raw_bpm)
    bpm = clamp_bpm(raw_bpm)
    if bpm != raw_bpm:
        logger.warning(
            "Raw estimate %d BPM outside %d – %d; clamped to %d.",
            raw_bpm, MIN_BPM, MAX_BPM, bpm,
        )
    return DetectionResult(bpm=bpm, confidence=confidence, peaks=peaks, waveform=waveform)


def interpret(result: DetectionResult) -> str:
    """Return a short human-readable verdict for *result*."""
    if not result.detected or result.confidence is Confidence.LOW:
        return "Reading may be inaccurate - try again with better positioning"
    if result.bpm < 60:
        return "Lower than average resting heart rate"
    if result.bpm <= 100:
        return "Normal resting heart rate range"
    return "Higher than average resting heart rate"


def _check_duration(n_samples: int, sample_rate: int, duration_seconds: float) -> None:
    expected = sample_rate * duration_seconds
    if n_samples and abs(n_samples - expected) > _DURATION_TOLERANCE * expected:
        logger.warning(
            "Buffer holds %.2f s of audio, expected %.2f s.",
            n_samples / sample_rate, duration_seconds,
        )
