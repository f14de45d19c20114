"""
Rate estimation from peak positions.

The estimate is interval based: the mean spacing between consecutive peaks
is converted into beats per minute.  This only depends on the sample rate,
so it stays correct when the real recording length differs from the
nominal duration.
"""

from __future__ import annotations

import enum
from typing import Optional

import numpy as np

MIN_BPM = 40
MAX_BPM = 200


class Confidence(str, enum.Enum):
    """Qualitative reliability tag attached to a BPM reading."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def estimate_bpm(peaks: np.ndarray, sample_rate: int) -> Optional[int]:
    """
    Return the unclamped BPM implied by *peaks*, or *None* with fewer than
    two peaks.
    """
    p = np.asarray(peaks, dtype=np.int64)
    if p.size < 2:
        return None
    avg_interval = float(np.mean(np.diff(p)))
    # halves round up
    return int(np.floor(60.0 * sample_rate / avg_interval + 0.5))


def classify(raw_bpm: int) -> Confidence:
    """``MEDIUM`` for a physiologically plausible estimate, else ``LOW``."""
    if MIN_BPM <= raw_bpm <= MAX_BPM:
        return Confidence.MEDIUM
    return Confidence.LOW


def clamp_bpm(raw_bpm: int) -> int:
    return max(MIN_BPM, min(MAX_BPM, int(raw_bpm)))
