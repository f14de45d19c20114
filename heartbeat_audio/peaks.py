"""
Pulse peak detection on the smoothed waveform.

A peak is a strict local maximum above a small amplitude threshold.  Peaks
closer than ``min_distance`` samples to the previously accepted one are
dropped, which suppresses double detections inside a single heartbeat
(e.g. the dicrotic notch).
"""

from __future__ import annotations

import numpy as np

DEFAULT_THRESHOLD = 0.01


def min_distance_for(sample_rate: int) -> int:
    """Minimum peak spacing in samples, roughly 100 ms at *sample_rate*."""
    return int(sample_rate) // 10


def find_peaks(
    data: np.ndarray,
    min_distance: int,
    threshold: float = DEFAULT_THRESHOLD,
) -> np.ndarray:
    """
    Return the indices of accepted peaks in *data*, in increasing order.

    Index ``i`` (``1 <= i <= n - 2``) qualifies when it is strictly greater
    than both neighbours and than *threshold*.  A qualifying index is kept
    when it is the first one kept or lies more than *min_distance* samples
    after the last one kept.
    """
    x = np.asarray(data, dtype=np.float64)
    if x.size < 3:
        return np.zeros(0, dtype=np.int64)

    centre = x[1:-1]
    is_candidate = (centre > x[:-2]) & (centre > x[2:]) & (centre > threshold)
    candidates = np.flatnonzero(is_candidate) + 1

    accepted: list[int] = []
    for i in candidates:
        if not accepted or i - accepted[-1] > min_distance:
            accepted.append(int(i))
    return np.asarray(accepted, dtype=np.int64)
