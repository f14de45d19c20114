"""
Moving-average smoothing filter.

Each output sample is the arithmetic mean of the input samples in the
symmetric window ``[i - W, i + W]``.  Near the ends the window is truncated,
not zero-padded, so the divisor shrinks to the number of samples actually
averaged.

The filter only attenuates high-frequency content.  There is no high-pass
stage: slow baseline drift passes through unchanged.
"""

from __future__ import annotations

import numpy as np

from heartbeat_audio.exceptions import InvalidInput

DEFAULT_HALF_WIDTH = 20


def moving_average(signal: np.ndarray, half_width: int = DEFAULT_HALF_WIDTH) -> np.ndarray:
    """
    Smooth *signal* with an edge-truncated symmetric moving average.

    Uses a prefix sum so the cost is O(n) regardless of *half_width*.

    Parameters
    ----------
    signal:
        1-D normalised signal.
    half_width:
        Number of neighbours averaged on each side of a sample (``W``).

    Returns
    -------
    numpy.ndarray
        Filtered signal of the same length as *signal*.
    """
    if half_width < 0:
        raise InvalidInput(f"half_width must be >= 0, got {half_width}")

    x = np.asarray(signal, dtype=np.float64)
    n = x.size
    if n == 0 or half_width == 0:
        return x.copy()

    prefix = np.zeros(n + 1, dtype=np.float64)
    np.cumsum(x, out=prefix[1:])

    idx = np.arange(n)
    lo = np.maximum(idx - half_width, 0)
    hi = np.minimum(idx + half_width, n - 1) + 1
    return (prefix[hi] - prefix[lo]) / (hi - lo)
