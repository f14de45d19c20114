"""
Sample normalisation.

Audio reaches the pipeline in one of two native encodings:

* ``UINT8`` – unsigned bytes 0 – 255 centred on 128, as produced by a
  byte-oriented time-domain analyser.
* ``FLOAT`` – floating-point samples already in [-1, 1].

Both are mapped onto a float64 amplitude sequence in [-1, 1] so the rest of
the pipeline never needs to know which one it was given.
"""

from __future__ import annotations

import enum

import numpy as np

from heartbeat_audio.exceptions import InvalidInput

_UINT8_CENTER = 128.0


class SampleEncoding(enum.Enum):
    """Native encoding of a raw sample sequence."""

    UINT8 = "uint8"
    FLOAT = "float"


def infer_encoding(samples: np.ndarray) -> SampleEncoding:
    """
    Work out the encoding of *samples* from its dtype.

    Raises
    ------
    InvalidInput
        If the dtype is neither ``uint8`` nor a floating type.  Other integer
        types are ambiguous and need an explicit encoding tag.
    """
    dtype = np.asarray(samples).dtype
    if dtype == np.uint8:
        return SampleEncoding.UINT8
    if np.issubdtype(dtype, np.floating):
        return SampleEncoding.FLOAT
    raise InvalidInput(
        f"Cannot infer sample encoding from dtype {dtype}; pass encoding explicitly"
    )


def normalize(
    samples,
    encoding: SampleEncoding | None = None,
) -> np.ndarray:
    """
    Convert raw samples into a float64 signal in [-1, 1].

    Parameters
    ----------
    samples:
        1-D sequence of raw samples.
    encoding:
        Encoding of *samples*.  Inferred from the dtype when omitted.

    Returns
    -------
    numpy.ndarray
        Normalised signal with the same length as *samples*.
    """
    raw = np.asarray(samples)
    if raw.ndim != 1:
        raise InvalidInput(f"Expected a 1-D sample sequence, got shape {raw.shape}")
    if raw.size == 0:
        return np.zeros(0, dtype=np.float64)

    if encoding is None:
        encoding = infer_encoding(raw)

    if encoding is SampleEncoding.UINT8:
        if raw.dtype != np.uint8:
            if not np.issubdtype(raw.dtype, np.integer):
                raise InvalidInput(f"UINT8 samples must be integers, got dtype {raw.dtype}")
            if raw.min() < 0 or raw.max() > 255:
                raise InvalidInput("UINT8 samples must lie in 0..255")
        return (raw.astype(np.float64) - _UINT8_CENTER) / _UINT8_CENTER

    if encoding is SampleEncoding.FLOAT:
        if not np.issubdtype(raw.dtype, np.number) or np.issubdtype(raw.dtype, np.complexfloating):
            raise InvalidInput(f"FLOAT samples must be real numbers, got dtype {raw.dtype}")
        return raw.astype(np.float64)

    raise InvalidInput(f"Unsupported sample encoding: {encoding!r}")
