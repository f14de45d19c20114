"""
WAV container I/O.

* Debug export: the raw (unfiltered) recording is written as a canonical
  44-byte-header RIFF/WAVE file, mono 16-bit PCM, so it can be replayed or
  inspected in any audio tool.
* Loading: recordings are read back with ``scipy.io.wavfile`` and returned in
  one of the two encodings the pipeline accepts.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Tuple

import numpy as np
from scipy.io import wavfile

from heartbeat_audio.exceptions import InvalidInput
from heartbeat_audio.normalizer import SampleEncoding, normalize

logger = logging.getLogger(__name__)

_INT16_SCALE = 32767.0


def encode_wav(
    samples,
    sample_rate: int,
    encoding: SampleEncoding | None = None,
) -> bytes:
    """
    Encode raw samples as a mono 16-bit PCM WAV file.

    Each sample is normalised, clamped to [-1, 1] and stored as
    ``round(x * 32767)`` little-endian.
    """
    if sample_rate <= 0:
        raise InvalidInput(f"sample_rate must be positive, got {sample_rate}")
    x = normalize(samples, encoding)
    pcm = np.round(np.clip(x, -1.0, 1.0) * _INT16_SCALE).astype("<i2")
    pcm_bytes = pcm.tobytes()

    num_ch = 1
    bps = 16
    block_align = num_ch * (bps // 8)
    byte_rate = sample_rate * block_align
    data_size = len(pcm_bytes)

    hdr = struct.pack("<4sI4s", b"RIFF", 36 + data_size, b"WAVE")
    fmt = struct.pack("<4sIHHIIHH",
                      b"fmt ", 16, 1, num_ch, sample_rate,
                      byte_rate, block_align, bps)
    dat = struct.pack("<4sI", b"data", data_size) + pcm_bytes

    return hdr + fmt + dat


def write_wav(
    path,
    samples,
    sample_rate: int,
    encoding: SampleEncoding | None = None,
) -> Path:
    """Write :func:`encode_wav` output to *path* and return the path."""
    out = Path(path)
    out.write_bytes(encode_wav(samples, sample_rate, encoding))
    logger.info("Saved recording to %s", out)
    return out


def decode_int16(data: np.ndarray) -> np.ndarray:
    """Inverse of the export scaling: int16 PCM to floats in [-1, 1]."""
    return np.asarray(data, dtype=np.float64) / _INT16_SCALE


def load_recording(path) -> Tuple[int, np.ndarray, SampleEncoding]:
    """
    Read a WAV recording.

    Returns
    -------
    (sample_rate, samples, encoding)
        8-bit files are returned as ``uint8`` with ``SampleEncoding.UINT8``;
        everything else as float64 in [-1, 1] with ``SampleEncoding.FLOAT``.
        Multi-channel files are mixed down to mono.
    """
    sample_rate, data = wavfile.read(str(path))
    logger.info(
        "Loaded %s – rate=%d Hz dtype=%s shape=%s",
        path, sample_rate, data.dtype, data.shape,
    )

    if data.dtype == np.uint8:
        if data.ndim > 1:
            data = np.round(data.mean(axis=1)).astype(np.uint8)
        return int(sample_rate), data, SampleEncoding.UINT8

    if data.dtype == np.int16:
        samples = np.clip(decode_int16(data), -1.0, 1.0)
    elif data.dtype.kind == "i":
        samples = data.astype(np.float64) / float(np.iinfo(data.dtype).max)
    elif data.dtype.kind == "f":
        samples = data.astype(np.float64)
    else:
        raise InvalidInput(f"Unsupported WAV sample type {data.dtype}")

    if samples.ndim > 1:
        samples = samples.mean(axis=1)
    return int(sample_rate), samples, SampleEncoding.FLOAT
