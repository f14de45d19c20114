"""
Capture-side sample accumulation.

An audio source pushes fixed-size chunks while recording; the accumulator
appends them until the buffer holds ``duration_seconds`` worth of samples or
the capture is cancelled (user action, hidden page, device error).  The
finished buffer is then handed to the detection pipeline and the
accumulator is discarded.

Usage::

    acc = SampleAccumulator(sample_rate=44100, duration_seconds=15.0)
    samples = acc.drain(chunk_queue, cancel_event)
    result = detect_heart_rate(samples, 44100, 15.0)
"""

from __future__ import annotations

import logging
import threading
from queue import Empty, Queue
from typing import List, Optional

import numpy as np

from heartbeat_audio.exceptions import CaptureCancelled, InvalidInput

logger = logging.getLogger(__name__)


class SampleAccumulator:
    """
    Bounded buffer collecting one recording from streamed chunks.

    Parameters
    ----------
    sample_rate:
        Sample rate the source actually records at (Hz).
    duration_seconds:
        Recording length; together with *sample_rate* this fixes the
        number of samples collected.
    """

    def __init__(self, sample_rate: int, duration_seconds: float) -> None:
        if sample_rate <= 0:
            raise InvalidInput(f"sample_rate must be positive, got {sample_rate}")
        if duration_seconds <= 0:
            raise InvalidInput(f"duration_seconds must be positive, got {duration_seconds}")
        self.sample_rate = sample_rate
        self.duration_seconds = duration_seconds
        self.target_samples: int = int(round(sample_rate * duration_seconds))

        self._chunks: List[np.ndarray] = []
        self._count = 0
        self._cancel_reason: Optional[str] = None
        self._finished = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def push(self, chunk) -> bool:
        """
        Append *chunk* to the buffer, dropping samples past the target.

        Returns *True* once the buffer is full.  Pushing into a full,
        finished or cancelled accumulator raises :class:`RuntimeError`.
        """
        if self._finished or self._cancel_reason is not None:
            raise RuntimeError("Accumulator is closed; create a new one per recording.")
        if self.is_complete:
            raise RuntimeError("Buffer is already full; call finish().")
        data = np.asarray(chunk).ravel()
        room = self.target_samples - self._count
        if data.size > room:
            data = data[:room]
        if data.size:
            self._chunks.append(data)
            self._count += data.size
        return self.is_complete

    def cancel(self, reason: str = "cancelled") -> None:
        """Abort the capture; :meth:`finish` will raise afterwards."""
        if self._cancel_reason is None:
            self._cancel_reason = reason
            logger.info("Capture cancelled: %s", reason)

    def finish(self) -> np.ndarray:
        """
        Hand over the collected buffer and release it.

        A short buffer (source stopped early) is returned as-is.

        Raises
        ------
        CaptureCancelled
            If :meth:`cancel` was called.
        """
        if self._cancel_reason is not None:
            self._release()
            raise CaptureCancelled(self._cancel_reason)
        if self._finished:
            raise RuntimeError("Buffer was already handed over.")
        if not self.is_complete:
            logger.warning(
                "Capture ended early: %d of %d samples collected.",
                self._count, self.target_samples,
            )
        if self._chunks:
            samples = np.concatenate(self._chunks)
        else:
            samples = np.zeros(0, dtype=np.float32)
        self._release()
        return samples

    def drain(
        self,
        chunks: "Queue[object | None]",
        cancel_event: Optional[threading.Event] = None,
        poll_timeout: float = 0.5,
    ) -> np.ndarray:
        """
        Consume *chunks* until the buffer is full, a ``None`` end-of-stream
        marker arrives or *cancel_event* is set, then :meth:`finish`.
        """
        while not self.is_complete:
            if cancel_event is not None and cancel_event.is_set():
                self.cancel("cancel event set")
                break
            try:
                item = chunks.get(timeout=poll_timeout)
            except Empty:
                continue
            if item is None:
                break
            self.push(item)
        return self.finish()

    @property
    def fill_ratio(self) -> float:
        """How full the buffer is (0 – 1)."""
        return self._count / self.target_samples if self.target_samples else 1.0

    @property
    def is_complete(self) -> bool:
        return self._count >= self.target_samples

    @property
    def is_cancelled(self) -> bool:
        return self._cancel_reason is not None

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _release(self) -> None:
        self._chunks = []
        self._finished = True
