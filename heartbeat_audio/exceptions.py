"""Exceptions raised by the heartbeat_audio package."""

from __future__ import annotations


class InvalidInput(ValueError):
    """The caller passed something the pipeline cannot process.

    Raised for unrecognised sample encodings, non-positive sample rates or
    durations and invalid filter parameters.
    """


class CaptureCancelled(RuntimeError):
    """The capture was cancelled before a buffer could be handed over."""
