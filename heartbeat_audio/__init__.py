"""
Heartbeat Audio – pulse-rate estimation from a skin-contact audio recording.
Hold the microphone against the skin for a few seconds; the recording is
smoothed, the pulse peaks are located and converted into BPM.
"""

from heartbeat_audio.exceptions import CaptureCancelled, InvalidInput
from heartbeat_audio.normalizer import SampleEncoding
from heartbeat_audio.pipeline import (
    DetectionResult,
    PipelineConfig,
    detect_heart_rate,
    interpret,
)
from heartbeat_audio.rate import Confidence

__all__ = [
    "CaptureCancelled",
    "Confidence",
    "DetectionResult",
    "InvalidInput",
    "PipelineConfig",
    "SampleEncoding",
    "detect_heart_rate",
    "interpret",
]

__version__ = "0.1.0"
__author__ = "heartbeat_audio"
