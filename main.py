#!/usr/bin/env python3
"""
Heartbeat Audio – main entry point.

Usage
-----
    python main.py RECORDING.wav [OPTIONS]

Options
-------
    --duration FLOAT     Nominal recording length in seconds
                         (default: length of the file)
    --window INT         Moving-average half window in samples (default: 20)
    --min-distance INT   Minimum peak spacing in samples
                         (default: sample rate / 10)
    --export-wav PATH    Write the raw recording as 16-bit PCM WAV (debug)
    --verbose            Enable debug logging
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from heartbeat_audio.exceptions import InvalidInput
from heartbeat_audio.pipeline import PipelineConfig, detect_heart_rate, interpret
from heartbeat_audio.wav_export import load_recording, write_wav

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s – %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("heartbeat_audio")

# Nominal recording length used when the file holds no samples.
DEFAULT_DURATION = 15.0


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Estimate heart rate from a skin-contact audio recording",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("recording", type=Path,
                        help="WAV file captured with the microphone on the skin")
    parser.add_argument("--duration", type=float, default=None,
                        help="Nominal recording length in seconds (default: file length)")
    parser.add_argument("--window", type=int, default=20,
                        help="Moving-average half window in samples")
    parser.add_argument("--min-distance", type=int, default=None,
                        help="Minimum peak spacing in samples (default: rate / 10)")
    parser.add_argument("--export-wav", type=Path, default=None,
                        help="Write the raw recording to this WAV file")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging")
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Detection run
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> int:
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        sample_rate, samples, encoding = load_recording(args.recording)
    except (OSError, ValueError) as exc:
        logger.error("Cannot read %s: %s", args.recording, exc)
        return 1

    duration = args.duration
    if duration is None:
        duration = len(samples) / sample_rate if len(samples) else DEFAULT_DURATION

    config = PipelineConfig(half_width=args.window, min_distance=args.min_distance)
    try:
        result = detect_heart_rate(
            samples, sample_rate, duration, encoding=encoding, config=config,
        )
    except InvalidInput as exc:
        logger.error("Invalid recording: %s", exc)
        return 1

    if args.export_wav is not None:
        write_wav(args.export_wav, samples, sample_rate, encoding)

    if result.detected:
        print(f"BPM={result.bpm}  conf={result.confidence.value}  peaks={len(result.peaks)}")
    else:
        print(f"BPM=--  conf={result.confidence.value}  peaks=0")
    print(interpret(result))
    return 0


def main(argv: list[str] | None = None) -> int:
    return run(parse_args(argv))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
