"""
Real-time (seconds), rational-fraction and feet+frames interchange.

Real time is lossy and biased so a value exactly on a frame boundary never
falls back into the previous frame when converted back. Rational time is exact
integer math against the rate's frame duration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Tuple, Union

from .errors import MalformedInputError
from .framecount import FrameCount
from .framerate import FrameRate
from .utils import trunc_div, trunc_divmod

# fixed conversion constants
REAL_TIME_OUT_BIAS = 0.00000001
REAL_TIME_IN_BIAS = 0.0000006

FRAMES_PER_FOOT = 16  # 35mm 4-perf

RationalLike = Union[Fraction, Tuple[int, int]]


# ----------------------------- Real time ---------------------------------- #

def real_time_value(frame_count: FrameCount, rate: FrameRate) -> float:
    """Elapsed wall-clock seconds, nudged just past the frame boundary."""
    seconds = frame_count.double_value * (1.0 / rate.frame_rate_for_real_time_calculation)
    return seconds + REAL_TIME_OUT_BIAS


def frame_count_from_real_time(seconds: float, rate: FrameRate, base: int) -> FrameCount:
    if not math.isfinite(seconds):
        raise MalformedInputError(f"Real time must be a finite number of seconds, got {seconds}")
    elapsed_frames = seconds / (1.0 / rate.frame_rate_for_real_time_calculation)
    elapsed_frames += REAL_TIME_IN_BIAS
    return FrameCount.combined(elapsed_frames, base)


# ------------------------------ Rational ---------------------------------- #

def _as_fraction(rational: RationalLike) -> Tuple[int, int]:
    if isinstance(rational, tuple):
        if len(rational) != 2:
            raise MalformedInputError(f"Expected a (numerator, denominator) pair, got {rational!r}")
        numerator, denominator = rational
    else:
        numerator, denominator = rational.numerator, rational.denominator
    if denominator == 0:
        raise MalformedInputError("Rational time has a zero denominator")
    return int(numerator), int(denominator)


def rational_value(frame_count: FrameCount, rate: FrameRate) -> Fraction:
    """Elapsed whole frames as a reduced fraction of seconds (e.g. 335335/24000)."""
    duration = rate.frame_duration
    return Fraction(duration.numerator * frame_count.whole_frames, duration.denominator)


def frame_count_from_rational(rational: RationalLike, rate: FrameRate, base: int) -> FrameCount:
    """Whole frames contained in `rational` seconds. Any partial frame is truncated."""
    numerator, denominator = _as_fraction(rational)
    duration = rate.frame_duration
    frames = trunc_div(numerator * duration.denominator, denominator * duration.numerator)
    return FrameCount.frames(frames, base)


# ---------------------------- Feet + frames ------------------------------- #

@dataclass(frozen=True)
class FeetAndFrames:
    """35mm film footage. Counts elapsed frames directly, without drop-frame adjustment."""

    feet: int
    frames: int
    subframes: int = 0

    @property
    def total_frames(self) -> int:
        return self.feet * FRAMES_PER_FOOT + self.frames

    def __str__(self) -> str:
        text = f"{self.feet}+{self.frames:02d}"
        if self.subframes:
            text += f".{self.subframes:02d}"
        return text


def feet_and_frames(frame_count: FrameCount) -> FeetAndFrames:
    feet, frames = trunc_divmod(frame_count.whole_frames, FRAMES_PER_FOOT)
    return FeetAndFrames(feet, frames, frame_count.subframes)


def frame_count_from_feet_and_frames(value: FeetAndFrames, base: int) -> FrameCount:
    return FrameCount.split(value.total_frames, value.subframes, base)


__all__ = [
    "REAL_TIME_OUT_BIAS",
    "REAL_TIME_IN_BIAS",
    "FRAMES_PER_FOOT",
    "real_time_value",
    "frame_count_from_real_time",
    "rational_value",
    "frame_count_from_rational",
    "FeetAndFrames",
    "feet_and_frames",
    "frame_count_from_feet_and_frames",
]
