"""
Conversion between display components (DD:HH:MM:SS:FF.SF) and frame counts.

Components may be denormalized (e.g. 90 seconds, negative hours) when they come
from a raw path; `frame_count_of` accepts those as-is. `components_of` always
produces normalized fields.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Set

from .framecount import FrameCount
from .framerate import FrameRate, UpperLimit
from .utils import trunc_div


class Component(Enum):
    """Names an individual timecode component."""

    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"
    FRAMES = "frames"
    SUBFRAMES = "subframes"


@dataclass(frozen=True)
class Components:
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    frames: int = 0
    subframes: int = 0

    def __iter__(self):
        return iter(getattr(self, f.name) for f in fields(self))

    def get(self, component: Component) -> int:
        return getattr(self, component.value)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# ------------------------------ Codec -------------------------------------- #

def _dropped_codes(total_minutes: int, rate: FrameRate) -> int:
    # skipped at the top of every minute except each tenth
    return rate.frames_dropped_per_minute * (total_minutes - trunc_div(total_minutes, 10))


def frame_count_of(components: Components, rate: FrameRate, base: int) -> FrameCount:
    """Total elapsed subframes represented by `components` at `rate`."""
    elapsed_seconds = (
        components.days * 86400 + components.hours * 3600 + components.minutes * 60 + components.seconds
    )

    frames = elapsed_seconds * rate.max_frames + components.frames

    if rate.is_drop:
        frames -= _dropped_codes(trunc_div(elapsed_seconds, 60), rate)

    return FrameCount(frames * base + components.subframes, base)


def components_of(frame_count: FrameCount, rate: FrameRate) -> Components:
    """Exact inverse of `frame_count_of`.

    A negative count yields the absolute display with only the most significant
    nonzero field negated, e.g. -(01:01:05:00) -> Components(hours=-1, minutes=1, seconds=5).
    """
    negative = frame_count.subframe_count < 0
    base = frame_count.base

    frames, subframes = divmod(abs(frame_count.subframe_count), base)

    if rate.is_drop:
        dropped = rate.frames_dropped_per_minute
        per_minute = rate.max_frames * 60 - dropped
        per_ten_minutes = rate.max_frames * 600 - 9 * dropped

        tens, rem = divmod(frames, per_ten_minutes)
        frames += 9 * dropped * tens
        if rem > dropped:
            frames += dropped * ((rem - dropped) // per_minute)

    elapsed_seconds, ff = divmod(frames, rate.max_frames)
    total_minutes, ss = divmod(elapsed_seconds, 60)
    total_hours, mm = divmod(total_minutes, 60)
    dd, hh = divmod(total_hours, 24)

    values = [dd, hh, mm, ss, ff, subframes]

    if negative:
        for idx, value in enumerate(values):
            if value != 0:
                values[idx] = -value
                break

    return Components(*values)


# ---------------------------- Validation ----------------------------------- #

def _valid_frames_floor(components: Components, rate: FrameRate) -> int:
    if rate.is_drop and components.seconds == 0 and components.minutes % 10 != 0:
        return rate.frames_dropped_per_minute
    return 0


def invalid_components(
    components: Components, rate: FrameRate, limit: UpperLimit, base: int
) -> Set[Component]:
    """Return the components falling outside their valid range."""
    invalid: Set[Component] = set()

    if not 0 <= components.days < limit.max_days:
        invalid.add(Component.DAYS)
    if not 0 <= components.hours <= 23:
        invalid.add(Component.HOURS)
    if not 0 <= components.minutes <= 59:
        invalid.add(Component.MINUTES)
    if not 0 <= components.seconds <= 59:
        invalid.add(Component.SECONDS)
    if not _valid_frames_floor(components, rate) <= components.frames <= rate.max_frame_number_displayable:
        invalid.add(Component.FRAMES)
    if not 0 <= components.subframes < base:
        invalid.add(Component.SUBFRAMES)

    return invalid


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def clamp_components(components: Components, rate: FrameRate, limit: UpperLimit, base: int) -> Components:
    """Clamp each field into its valid range, including drop-frame skipped codes."""
    clamped = Components(
        days=_clamp(components.days, 0, limit.max_days - 1),
        hours=_clamp(components.hours, 0, 23),
        minutes=_clamp(components.minutes, 0, 59),
        seconds=_clamp(components.seconds, 0, 59),
        frames=_clamp(components.frames, 0, rate.max_frame_number_displayable),
        subframes=_clamp(components.subframes, 0, base - 1),
    )
    floor = _valid_frames_floor(clamped, rate)
    if clamped.frames < floor:
        clamped = replace(clamped, frames=floor)
    return clamped


__all__ = [
    "Component",
    "Components",
    "frame_count_of",
    "components_of",
    "invalid_components",
    "clamp_components",
]
