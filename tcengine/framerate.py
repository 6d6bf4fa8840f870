from __future__ import annotations

import math
from enum import Enum
from fractions import Fraction
from typing import Dict, List, NamedTuple, Optional

SECONDS_PER_DAY = 24 * 60 * 60


class UpperLimit(Enum):
    """Maximum extent of the timeline. Defines the modulus for wrapping math."""

    HOURS_24 = "24hours"
    DAYS_100 = "100days"

    @property
    def max_days(self) -> int:
        return 1 if self is UpperLimit.HOURS_24 else 100

    @property
    def seconds(self) -> int:
        return self.max_days * SECONDS_PER_DAY


class CompatibleGroup(Enum):
    """Rates that produce the same frame tallies over time."""

    NTSC = "NTSC"
    NTSC_DROP = "NTSC drop"
    ATSC = "ATSC"
    ATSC_DROP = "ATSC drop"


class FrameRate(Enum):
    """Timecode display rate. The value is the canonical string id."""

    FPS_23_976 = "23.976"
    FPS_24 = "24"
    FPS_24_98 = "24.98"
    FPS_25 = "25"
    FPS_29_97 = "29.97"
    FPS_29_97_DROP = "29.97d"
    FPS_30 = "30"
    FPS_30_DROP = "30d"
    FPS_47_952 = "47.952"
    FPS_48 = "48"
    FPS_50 = "50"
    FPS_59_94 = "59.94"
    FPS_59_94_DROP = "59.94d"
    FPS_60 = "60"
    FPS_60_DROP = "60d"
    FPS_100 = "100"
    FPS_119_88 = "119.88"
    FPS_119_88_DROP = "119.88d"
    FPS_120 = "120"
    FPS_120_DROP = "120d"

    # ----------------------------- Constants ------------------------------ #

    @property
    def rate(self) -> Fraction:
        """Nominal frames per second as an exact fraction (e.g. 30000/1001)."""
        return _RATES[self].rate

    @property
    def frame_duration(self) -> Fraction:
        """Duration of one frame in seconds (e.g. 1001/30000)."""
        return 1 / _RATES[self].rate

    @property
    def is_drop(self) -> bool:
        return _RATES[self].drop

    @property
    def is_fractional(self) -> bool:
        """True for the 1000/1001 rates (23.976, 29.97, 59.94 ...)."""
        return _RATES[self].rate.denominator != 1

    @property
    def max_frames(self) -> int:
        """Number of frame codes per second: the rate rounded up."""
        return math.ceil(_RATES[self].rate)

    @property
    def max_frame_number_displayable(self) -> int:
        return self.max_frames - 1

    @property
    def number_of_digits(self) -> int:
        return 3 if self.max_frames >= 100 else 2

    @property
    def frames_dropped_per_minute(self) -> int:
        """Frame codes skipped at each non-tenth minute (2 per 30 frame codes)."""
        if not self.is_drop:
            return 0
        return 2 * self.max_frames // 30

    @property
    def frame_rate_for_real_time_calculation(self) -> float:
        if self.is_fractional:
            return self.max_frames / 1.001
        return float(self.max_frames)

    @property
    def string_value(self) -> str:
        return self.value

    @property
    def string_value_verbose(self) -> str:
        if self.is_drop:
            return f"{self.value[:-1]} fps drop"
        return f"{self.value} fps"

    # ------------------------------ Extents ------------------------------- #

    def max_total_frames(self, limit: UpperLimit) -> int:
        """Total frames in the extent of `limit`, net of drop-frame skips."""
        total_minutes = limit.seconds // 60
        dropped = self.frames_dropped_per_minute * (total_minutes - total_minutes // 10)
        return self.max_frames * limit.seconds - dropped

    def max_total_frames_expressible(self, limit: UpperLimit) -> int:
        return self.max_total_frames(limit) - 1

    def max_total_subframes(self, limit: UpperLimit, base: int) -> int:
        return self.max_total_frames(limit) * base

    def max_subframe_count_expressible(self, limit: UpperLimit, base: int) -> int:
        return self.max_total_subframes(limit, base) - 1

    # --------------------------- Compatibility ---------------------------- #

    @property
    def compatible_group(self) -> CompatibleGroup:
        return _RATES[self].group

    @property
    def compatible_group_rates(self) -> List["FrameRate"]:
        return list(COMPATIBLE_GROUPS[self.compatible_group])

    def is_compatible(self, other: "FrameRate") -> bool:
        return self.compatible_group is other.compatible_group

    # ------------------------------ Lookup -------------------------------- #

    @classmethod
    def from_fraction(cls, rate: Fraction, drop: bool = False) -> Optional["FrameRate"]:
        """Return the rate whose nominal fps equals `rate`, or None."""
        rate = Fraction(rate)
        for fr in cls:
            if fr.rate == rate and fr.is_drop == drop:
                return fr
        return None

    @classmethod
    def from_timebase(cls, timebase: int, ntsc: bool, drop: bool = False) -> Optional["FrameRate"]:
        """Resolve an XMEML-style (timebase, ntsc) pair."""
        for fr in cls:
            if fr.max_frames == timebase and fr.is_fractional == ntsc and fr.is_drop == drop:
                return fr
        return None

    def __lt__(self, other):
        if not isinstance(other, FrameRate):
            return NotImplemented
        return (self.rate, self.is_drop) < (other.rate, other.is_drop)

    def __le__(self, other):
        if not isinstance(other, FrameRate):
            return NotImplemented
        return self is other or self < other

    def __str__(self) -> str:
        return self.value


class _RateInfo(NamedTuple):
    rate: Fraction
    drop: bool
    group: CompatibleGroup


# Built once at import and never mutated.
_RATES: Dict[FrameRate, _RateInfo] = {
    FrameRate.FPS_23_976: _RateInfo(Fraction(24000, 1001), False, CompatibleGroup.NTSC),
    FrameRate.FPS_24: _RateInfo(Fraction(24), False, CompatibleGroup.ATSC),
    FrameRate.FPS_24_98: _RateInfo(Fraction(25000, 1001), False, CompatibleGroup.NTSC),
    FrameRate.FPS_25: _RateInfo(Fraction(25), False, CompatibleGroup.ATSC),
    FrameRate.FPS_29_97: _RateInfo(Fraction(30000, 1001), False, CompatibleGroup.NTSC),
    FrameRate.FPS_29_97_DROP: _RateInfo(Fraction(30000, 1001), True, CompatibleGroup.NTSC_DROP),
    FrameRate.FPS_30: _RateInfo(Fraction(30), False, CompatibleGroup.ATSC),
    FrameRate.FPS_30_DROP: _RateInfo(Fraction(30), True, CompatibleGroup.ATSC_DROP),
    FrameRate.FPS_47_952: _RateInfo(Fraction(48000, 1001), False, CompatibleGroup.NTSC),
    FrameRate.FPS_48: _RateInfo(Fraction(48), False, CompatibleGroup.ATSC),
    FrameRate.FPS_50: _RateInfo(Fraction(50), False, CompatibleGroup.ATSC),
    FrameRate.FPS_59_94: _RateInfo(Fraction(60000, 1001), False, CompatibleGroup.NTSC),
    FrameRate.FPS_59_94_DROP: _RateInfo(Fraction(60000, 1001), True, CompatibleGroup.NTSC_DROP),
    FrameRate.FPS_60: _RateInfo(Fraction(60), False, CompatibleGroup.ATSC),
    FrameRate.FPS_60_DROP: _RateInfo(Fraction(60), True, CompatibleGroup.ATSC_DROP),
    FrameRate.FPS_100: _RateInfo(Fraction(100), False, CompatibleGroup.ATSC),
    FrameRate.FPS_119_88: _RateInfo(Fraction(120000, 1001), False, CompatibleGroup.NTSC),
    FrameRate.FPS_119_88_DROP: _RateInfo(Fraction(120000, 1001), True, CompatibleGroup.NTSC_DROP),
    FrameRate.FPS_120: _RateInfo(Fraction(120), False, CompatibleGroup.ATSC),
    FrameRate.FPS_120_DROP: _RateInfo(Fraction(120), True, CompatibleGroup.ATSC_DROP),
}

COMPATIBLE_GROUPS: Dict[CompatibleGroup, tuple] = {
    group: tuple(fr for fr in FrameRate if _RATES[fr].group is group) for group in CompatibleGroup
}

ALL_DROP: List[FrameRate] = [fr for fr in FrameRate if fr.is_drop]
ALL_NON_DROP: List[FrameRate] = [fr for fr in FrameRate if not fr.is_drop]


__all__ = [
    "FrameRate",
    "UpperLimit",
    "CompatibleGroup",
    "COMPATIBLE_GROUPS",
    "ALL_DROP",
    "ALL_NON_DROP",
    "SECONDS_PER_DAY",
]
