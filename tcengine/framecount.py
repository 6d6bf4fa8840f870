from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

from .errors import MalformedInputError
from .utils import trunc_divmod

DEFAULT_SUBFRAMES_BASE = 80


def validate_base(base: int) -> int:
    """Return `base` if it is a usable subframes divisor, else raise ValueError."""
    if isinstance(base, bool) or not isinstance(base, int) or base < 1:
        raise ValueError(f"Subframes base must be a positive integer, got {base!r}")
    return base


@dataclass(frozen=True, eq=False)
class FrameCount:
    """Elapsed time as a signed count of subframes at a given subframes base.

    Two counts compare by the time they represent, so 80 subframes at base 80
    equals 100 subframes at base 100. Arithmetic requires matching bases.
    """

    subframe_count: int
    base: int = DEFAULT_SUBFRAMES_BASE

    def __post_init__(self):
        validate_base(self.base)

    # ---------------------------- Constructors ---------------------------- #

    @classmethod
    def frames(cls, frames: int, base: int = DEFAULT_SUBFRAMES_BASE) -> "FrameCount":
        return cls(frames * base, base)

    @classmethod
    def split(cls, frames: int, subframes: int, base: int = DEFAULT_SUBFRAMES_BASE) -> "FrameCount":
        return cls(frames * base + subframes, base)

    @classmethod
    def split_unit_interval(
        cls, frames: int, unit_interval: float, base: int = DEFAULT_SUBFRAMES_BASE
    ) -> "FrameCount":
        """Whole frames plus a fraction of a frame, quantised to the nearest subframe."""
        return cls(frames * base + round(unit_interval * base), base)

    @classmethod
    def combined(cls, frames: float, base: int = DEFAULT_SUBFRAMES_BASE) -> "FrameCount":
        """Floating-point frames (e.g. 500.025) split into whole frames and subframes."""
        if not math.isfinite(frames):
            raise MalformedInputError(f"Frame count must be finite, got {frames}")
        whole = math.trunc(frames)
        return cls.split_unit_interval(whole, frames - whole, base)

    # ----------------------------- Properties ----------------------------- #

    @property
    def whole_frames(self) -> int:
        return trunc_divmod(self.subframe_count, self.base)[0]

    @property
    def subframes(self) -> int:
        return trunc_divmod(self.subframe_count, self.base)[1]

    @property
    def double_value(self) -> float:
        return self.subframe_count / self.base

    @property
    def fraction_value(self) -> Fraction:
        """Exact frames as a fraction."""
        return Fraction(self.subframe_count, self.base)

    def rebased(self, base: int) -> "FrameCount":
        """Re-express at another base, truncating any partial subframe."""
        if base == self.base:
            return self
        return FrameCount(math.trunc(Fraction(self.subframe_count * base, self.base)), base)

    # ----------------------------- Comparison ----------------------------- #

    def __eq__(self, other):
        if not isinstance(other, FrameCount):
            return NotImplemented
        return self.fraction_value == other.fraction_value

    def __lt__(self, other):
        if not isinstance(other, FrameCount):
            return NotImplemented
        return self.fraction_value < other.fraction_value

    def __le__(self, other):
        if not isinstance(other, FrameCount):
            return NotImplemented
        return self.fraction_value <= other.fraction_value

    def __gt__(self, other):
        if not isinstance(other, FrameCount):
            return NotImplemented
        return self.fraction_value > other.fraction_value

    def __ge__(self, other):
        if not isinstance(other, FrameCount):
            return NotImplemented
        return self.fraction_value >= other.fraction_value

    def __hash__(self):
        return hash(self.fraction_value)

    # ----------------------------- Arithmetic ----------------------------- #

    def _check_base(self, other: "FrameCount"):
        if other.base != self.base:
            raise ValueError(
                f"Cannot combine frame counts at bases {self.base} and {other.base}; rebase one first"
            )

    def __add__(self, other):
        if not isinstance(other, FrameCount):
            return NotImplemented
        self._check_base(other)
        return FrameCount(self.subframe_count + other.subframe_count, self.base)

    def __sub__(self, other):
        if not isinstance(other, FrameCount):
            return NotImplemented
        self._check_base(other)
        return FrameCount(self.subframe_count - other.subframe_count, self.base)

    def __mul__(self, factor):
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return FrameCount(int(self.subframe_count * factor), self.base)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return FrameCount(int(self.subframe_count / divisor), self.base)

    def __neg__(self):
        return FrameCount(-self.subframe_count, self.base)


__all__ = ["FrameCount", "DEFAULT_SUBFRAMES_BASE", "validate_base"]
