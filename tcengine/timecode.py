from __future__ import annotations

import functools
import logging
from fractions import Fraction
from typing import Set, Union

from . import arithmetic
from .arithmetic import Policy
from .components import (
    Component,
    Components,
    clamp_components,
    components_of,
    frame_count_of,
    invalid_components,
)
from .errors import MalformedInputError, TimecodeOverflowError
from .framecount import DEFAULT_SUBFRAMES_BASE, FrameCount, validate_base
from .framerate import FrameRate, UpperLimit
from .interchange import (
    FeetAndFrames,
    RationalLike,
    feet_and_frames,
    frame_count_from_feet_and_frames,
    frame_count_from_rational,
    frame_count_from_real_time,
    rational_value,
    real_time_value,
)
from .interval import Sign, TimecodeInterval

logger = logging.getLogger(__name__)

Operand = Union["Timecode", Components, FrameCount]


@functools.total_ordering
class Timecode:
    """SMPTE timecode value: a frame rate, an upper limit and a subframes base
    plus the days/hours/minutes/seconds/frames/subframes payload.

    Configuration attributes may be reassigned directly; doing so does not
    re-validate the stored components. The components themselves only change
    through the setters and the in-place arithmetic, each of which takes an
    overflow `Policy` and leaves the value untouched if it raises.
    """

    def __init__(
        self,
        frame_rate: FrameRate,
        upper_limit: UpperLimit = UpperLimit.HOURS_24,
        subframes_base: int = DEFAULT_SUBFRAMES_BASE,
    ):
        self.frame_rate = FrameRate(frame_rate)
        self.upper_limit = UpperLimit(upper_limit)
        self.subframes_base = validate_base(subframes_base)
        self._components = Components()

    # ---------------------------- Constructors ---------------------------- #

    @classmethod
    def from_components(
        cls,
        components: Components,
        frame_rate: FrameRate,
        upper_limit: UpperLimit = UpperLimit.HOURS_24,
        subframes_base: int = DEFAULT_SUBFRAMES_BASE,
        policy: Policy = Policy.EXACT,
    ) -> "Timecode":
        tc = cls(frame_rate, upper_limit, subframes_base)
        tc.set_components(components, policy)
        return tc

    @classmethod
    def from_frame_count(
        cls,
        frame_count: Union[FrameCount, int],
        frame_rate: FrameRate,
        upper_limit: UpperLimit = UpperLimit.HOURS_24,
        subframes_base: int = DEFAULT_SUBFRAMES_BASE,
        policy: Policy = Policy.EXACT,
    ) -> "Timecode":
        tc = cls(frame_rate, upper_limit, subframes_base)
        tc.set_frame_count(frame_count, policy)
        return tc

    @classmethod
    def from_real_time(
        cls,
        seconds: float,
        frame_rate: FrameRate,
        upper_limit: UpperLimit = UpperLimit.HOURS_24,
        subframes_base: int = DEFAULT_SUBFRAMES_BASE,
        policy: Policy = Policy.EXACT,
    ) -> "Timecode":
        tc = cls(frame_rate, upper_limit, subframes_base)
        tc.set_real_time(seconds, policy)
        return tc

    @classmethod
    def from_rational(
        cls,
        rational: RationalLike,
        frame_rate: FrameRate,
        upper_limit: UpperLimit = UpperLimit.HOURS_24,
        subframes_base: int = DEFAULT_SUBFRAMES_BASE,
        policy: Policy = Policy.EXACT,
    ) -> "Timecode":
        """Some file formats (FCPXML, AAF) encode time locations as fractions of seconds."""
        tc = cls(frame_rate, upper_limit, subframes_base)
        tc.set_rational(rational, policy)
        return tc

    @classmethod
    def from_feet_and_frames(
        cls,
        value: FeetAndFrames,
        frame_rate: FrameRate,
        upper_limit: UpperLimit = UpperLimit.HOURS_24,
        subframes_base: int = DEFAULT_SUBFRAMES_BASE,
        policy: Policy = Policy.EXACT,
    ) -> "Timecode":
        tc = cls(frame_rate, upper_limit, subframes_base)
        tc.set_feet_and_frames(value, policy)
        return tc

    def copy(self) -> "Timecode":
        tc = Timecode(self.frame_rate, self.upper_limit, self.subframes_base)
        tc._components = self._components
        return tc

    # ------------------------------ Setters ------------------------------- #

    def set_components(self, values: Components, policy: Policy = Policy.EXACT):
        """Replace the components. Policy.RAW stores them without any check."""
        if policy is Policy.EXACT:
            invalid = invalid_components(values, *self._config)
            if invalid:
                if invalid == {Component.DAYS} and values.days > 0:
                    raise TimecodeOverflowError(
                        f"{values.days} days exceeds the {self.upper_limit.value} limit"
                    )
                names = ", ".join(sorted(c.value for c in invalid))
                raise MalformedInputError(f"Invalid {names} for {self.frame_rate} timecode: {values}")
        elif policy is Policy.CLAMPING:
            values = clamp_components(values, *self._config)
        elif policy is Policy.WRAPPING:
            values = arithmetic.add(Components(), values, *self._config, policy)

        self._components = values

    def set_frame_count(self, frame_count: Union[FrameCount, int], policy: Policy = Policy.EXACT):
        """Set from a FrameCount, or from an int of whole frames."""
        if isinstance(frame_count, int):
            frame_count = FrameCount.frames(frame_count, self.subframes_base)
        frame_count = frame_count.rebased(self.subframes_base)

        sfc = arithmetic.apply_policy(frame_count.subframe_count, *self._config, policy)
        self._components = components_of(FrameCount(sfc, self.subframes_base), self.frame_rate)

    def set_real_time(self, seconds: float, policy: Policy = Policy.EXACT):
        """Set to the frame nearest `seconds` of wall-clock time."""
        self.set_frame_count(frame_count_from_real_time(seconds, self.frame_rate, self.subframes_base), policy)

    def set_rational(self, rational: RationalLike, policy: Policy = Policy.EXACT):
        self.set_frame_count(frame_count_from_rational(rational, self.frame_rate, self.subframes_base), policy)

    def set_feet_and_frames(self, value: FeetAndFrames, policy: Policy = Policy.EXACT):
        self.set_frame_count(frame_count_from_feet_and_frames(value, self.subframes_base), policy)

    # ------------------------------ Queries ------------------------------- #

    @property
    def _config(self):
        return self.frame_rate, self.upper_limit, self.subframes_base

    @property
    def components(self) -> Components:
        return self._components

    @property
    def days(self) -> int:
        return self._components.days

    @property
    def hours(self) -> int:
        return self._components.hours

    @property
    def minutes(self) -> int:
        return self._components.minutes

    @property
    def seconds(self) -> int:
        return self._components.seconds

    @property
    def frames(self) -> int:
        return self._components.frames

    @property
    def subframes(self) -> int:
        return self._components.subframes

    @property
    def frame_count(self) -> FrameCount:
        return frame_count_of(self._components, self.frame_rate, self.subframes_base)

    @property
    def max_subframe_count_expressible(self) -> int:
        return self.frame_rate.max_subframe_count_expressible(self.upper_limit, self.subframes_base)

    @property
    def max_frame_count_expressible(self) -> FrameCount:
        return FrameCount(self.max_subframe_count_expressible, self.subframes_base)

    @property
    def invalid_components(self) -> Set[Component]:
        return invalid_components(self._components, *self._config)

    @property
    def is_valid(self) -> bool:
        return not self.invalid_components

    @property
    def real_time_value(self) -> float:
        """(Lossy) elapsed wall-clock seconds."""
        return real_time_value(self.frame_count, self.frame_rate)

    @property
    def rational_value(self) -> Fraction:
        """Elapsed whole frames as a fraction of seconds. Subframes are not included."""
        return rational_value(self.frame_count, self.frame_rate)

    @property
    def feet_and_frames(self) -> FeetAndFrames:
        return feet_and_frames(self.frame_count)

    def converted(self, frame_rate: FrameRate, policy: Policy = Policy.EXACT) -> "Timecode":
        """The same wall-clock position at another frame rate."""
        return Timecode.from_real_time(
            self.real_time_value, frame_rate, self.upper_limit, self.subframes_base, policy
        )

    # ----------------------------- Arithmetic ----------------------------- #

    def _operand_components(self, operand: Operand) -> Components:
        if isinstance(operand, Components):
            return operand
        if isinstance(operand, FrameCount):
            return components_of(operand.rebased(self.subframes_base), self.frame_rate)
        if isinstance(operand, Timecode):
            if operand.frame_rate is not self.frame_rate:
                logger.debug("Converting %r to %s for arithmetic", operand, self.frame_rate)
                operand = operand.converted(self.frame_rate, Policy.RAW)
            if operand.subframes_base != self.subframes_base:
                return components_of(operand.frame_count.rebased(self.subframes_base), self.frame_rate)
            return operand.components
        raise TypeError(f"Unsupported timecode operand: {type(operand).__name__}")

    def add_in_place(self, operand: Operand, policy: Policy = Policy.EXACT):
        self._components = arithmetic.add(self._components, self._operand_components(operand), *self._config, policy)

    def subtract_in_place(self, operand: Operand, policy: Policy = Policy.EXACT):
        self._components = arithmetic.subtract(
            self._components, self._operand_components(operand), *self._config, policy
        )

    def multiply_in_place(self, factor: float, policy: Policy = Policy.EXACT):
        self._components = arithmetic.multiply(self._components, factor, *self._config, policy)

    def divide_in_place(self, divisor: float, policy: Policy = Policy.EXACT):
        self._components = arithmetic.divide(self._components, divisor, *self._config, policy)

    def add(self, operand: Operand, policy: Policy = Policy.EXACT) -> "Timecode":
        result = self.copy()
        result.add_in_place(operand, policy)
        return result

    def subtract(self, operand: Operand, policy: Policy = Policy.EXACT) -> "Timecode":
        result = self.copy()
        result.subtract_in_place(operand, policy)
        return result

    def multiply(self, factor: float, policy: Policy = Policy.EXACT) -> "Timecode":
        result = self.copy()
        result.multiply_in_place(factor, policy)
        return result

    def divide(self, divisor: float, policy: Policy = Policy.EXACT) -> "Timecode":
        result = self.copy()
        result.divide_in_place(divisor, policy)
        return result

    def offset(self, to: Operand) -> TimecodeInterval:
        """Signed interval that, applied to this timecode with wrapping, lands on `to`."""
        destination = self._operand_components(to)
        rate, limit, base = self._config

        if destination == self._components:
            return TimecodeInterval(Timecode(rate, limit, base), Sign.POSITIVE)

        # a wide limit keeps the difference from wrapping inside a narrow one
        wide = UpperLimit.DAYS_100
        if frame_count_of(destination, rate, base) > self.frame_count:
            diff = arithmetic.subtract(destination, self._components, rate, wide, base, Policy.WRAPPING)
            sign = Sign.POSITIVE
        else:
            diff = arithmetic.subtract(self._components, destination, rate, wide, base, Policy.WRAPPING)
            sign = Sign.NEGATIVE

        magnitude = Timecode.from_components(diff, rate, limit, base, Policy.RAW)
        return TimecodeInterval(magnitude, sign)

    def offsetting(self, interval: TimecodeInterval) -> "Timecode":
        return interval.apply_to(self)

    # ----------------------------- Operators ------------------------------ #

    def __add__(self, other):
        if not isinstance(other, (Timecode, Components, FrameCount)):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, (Timecode, Components, FrameCount)):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, factor):
        if not isinstance(factor, (int, float)):
            return NotImplemented
        return self.multiply(factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor):
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        return self.divide(divisor)

    def __iadd__(self, other):
        if not isinstance(other, (Timecode, Components, FrameCount)):
            return NotImplemented
        self.add_in_place(other)
        return self

    def __isub__(self, other):
        if not isinstance(other, (Timecode, Components, FrameCount)):
            return NotImplemented
        self.subtract_in_place(other)
        return self

    def __imul__(self, factor):
        if not isinstance(factor, (int, float)):
            return NotImplemented
        self.multiply_in_place(factor)
        return self

    def __itruediv__(self, divisor):
        if not isinstance(divisor, (int, float)):
            return NotImplemented
        self.divide_in_place(divisor)
        return self

    # ----------------------------- Comparison ----------------------------- #

    def _elapsed(self) -> Fraction:
        return self.frame_count.fraction_value * self.frame_rate.frame_duration

    def __eq__(self, other):
        if not isinstance(other, Timecode):
            return NotImplemented
        return self._elapsed() == other._elapsed()

    def __lt__(self, other):
        if not isinstance(other, Timecode):
            return NotImplemented
        return self._elapsed() < other._elapsed()

    # mutable, so not hashable
    __hash__ = None

    # ------------------------------ Display ------------------------------- #

    def format(self, show_subframes: bool = False) -> str:
        c = self._components
        sep = ";" if self.frame_rate.is_drop else ":"
        digits = self.frame_rate.number_of_digits
        text = f"{c.hours:02d}:{c.minutes:02d}:{c.seconds:02d}{sep}{c.frames:0{digits}d}"
        if c.days != 0:
            text = f"{c.days} {text}"
        if show_subframes:
            text += f".{c.subframes:0{len(str(self.subframes_base - 1))}d}"
        return text

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return (
            f"Timecode('{self.format(show_subframes=True)}' @ {self.frame_rate.value}, "
            f"limit={self.upper_limit.value}, base={self.subframes_base})"
        )


__all__ = ["Timecode", "Policy"]
