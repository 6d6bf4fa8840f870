from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .arithmetic import Policy
from .components import Components

if TYPE_CHECKING:
    from .timecode import Timecode


class Sign(Enum):
    POSITIVE = "+"
    NEGATIVE = "-"


class TimecodeInterval:
    """A directed duration: a magnitude timecode plus a sign.

    The magnitude is not bounded by its upper limit until it is materialised
    with `timecode`, which wraps around the limit if necessary.
    """

    def __init__(self, magnitude: "Timecode", sign: Sign = Sign.POSITIVE):
        self.magnitude = magnitude
        self.sign = sign

    @property
    def is_negative(self) -> bool:
        return self.sign is Sign.NEGATIVE

    @property
    def timecode(self) -> "Timecode":
        """The interval as a concrete timecode, wrapping around the limit bounds."""
        if not self.is_negative:
            return self.magnitude.add(Components(), Policy.WRAPPING)

        zero = self.magnitude.copy()
        zero.set_components(Components(), Policy.RAW)
        return zero.subtract(self.magnitude.components, Policy.WRAPPING)

    def apply_to(self, base: "Timecode") -> "Timecode":
        """Offset `base` by this interval, wrapping around the limit bounds."""
        return base.add(self.timecode, Policy.WRAPPING)

    @property
    def real_time_value(self) -> float:
        seconds = self.magnitude.real_time_value
        return -seconds if self.is_negative else seconds

    def __eq__(self, other):
        if not isinstance(other, TimecodeInterval):
            return NotImplemented
        return self.sign is other.sign and self.magnitude == other.magnitude

    __hash__ = None

    def __str__(self) -> str:
        prefix = "-" if self.is_negative else ""
        return f"{prefix}{self.magnitude}"

    def __repr__(self) -> str:
        return f"TimecodeInterval({self})"


__all__ = ["Sign", "TimecodeInterval"]
