from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Union

from .interval import TimecodeInterval
from .timecode import Timecode


@dataclass(frozen=True)
class NoTransform:
    """Pass timecode through unchanged."""


@dataclass(frozen=True, eq=True)
class OffsetBy:
    """Offset timecode by a signed interval. Unhashable, like the interval it holds."""

    interval: TimecodeInterval

    __hash__ = None


@dataclass(frozen=True)
class Custom:
    """Process timecode with an arbitrary callable."""

    func: Callable[[Timecode], Timecode]


Transform = Union[NoTransform, OffsetBy, Custom]


@dataclass
class Transformer:
    transform: Transform
    enabled: bool = True

    def __call__(self, tc: Timecode) -> Timecode:
        if not self.enabled:
            return tc

        if isinstance(self.transform, NoTransform):
            return tc
        if isinstance(self.transform, OffsetBy):
            return tc.offsetting(self.transform.interval)
        if isinstance(self.transform, Custom):
            return self.transform.func(tc)
        raise TypeError(f"Unknown transform: {self.transform!r}")


__all__ = ["NoTransform", "OffsetBy", "Custom", "Transform", "Transformer"]
