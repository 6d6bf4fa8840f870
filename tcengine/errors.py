"""Errors raised by the timecode engine."""


class TimecodeError(Exception):
    """Base class for every timecode engine failure."""


class TimecodeOverflowError(TimecodeError, OverflowError):
    """A value fell outside the range expressible under the upper limit."""


class MalformedInputError(TimecodeError, ValueError):
    """Structurally invalid input, such as a frames field past the rate's maximum."""


class TimecodeDivisionByZeroError(TimecodeError, ZeroDivisionError):
    """Scalar division by zero, rejected under every policy."""


__all__ = [
    "TimecodeError",
    "TimecodeOverflowError",
    "MalformedInputError",
    "TimecodeDivisionByZeroError",
]
