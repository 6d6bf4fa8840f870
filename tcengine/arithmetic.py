"""
Timecode math in subframe space.

Every operator combines frame counts first and then applies one of the
overflow policies to the resulting subframe count:

    EXACT     raise TimecodeOverflowError outside [0, max expressible]
    CLAMPING  saturate into [0, max expressible]
    WRAPPING  reduce modulo the total subframes in the upper limit
"""

from __future__ import annotations

import logging
import math
from enum import Enum
from fractions import Fraction

from .components import Components, components_of, frame_count_of
from .errors import MalformedInputError, TimecodeDivisionByZeroError, TimecodeOverflowError
from .framecount import FrameCount
from .framerate import FrameRate, UpperLimit

logger = logging.getLogger(__name__)


class Policy(Enum):
    EXACT = "exact"
    CLAMPING = "clamping"
    WRAPPING = "wrapping"
    RAW = "raw"  # construction only: no bounds applied


ARITHMETIC_POLICIES = (Policy.EXACT, Policy.CLAMPING, Policy.WRAPPING)


def _check_arithmetic_policy(policy: Policy):
    if policy not in ARITHMETIC_POLICIES:
        raise ValueError(f"Arithmetic requires exact, clamping or wrapping policy, got {policy}")


def apply_policy(subframe_count: int, rate: FrameRate, limit: UpperLimit, base: int, policy: Policy) -> int:
    """Bring `subframe_count` into range according to `policy`."""
    if policy is Policy.RAW:
        return subframe_count

    max_count = rate.max_subframe_count_expressible(limit, base)

    if policy is Policy.EXACT:
        if subframe_count < 0 or subframe_count > max_count:
            raise TimecodeOverflowError(
                f"Subframe count {subframe_count} is outside 0...{max_count} "
                f"for {rate} over {limit.value}"
            )
        return subframe_count

    if policy is Policy.CLAMPING:
        clamped = max(0, min(subframe_count, max_count))
        if clamped != subframe_count:
            logger.debug("Clamped subframe count %d to %d", subframe_count, clamped)
        return clamped

    modulus = rate.max_total_subframes(limit, base)
    wrapped = subframe_count % modulus
    if wrapped != subframe_count:
        logger.debug("Wrapped subframe count %d to %d (modulus %d)", subframe_count, wrapped, modulus)
    return wrapped


def _finish(subframe_count: int, rate: FrameRate, limit: UpperLimit, base: int, policy: Policy) -> Components:
    sfc = apply_policy(subframe_count, rate, limit, base, policy)
    return components_of(FrameCount(sfc, base), rate)


# ------------------------------ Operators ---------------------------------- #

def add(
    origin: Components, duration: Components, rate: FrameRate, limit: UpperLimit, base: int, policy: Policy
) -> Components:
    _check_arithmetic_policy(policy)
    fc = frame_count_of(origin, rate, base) + frame_count_of(duration, rate, base)
    return _finish(fc.subframe_count, rate, limit, base, policy)


def subtract(
    origin: Components, duration: Components, rate: FrameRate, limit: UpperLimit, base: int, policy: Policy
) -> Components:
    _check_arithmetic_policy(policy)
    fc = frame_count_of(origin, rate, base) - frame_count_of(duration, rate, base)
    return _finish(fc.subframe_count, rate, limit, base, policy)


def _check_scalar(scalar: float, name: str):
    if not math.isfinite(scalar):
        raise MalformedInputError(f"Timecode {name} must be a finite number, got {scalar}")


def _scale(
    subframe_count: int, scalar: float, dividing: bool, rate: FrameRate, limit: UpperLimit, base: int, policy: Policy
) -> Components:
    result = float(subframe_count) / scalar if dividing else float(subframe_count) * scalar
    max_count = rate.max_subframe_count_expressible(limit, base)

    # exact bounds are checked on the float before truncation
    if policy is Policy.EXACT:
        if result < 0.0 or result > float(max_count):
            raise TimecodeOverflowError(f"Scaled subframe count {result} is outside 0...{max_count}")
        return _finish(int(result), rate, limit, base, policy)

    if math.isfinite(result):
        return _finish(int(result), rate, limit, base, policy)

    # the float product overflowed
    if policy is Policy.CLAMPING:
        saturated = max_count if result > 0 else 0
        logger.debug("Clamped scaled subframe count %s to %d", result, saturated)
        return _finish(saturated, rate, limit, base, policy)

    exact = Fraction(subframe_count) / Fraction(scalar) if dividing else Fraction(subframe_count) * Fraction(scalar)
    return _finish(int(exact), rate, limit, base, policy)


def multiply(
    origin: Components, factor: float, rate: FrameRate, limit: UpperLimit, base: int, policy: Policy
) -> Components:
    _check_arithmetic_policy(policy)
    _check_scalar(factor, "factor")
    sfc = frame_count_of(origin, rate, base).subframe_count
    return _scale(sfc, factor, False, rate, limit, base, policy)


def divide(
    origin: Components, divisor: float, rate: FrameRate, limit: UpperLimit, base: int, policy: Policy
) -> Components:
    _check_arithmetic_policy(policy)
    _check_scalar(divisor, "divisor")
    if divisor == 0:
        raise TimecodeDivisionByZeroError("Cannot divide a timecode by zero")
    sfc = frame_count_of(origin, rate, base).subframe_count
    return _scale(sfc, divisor, True, rate, limit, base, policy)


__all__ = [
    "Policy",
    "ARITHMETIC_POLICIES",
    "apply_policy",
    "add",
    "subtract",
    "multiply",
    "divide",
]
