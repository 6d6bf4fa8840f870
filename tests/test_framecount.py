import math

import pytest

from tcengine.errors import MalformedInputError
from tcengine.framecount import FrameCount
from tcengine.utils import trunc_div, trunc_divmod


def test_whole_frames_and_subframes():
    fc = FrameCount(40002, 80)
    assert fc.whole_frames == 500
    assert fc.subframes == 2
    assert fc.double_value == pytest.approx(500.025)


def test_negative_split_truncates_toward_zero():
    fc = FrameCount(-40002, 80)
    assert fc.whole_frames == -500
    assert fc.subframes == -2


def test_constructors():
    assert FrameCount.frames(10).subframe_count == 800
    assert FrameCount.split(10, 5, 100).subframe_count == 1005
    assert FrameCount.combined(500.025, 80).subframe_count == 40002
    # nearest subframe, not floor
    assert FrameCount.combined(499.99999, 80).subframe_count == 40000


def test_equality_across_bases():
    assert FrameCount(80, 80) == FrameCount(100, 100)
    assert FrameCount(80, 80).rebased(100) == FrameCount(100, 100)
    assert FrameCount(79, 80) < FrameCount(100, 100)
    assert hash(FrameCount(80, 80)) == hash(FrameCount(100, 100))


def test_arithmetic_requires_matching_base():
    assert FrameCount(10, 80) + FrameCount(5, 80) == FrameCount(15, 80)
    assert FrameCount(10, 80) - FrameCount(15, 80) == FrameCount(-5, 80)
    with pytest.raises(ValueError):
        FrameCount(10, 80) + FrameCount(5, 100)


def test_scaling_truncates():
    assert (FrameCount(7, 80) * 1.5).subframe_count == 10
    assert (FrameCount(7, 80) / 2).subframe_count == 3
    assert (-FrameCount(7, 80)).subframe_count == -7


def test_invalid_base():
    with pytest.raises(ValueError):
        FrameCount(0, 0)


def test_trunc_divmod():
    assert trunc_divmod(7, 2) == (3, 1)
    assert trunc_divmod(-7, 2) == (-3, -1)
    assert trunc_div(-1, 10) == 0


def test_combined_rejects_non_finite():
    for frames in (math.inf, math.nan):
        with pytest.raises(MalformedInputError):
            FrameCount.combined(frames)
