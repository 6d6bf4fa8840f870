import pytest

from tcengine.arithmetic import Policy
from tcengine.components import Components
from tcengine.framerate import FrameRate
from tcengine.interval import Sign, TimecodeInterval
from tcengine.timecode import Timecode
from tcengine.transformer import Custom, NoTransform, OffsetBy, Transformer


def _tc(rate=FrameRate.FPS_30, **fields):
    return Timecode.from_components(Components(**fields), rate)


def test_offset_forward_and_backward():
    a = _tc(seconds=10)
    b = _tc(seconds=5)

    back = a.offset(b)
    assert back.is_negative
    assert back.magnitude.components == Components(seconds=5)
    assert str(back) == "-00:00:05:00"
    assert back.real_time_value == pytest.approx(-5.0)

    forward = b.offset(a)
    assert forward.sign is Sign.POSITIVE
    assert str(forward) == "00:00:05:00"


def test_offset_to_self_is_positive_zero():
    a = _tc(minutes=3)
    interval = a.offset(a.copy())
    assert interval.sign is Sign.POSITIVE
    assert interval.magnitude.components == Components()


def test_interval_applied_lands_on_destination():
    samples = [
        (_tc(seconds=10), _tc(seconds=5)),
        (_tc(hours=23, minutes=59), _tc(minutes=1)),
        (_tc(FrameRate.FPS_29_97_DROP, minutes=1, frames=2), _tc(FrameRate.FPS_29_97_DROP, hours=5)),
    ]
    for origin, destination in samples:
        assert origin.offsetting(origin.offset(destination)) == destination
        assert destination.offsetting(destination.offset(origin)) == origin


def test_negative_interval_timecode_wraps():
    magnitude = _tc(seconds=5)
    interval = TimecodeInterval(magnitude, Sign.NEGATIVE)
    assert str(interval.timecode) == "23:59:55:00"
    assert interval.apply_to(_tc(seconds=2)).components == Components(hours=23, minutes=59, seconds=57)


def test_positive_interval_beyond_limit_wraps():
    magnitude = Timecode.from_components(Components(hours=25), FrameRate.FPS_24, policy=Policy.RAW)
    interval = TimecodeInterval(magnitude)
    assert interval.timecode.components == Components(hours=1)


def test_interval_equality():
    assert TimecodeInterval(_tc(seconds=1)) == TimecodeInterval(_tc(seconds=1))
    assert TimecodeInterval(_tc(seconds=1)) != TimecodeInterval(_tc(seconds=1), Sign.NEGATIVE)


def test_transformer_offset():
    transformer = Transformer(OffsetBy(TimecodeInterval(_tc(seconds=1), Sign.NEGATIVE)))
    assert transformer(_tc(seconds=10)).components == Components(seconds=9)


def test_transformer_none_and_disabled():
    tc = _tc(frames=3)
    assert Transformer(NoTransform())(tc) is tc
    disabled = Transformer(OffsetBy(TimecodeInterval(_tc(seconds=1))), enabled=False)
    assert disabled(tc) is tc


def test_transformer_custom():
    transformer = Transformer(Custom(lambda tc: tc.multiply(2)))
    assert transformer(_tc(seconds=4)).components == Components(seconds=8)


def test_transformer_unknown():
    with pytest.raises(TypeError):
        Transformer("shift")(_tc())


def test_offset_transform_compares_but_is_unhashable():
    one_second = TimecodeInterval(_tc(seconds=1))
    assert OffsetBy(one_second) == OffsetBy(TimecodeInterval(_tc(seconds=1)))
    with pytest.raises(TypeError):
        hash(OffsetBy(one_second))
    assert hash(NoTransform()) == hash(NoTransform())
