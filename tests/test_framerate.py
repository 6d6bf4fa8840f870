from fractions import Fraction

import pytest

from tcengine.framerate import (
    ALL_DROP,
    ALL_NON_DROP,
    CompatibleGroup,
    FrameRate,
    UpperLimit,
)


def test_rate_properties_30():
    fr = FrameRate.FPS_30
    assert fr.number_of_digits == 2
    assert fr.max_frame_number_displayable == 29
    assert fr.max_frames == 30
    assert fr.rate == Fraction(30)
    assert not fr.is_drop
    assert not fr.is_fractional


def test_fractional_rates_use_1001_denominator():
    assert FrameRate.FPS_29_97.rate == Fraction(30000, 1001)
    assert FrameRate.FPS_23_976.frame_duration == Fraction(1001, 24000)
    assert FrameRate.FPS_119_88_DROP.max_frames == 120
    assert FrameRate.FPS_119_88_DROP.number_of_digits == 3


@pytest.mark.parametrize(
    "rate, total",
    [
        (FrameRate.FPS_29_97_DROP, 2589408),
        (FrameRate.FPS_59_94_DROP, 5178816),
        (FrameRate.FPS_119_88_DROP, 10357632),
        (FrameRate.FPS_30_DROP, 2589408),
        (FrameRate.FPS_24, 2073600),
        (FrameRate.FPS_25, 2160000),
        (FrameRate.FPS_29_97, 2592000),
        (FrameRate.FPS_120, 10368000),
    ],
)
def test_frames_in_24_hours(rate, total):
    assert rate.max_total_frames(UpperLimit.HOURS_24) == total
    assert rate.max_total_frames_expressible(UpperLimit.HOURS_24) == total - 1


def test_max_subframe_count_expressible():
    fr = FrameRate.FPS_29_97_DROP
    assert fr.max_total_subframes(UpperLimit.HOURS_24, 80) == 207152640
    assert fr.max_subframe_count_expressible(UpperLimit.HOURS_24, 80) == 207152640 - 1


def test_100_days_is_100_times_24_hours():
    for fr in FrameRate:
        assert fr.max_total_frames(UpperLimit.DAYS_100) == 100 * fr.max_total_frames(UpperLimit.HOURS_24)


def test_frames_dropped_per_minute():
    assert FrameRate.FPS_29_97_DROP.frames_dropped_per_minute == 2
    assert FrameRate.FPS_60_DROP.frames_dropped_per_minute == 4
    assert FrameRate.FPS_120_DROP.frames_dropped_per_minute == 8
    assert FrameRate.FPS_30.frames_dropped_per_minute == 0


def test_real_time_rate():
    assert FrameRate.FPS_29_97_DROP.frame_rate_for_real_time_calculation == pytest.approx(30 / 1.001)
    assert FrameRate.FPS_30_DROP.frame_rate_for_real_time_calculation == 30.0


def test_sort_order():
    rates = [FrameRate.FPS_120, FrameRate.FPS_30, FrameRate.FPS_24, FrameRate.FPS_29_97]
    assert sorted(rates) == [FrameRate.FPS_24, FrameRate.FPS_29_97, FrameRate.FPS_30, FrameRate.FPS_120]
    assert FrameRate.FPS_29_97 < FrameRate.FPS_29_97_DROP


def test_drop_and_non_drop_lists_partition_rates():
    assert set(ALL_DROP) | set(ALL_NON_DROP) == set(FrameRate)
    assert not set(ALL_DROP) & set(ALL_NON_DROP)
    assert len(ALL_DROP) == 6


def test_compatible_groups():
    assert FrameRate.FPS_23_976.compatible_group is CompatibleGroup.NTSC
    assert FrameRate.FPS_29_97_DROP.compatible_group is CompatibleGroup.NTSC_DROP
    assert FrameRate.FPS_100.compatible_group is CompatibleGroup.ATSC
    assert FrameRate.FPS_60_DROP.compatible_group is CompatibleGroup.ATSC_DROP
    assert FrameRate.FPS_24 in FrameRate.FPS_120.compatible_group_rates


def test_compatibility_is_symmetric_and_transitive():
    for a in FrameRate:
        assert a.is_compatible(a)
        for b in FrameRate:
            assert a.is_compatible(b) == b.is_compatible(a)
            for c in FrameRate:
                if a.is_compatible(b) and b.is_compatible(c):
                    assert a.is_compatible(c)


def test_lookups():
    assert FrameRate.from_fraction(Fraction(30000, 1001), drop=True) is FrameRate.FPS_29_97_DROP
    assert FrameRate.from_fraction(Fraction(31)) is None
    assert FrameRate.from_timebase(24, ntsc=True) is FrameRate.FPS_23_976
    assert FrameRate.from_timebase(30, ntsc=False, drop=True) is FrameRate.FPS_30_DROP


def test_string_values():
    assert str(FrameRate.FPS_29_97_DROP) == "29.97d"
    assert FrameRate.FPS_29_97_DROP.string_value_verbose == "29.97 fps drop"
    assert FrameRate.FPS_25.string_value_verbose == "25 fps"
    assert FrameRate("59.94d") is FrameRate.FPS_59_94_DROP
