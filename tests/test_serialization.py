import json

import pytest

from tcengine import serialization
from tcengine.arithmetic import Policy
from tcengine.components import Components
from tcengine.errors import MalformedInputError
from tcengine.framerate import FrameRate, UpperLimit
from tcengine.timecode import Timecode


def test_to_dict():
    tc = Timecode.from_components(Components(hours=1, frames=2), FrameRate.FPS_29_97_DROP)
    assert serialization.to_dict(tc) == {
        "frameRate": "29.97d",
        "upperLimit": "24hours",
        "subFramesBase": 80,
        "components": {"days": 0, "hours": 1, "minutes": 0, "seconds": 0, "frames": 2, "subframes": 0},
    }


def test_yaml_round_trip():
    tc = Timecode.from_components(
        Components(days=12, hours=3, frames=99, subframes=5), FrameRate.FPS_100, UpperLimit.DAYS_100, 100
    )
    restored = serialization.load_yaml(serialization.dump_yaml(tc))
    assert restored.frame_rate is FrameRate.FPS_100
    assert restored.upper_limit is UpperLimit.DAYS_100
    assert restored.subframes_base == 100
    assert restored.components == tc.components


def test_json_round_trip_keeps_raw_components():
    tc = Timecode.from_components(Components(hours=30, seconds=-4), FrameRate.FPS_25, policy=Policy.RAW)
    restored = serialization.load_json(serialization.dump_json(tc))
    assert restored.components == Components(hours=30, seconds=-4)
    assert not restored.is_valid


def test_missing_fields_use_defaults():
    restored = serialization.from_dict({"frameRate": "24", "components": {"minutes": 3}})
    assert restored.upper_limit is UpperLimit.HOURS_24
    assert restored.subframes_base == 80
    assert restored.components == Components(minutes=3)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"frameRate": "31"},
        {"frameRate": "24", "upperLimit": "7days"},
        {"frameRate": "24", "subFramesBase": 0},
        {"frameRate": "24", "components": {"weeks": 1}},
        {"frameRate": "24", "components": {"hours": "one"}},
        ["24"],
    ],
)
def test_malformed_documents(data):
    with pytest.raises(MalformedInputError):
        serialization.from_dict(data)


def test_malformed_text():
    with pytest.raises(MalformedInputError):
        serialization.load_json("{not json")
    with pytest.raises(MalformedInputError):
        serialization.load_yaml("frameRate: [24")
    with pytest.raises(MalformedInputError):
        serialization.load_json(json.dumps("24"))
