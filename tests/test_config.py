import logging
from unittest.mock import patch

import pytest
import yaml

from tcengine import config
from tcengine.arithmetic import Policy
from tcengine.errors import MalformedInputError
from tcengine.framerate import FrameRate, UpperLimit


def test_ensure_config_exists_writes_template(tmp_path):
    cfg_path = tmp_path / "nested" / "config.yaml"
    with patch("tcengine.config._platform_config_path", return_value=cfg_path):
        path = config.ensure_config_exists()
        assert path == cfg_path
        assert path.read_text(encoding="utf-8") == config.DEFAULT_CONFIG_YAML

        path.write_text("timecode:\n  frameRate: '25'\n", encoding="utf-8")
        config.ensure_config_exists()
        assert "25" in path.read_text(encoding="utf-8")

        config.ensure_config_exists(overwrite=True)
        assert path.read_text(encoding="utf-8") == config.DEFAULT_CONFIG_YAML


def test_default_template_values(tmp_path):
    with patch("tcengine.config._platform_config_path", return_value=tmp_path / "config.yaml"):
        defaults = config.timecode_defaults(config.load_config())
    assert defaults.frame_rate is FrameRate.FPS_24
    assert defaults.upper_limit is UpperLimit.HOURS_24
    assert defaults.subframes_base == 80
    assert defaults.policy is Policy.EXACT
    assert defaults.log_level == logging.INFO


def test_timecode_defaults_from_dict():
    cfg = yaml.safe_load(
        "timecode:\n  frameRate: 29.97d\n  upperLimit: 100days\n  subFramesBase: 100\n"
        "arithmetic:\n  policy: Wrapping\nlogging:\n  level: debug\n"
    )
    defaults = config.timecode_defaults(cfg)
    assert defaults.frame_rate is FrameRate.FPS_29_97_DROP
    assert defaults.upper_limit is UpperLimit.DAYS_100
    assert defaults.subframes_base == 100
    assert defaults.policy is Policy.WRAPPING
    assert defaults.log_level == logging.DEBUG


def test_missing_sections_fall_back():
    defaults = config.timecode_defaults({})
    assert defaults.frame_rate is FrameRate.FPS_24
    assert defaults.policy is Policy.EXACT


@pytest.mark.parametrize(
    "cfg",
    [
        {"timecode": {"frameRate": "31"}},
        {"timecode": {"upperLimit": "1week"}},
        {"timecode": {"subFramesBase": 0}},
        {"timecode": {"subFramesBase": "many"}},
        {"arithmetic": {"policy": "raw"}},
        {"arithmetic": {"policy": "saturate"}},
        {"logging": {"level": "loud"}},
    ],
)
def test_bad_config_values(cfg):
    with pytest.raises(MalformedInputError):
        config.timecode_defaults(cfg)


def test_invalid_yaml(tmp_path):
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text("timecode: [24", encoding="utf-8")
    with patch("tcengine.config._platform_config_path", return_value=cfg_path):
        with pytest.raises(MalformedInputError):
            config.load_config()
