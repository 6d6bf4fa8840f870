import logging
import os
import platform
from pathlib import Path
from typing import NamedTuple

import yaml

from .arithmetic import Policy, ARITHMETIC_POLICIES
from .errors import MalformedInputError
from .framecount import validate_base
from .framerate import FrameRate, UpperLimit

DEFAULT_CONFIG_YAML = """# tcengine default configuration\ntimecode:\n  frameRate: "24"          # 23.976|24|24.98|25|29.97|29.97d|30|30d|...\n  upperLimit: "24hours"     # 24hours|100days\n  subFramesBase: 80\narithmetic:\n  policy: "exact"           # exact|clamping|wrapping\nlogging:\n  level: "INFO"\n"""


class TimecodeDefaults(NamedTuple):
    frame_rate: FrameRate
    upper_limit: UpperLimit
    subframes_base: int
    policy: Policy
    log_level: int


def _platform_config_path() -> Path:
    """Return the platform-specific absolute path to the YAML config file."""
    if platform.system() == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData/Roaming"))
        return base / "tcengine" / "config.yaml"
    else:
        return Path.home() / ".tcengine" / "config.yaml"


def ensure_config_exists(overwrite: bool = False) -> Path:
    """Create the config file with defaults if it does not exist (or overwrite if requested)."""
    cfg_path = _platform_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if overwrite or not cfg_path.exists():
        cfg_path.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    return cfg_path


def load_config() -> dict:
    """Load and return the user config as a dict, ensuring it exists first."""
    cfg_path = ensure_config_exists()
    with cfg_path.open("r", encoding="utf-8") as f:
        try:
            cfg = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise MalformedInputError(f"Invalid YAML in {cfg_path}: {e}") from e
    return cfg or {}


def timecode_defaults(cfg: dict) -> TimecodeDefaults:
    """Typed timecode settings from a loaded config; missing keys fall back to the template values."""
    timecode = cfg.get("timecode") or {}
    arithmetic = cfg.get("arithmetic") or {}
    log = cfg.get("logging") or {}

    try:
        rate = FrameRate(str(timecode.get("frameRate", "24")))
        limit = UpperLimit(str(timecode.get("upperLimit", UpperLimit.HOURS_24.value)))
        base = validate_base(int(timecode.get("subFramesBase", 80)))
        policy = Policy(str(arithmetic.get("policy", "exact")).lower())
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Invalid config value: {e}") from e

    if policy not in ARITHMETIC_POLICIES:
        raise MalformedInputError(f"Config policy must be exact, clamping or wrapping, got {policy.value}")

    level_name = str(log.get("level", "INFO")).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise MalformedInputError(f"Unknown logging level: {level_name}")

    return TimecodeDefaults(rate, limit, base, policy, level)
