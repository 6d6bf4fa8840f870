"""
Persisted form of a Timecode: frame rate id, upper limit id, subframes base and
the six components. Decoding restores the components verbatim, so raw
(out-of-range) instances round-trip as well.
"""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any, Dict

import yaml

from .arithmetic import Policy
from .components import Components
from .errors import MalformedInputError
from .framecount import DEFAULT_SUBFRAMES_BASE
from .framerate import FrameRate, UpperLimit
from .timecode import Timecode

_COMPONENT_KEYS = [f.name for f in fields(Components)]


def to_dict(tc: Timecode) -> Dict[str, Any]:
    return {
        "frameRate": tc.frame_rate.value,
        "upperLimit": tc.upper_limit.value,
        "subFramesBase": tc.subframes_base,
        "components": tc.components.as_dict(),
    }


def from_dict(data: Dict[str, Any]) -> Timecode:
    if not isinstance(data, dict):
        raise MalformedInputError(f"Expected a mapping, got {type(data).__name__}")
    try:
        rate = FrameRate(str(data["frameRate"]))
        limit = UpperLimit(str(data.get("upperLimit", UpperLimit.HOURS_24.value)))
        base = data.get("subFramesBase", DEFAULT_SUBFRAMES_BASE)
        raw = data.get("components", {})
        unknown = set(raw) - set(_COMPONENT_KEYS)
        if unknown:
            raise MalformedInputError(f"Unknown component keys: {', '.join(sorted(unknown))}")
        values = Components(**{key: int(raw.get(key, 0)) for key in _COMPONENT_KEYS})
        return Timecode.from_components(values, rate, limit, base, Policy.RAW)
    except MalformedInputError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedInputError(f"Malformed timecode document: {e}") from e


def dump_yaml(tc: Timecode) -> str:
    return yaml.safe_dump(to_dict(tc), sort_keys=False)


def load_yaml(text: str) -> Timecode:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedInputError(f"Invalid YAML: {e}") from e
    return from_dict(data)


def dump_json(tc: Timecode) -> str:
    return json.dumps(to_dict(tc))


def load_json(text: str) -> Timecode:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"Invalid JSON: {e}") from e
    return from_dict(data)


__all__ = ["to_dict", "from_dict", "dump_yaml", "load_yaml", "dump_json", "load_json"]
