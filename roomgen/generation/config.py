from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, Mapping

from .cells import FLOOR_THRESHOLD
from .validation import (
    InvalidParameter,
    require_bool,
    require_int,
    require_min,
    require_number,
    require_unit_interval,
)

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off", ""}


def _coerce(field: dataclasses.Field, raw: Any) -> Any:
    """Convert loosely typed input (query strings, env vars, JSON) to the field's type."""
    if not isinstance(raw, str):
        return raw
    text = raw.strip()
    kind = field.type if isinstance(field.type, str) else getattr(field.type, "__name__", "")
    try:
        if kind == "int":
            return int(text)
        if kind == "float":
            return float(text)
    except ValueError:
        raise InvalidParameter(field.name, f"cannot parse {raw!r} as {kind}") from None
    if kind == "bool":
        lowered = text.lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise InvalidParameter(field.name, f"cannot parse {raw!r} as bool")
    return raw


@dataclass(frozen=True)
class LayoutSettings:
    """Fields shared by every generator: RNG seed and the value stored for floor cells."""

    seed: int = 0
    height: float = 1.0

    def __post_init__(self):
        require_int("seed", self.seed)
        value = require_number("height", self.height)
        if value < FLOOR_THRESHOLD:
            raise InvalidParameter("height", f"floor height must be >= {FLOOR_THRESHOLD} (got {value})")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]):
        """Build settings from a mapping, ignoring keys that are not fields."""
        values = {}
        for field in dataclasses.fields(cls):
            if field.name in mapping and mapping[field.name] is not None:
                values[field.name] = _coerce(field, mapping[field.name])
        return cls(**values)

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class DungeonSettings(LayoutSettings):
    density: float = 0.45
    iterations: int = 5
    path_width: int = 1
    smooth_edges: bool = False

    def __post_init__(self):
        super().__post_init__()
        require_unit_interval("density", self.density)
        require_min("iterations", self.iterations, 0)
        require_min("path_width", self.path_width, 1)
        require_bool("smooth_edges", self.smooth_edges)


@dataclass(frozen=True)
class MazeSettings(LayoutSettings):
    loop_count: int = 5
    dead_end_keep_chance: float = 0.3
    smooth_edges: bool = False

    def __post_init__(self):
        super().__post_init__()
        require_min("loop_count", self.loop_count, 0)
        require_unit_interval("dead_end_keep_chance", self.dead_end_keep_chance)
        require_bool("smooth_edges", self.smooth_edges)


__all__ = ["LayoutSettings", "DungeonSettings", "MazeSettings"]
