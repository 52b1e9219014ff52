"""Public layout generation interface.

    DungeonGenerator(DungeonSettings(...)).generate(width, height) -> grid[x][y]
    MazeGenerator(MazeSettings(...)).generate(width, height) -> grid[x][y]

Grid values below 0.5 are walls (stored as 0.0); floor cells store the
configured ``height``.
"""

from __future__ import annotations

from .cells import FLOOR_THRESHOLD, WALL_HEIGHT, Grid, is_floor
from .config import DungeonSettings, LayoutSettings, MazeSettings
from .dungeon import DungeonGenerator
from .generator import LayoutGenerator
from .maze import MazeGenerator
from .tiles import FLOOR_CHAR, WALL_CHAR, grid_to_rows
from .validation import InvalidParameter

GENERATORS = {
    "dungeon": DungeonGenerator,
    "cave": DungeonGenerator,
    "maze": MazeGenerator,
}


def create_generator(kind: str, settings: LayoutSettings | None = None) -> LayoutGenerator:
    try:
        cls = GENERATORS[kind.lower()]
    except (KeyError, AttributeError):
        raise InvalidParameter("kind", f"unknown generator {kind!r}") from None
    return cls(settings)


def settings_for(kind: str, mapping=None) -> LayoutSettings:
    """Build the settings object matching ``kind`` from a loosely typed mapping."""
    try:
        cls = GENERATORS[kind.lower()].settings_class
    except (KeyError, AttributeError):
        raise InvalidParameter("kind", f"unknown generator {kind!r}") from None
    return cls.from_mapping(mapping or {})


__all__ = [
    "Grid",
    "FLOOR_THRESHOLD",
    "WALL_HEIGHT",
    "FLOOR_CHAR",
    "WALL_CHAR",
    "is_floor",
    "grid_to_rows",
    "LayoutSettings",
    "DungeonSettings",
    "MazeSettings",
    "LayoutGenerator",
    "DungeonGenerator",
    "MazeGenerator",
    "InvalidParameter",
    "GENERATORS",
    "create_generator",
    "settings_for",
]
