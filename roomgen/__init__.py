"""
project: roomgen
module: __init__.py

Procedural 2D room layouts: cellular automata caves and backtracking mazes.

The generation core lives in :mod:`roomgen.generation` and has no third-party
dependencies; the Flask preview server (:mod:`roomgen.server`) is imported
only when requested.
"""

from .generation import (
    DungeonGenerator,
    DungeonSettings,
    InvalidParameter,
    LayoutGenerator,
    MazeGenerator,
    MazeSettings,
    create_generator,
    grid_to_rows,
)  # noqa: F401

__all__ = [
    "DungeonGenerator",
    "DungeonSettings",
    "InvalidParameter",
    "LayoutGenerator",
    "MazeGenerator",
    "MazeSettings",
    "create_generator",
    "grid_to_rows",
]
