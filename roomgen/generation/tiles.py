"""Text preview of a height grid, one character per cell.

Rows are emitted top to bottom (y = 0 first) so the preview reads the same way
the grid is indexed.
"""
from typing import List

from .cells import FLOOR_THRESHOLD, Grid, grid_size

# Tile characters for previews
WALL_CHAR = "#"
FLOOR_CHAR = "."


def grid_to_rows(grid: Grid) -> List[str]:
    width, height = grid_size(grid)
    return [
        "".join(FLOOR_CHAR if grid[x][y] >= FLOOR_THRESHOLD else WALL_CHAR for x in range(width))
        for y in range(height)
    ]


def rows_to_grid(rows: List[str], height: float = 1.0) -> Grid:
    """Inverse of :func:`grid_to_rows`; handy for writing fixtures by hand."""
    if not rows:
        return []
    width = len(rows[0])
    return [[height if rows[y][x] == FLOOR_CHAR else 0.0 for y in range(len(rows))] for x in range(width)]


__all__ = ["WALL_CHAR", "FLOOR_CHAR", "grid_to_rows", "rows_to_grid"]
