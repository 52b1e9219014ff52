"""Post-processing passes shared by every layout generator."""
from __future__ import annotations

from .cells import FLOOR_THRESHOLD, Grid, grid_size


def smooth_edges(grid: Grid, floor_height: float) -> int:
    """Round off jagged floor outlines in place.

    Every interior WALL cell with at least three orthogonal FLOOR neighbours
    becomes floor. Candidates are collected first and applied afterwards so a
    converted cell never counts toward its neighbours in the same pass.
    Returns the number of converted cells.
    """
    width, height = grid_size(grid)
    to_fill = []
    for x in range(1, width - 1):
        for y in range(1, height - 1):
            if grid[x][y] >= FLOOR_THRESHOLD:
                continue
            floor_count = 0
            if grid[x - 1][y] >= FLOOR_THRESHOLD:
                floor_count += 1
            if grid[x + 1][y] >= FLOOR_THRESHOLD:
                floor_count += 1
            if grid[x][y - 1] >= FLOOR_THRESHOLD:
                floor_count += 1
            if grid[x][y + 1] >= FLOOR_THRESHOLD:
                floor_count += 1
            if floor_count >= 3:
                to_fill.append((x, y))
    for x, y in to_fill:
        grid[x][y] = floor_height
    return len(to_fill)


__all__ = ["smooth_edges"]
