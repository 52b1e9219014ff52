"""Dead-end pruning passes for carved layouts.

A FLOOR cell is a dead end when exactly one of its orthogonal neighbours is
FLOOR. Border cells are never floor, so only the interior is scanned.
"""
from __future__ import annotations

import random
from typing import List

from .cells import FLOOR_THRESHOLD, WALL_HEIGHT, Coord2D, Grid, count_floor_neighbors, grid_size, interior_cells


def is_dead_end(grid: Grid, x: int, y: int) -> bool:
    return grid[x][y] >= FLOOR_THRESHOLD and count_floor_neighbors(grid, x, y) == 1


def find_dead_ends(grid: Grid) -> List[Coord2D]:
    width, height = grid_size(grid)
    return [(x, y) for x, y in interior_cells(width, height) if is_dead_end(grid, x, y)]


def remove_all_dead_ends(grid: Grid) -> int:
    """Erode dead ends until a full pass finds none. Returns cells removed.

    Removal happens in place during the scan, so a corridor collapses from its
    tip as far as the scan order allows; the outer loop finishes the rest.
    """
    width, height = grid_size(grid)
    removed = 0
    changed = True
    while changed:
        changed = False
        for x in range(1, width - 1):
            for y in range(1, height - 1):
                if is_dead_end(grid, x, y):
                    grid[x][y] = WALL_HEIGHT
                    removed += 1
                    changed = True
    return removed


def remove_some_dead_ends(grid: Grid, keep_chance: float, rng: random.Random) -> int:
    """Single pass: each dead end present before the pass survives with ``keep_chance``.

    One draw per dead end in scan order. Cells exposed by a removal are not
    considered until a later pass.
    """
    removed = 0
    for x, y in find_dead_ends(grid):
        if rng.random() > keep_chance:
            grid[x][y] = WALL_HEIGHT
            removed += 1
    return removed


def prune_dead_ends(grid: Grid, keep_chance: float, rng: random.Random) -> int:
    """Dispatch on ``keep_chance``: 0 erodes fully, [1, inf) keeps everything."""
    if keep_chance <= 0:
        return remove_all_dead_ends(grid)
    if keep_chance < 1:
        return remove_some_dead_ends(grid, keep_chance, rng)
    return 0


__all__ = [
    "is_dead_end",
    "find_dead_ends",
    "remove_all_dead_ends",
    "remove_some_dead_ends",
    "prune_dead_ends",
]
