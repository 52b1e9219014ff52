"""Connectivity analysis over FLOOR cells.

Flood fill, region discovery and the largest-region consolidation used by the
cellular automata generator (and by tests to assert the connectivity
invariant on every generator's output).
"""
from __future__ import annotations

from collections import deque
from typing import List, Tuple

from .cells import FLOOR_THRESHOLD, ORTHOGONAL, WALL_HEIGHT, Coord2D, Grid, grid_size


def flood_fill(grid: Grid, start: Coord2D, visited: List[List[bool]]) -> List[Coord2D]:
    """Return every FLOOR cell 4-connected to ``start``, marking them visited."""
    width, height = grid_size(grid)
    sx, sy = start
    area = []
    q = deque([start])
    visited[sx][sy] = True
    while q:
        cx, cy = q.popleft()
        area.append((cx, cy))
        for dx, dy in ORTHOGONAL:
            nx, ny = cx + dx, cy + dy
            if 0 <= nx < width and 0 <= ny < height and not visited[nx][ny]:
                if grid[nx][ny] >= FLOOR_THRESHOLD:
                    visited[nx][ny] = True
                    q.append((nx, ny))
    return area


def find_regions(grid: Grid) -> List[List[Coord2D]]:
    """All FLOOR regions, in the order their first cell is met by an x-outer scan."""
    width, height = grid_size(grid)
    visited = [[False] * height for _ in range(width)]
    regions = []
    for x in range(width):
        for y in range(height):
            if grid[x][y] >= FLOOR_THRESHOLD and not visited[x][y]:
                regions.append(flood_fill(grid, (x, y), visited))
    return regions


def keep_largest_region(grid: Grid) -> Tuple[int, int]:
    """Turn every FLOOR cell outside the largest region into WALL.

    Ties go to the region discovered first. Returns (regions_found,
    cells_discarded); a grid without floor is left untouched.
    """
    regions = find_regions(grid)
    if not regions:
        return 0, 0
    largest = regions[0]
    for region in regions[1:]:
        if len(region) > len(largest):
            largest = region
    discarded = 0
    for region in regions:
        if region is largest:
            continue
        for x, y in region:
            grid[x][y] = WALL_HEIGHT
            discarded += 1
    return len(regions), discarded


def is_connected(grid: Grid) -> bool:
    return len(find_regions(grid)) <= 1


__all__ = ["flood_fill", "find_regions", "keep_largest_region", "is_connected"]
