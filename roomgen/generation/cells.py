from typing import Iterator, List, Tuple

# Column-major height grid: grid[x][y]. Values below the threshold are walls.
Grid = List[List[float]]
Coord2D = Tuple[int, int]

WALL_HEIGHT = 0.0
FLOOR_THRESHOLD = 0.5

ORTHOGONAL = ((0, 1), (1, 0), (0, -1), (-1, 0))


def new_grid(width: int, height: int, fill: float = WALL_HEIGHT) -> Grid:
    return [[fill for _ in range(height)] for _ in range(width)]


def copy_grid(grid: Grid) -> Grid:
    return [list(column) for column in grid]


def grid_size(grid: Grid) -> Tuple[int, int]:
    if not grid:
        return 0, 0
    return len(grid), len(grid[0])


def is_floor(value: float) -> bool:
    return value >= FLOOR_THRESHOLD


def in_bounds(x: int, y: int, width: int, height: int) -> bool:
    return 0 <= x < width and 0 <= y < height


def interior_cells(width: int, height: int) -> Iterator[Coord2D]:
    """Yield interior coordinates in scan order (x outer, y inner)."""
    for x in range(1, width - 1):
        for y in range(1, height - 1):
            yield x, y


def count_floor_neighbors(grid: Grid, x: int, y: int) -> int:
    """Orthogonal FLOOR neighbours; out-of-bounds cells count as walls."""
    width, height = grid_size(grid)
    count = 0
    for dx, dy in ORTHOGONAL:
        nx, ny = x + dx, y + dy
        if in_bounds(nx, ny, width, height) and grid[nx][ny] >= FLOOR_THRESHOLD:
            count += 1
    return count


__all__ = [
    "Grid",
    "Coord2D",
    "WALL_HEIGHT",
    "FLOOR_THRESHOLD",
    "ORTHOGONAL",
    "new_grid",
    "copy_grid",
    "grid_size",
    "is_floor",
    "in_bounds",
    "interior_cells",
    "count_floor_neighbors",
]
