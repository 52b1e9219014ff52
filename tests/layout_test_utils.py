from collections import deque

# Threshold duplicated from roomgen.generation.cells for test independence.
FLOOR_THRESHOLD = 0.5


def floor_cells(grid):
    """Return the set of (x,y) FLOOR coordinates."""
    return {(x, y) for x, column in enumerate(grid) for y, v in enumerate(column) if v >= FLOOR_THRESHOLD}


def floor_count(grid):
    return len(floor_cells(grid))


def regions(grid):
    """Return list of 4-connected FLOOR regions (each a set of coordinates)."""
    remaining = floor_cells(grid)
    out = []
    while remaining:
        start = remaining.pop()
        region = {start}
        q = deque([start])
        while q:
            x, y = q.popleft()
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                n = (x + dx, y + dy)
                if n in remaining:
                    remaining.discard(n)
                    region.add(n)
                    q.append(n)
        out.append(region)
    return out


def border_is_wall(grid):
    w = len(grid)
    h = len(grid[0])
    for x in range(w):
        for y in range(h):
            if (x in (0, w - 1) or y in (0, h - 1)) and grid[x][y] >= FLOOR_THRESHOLD:
                return False
    return True


def floor_edges(grid):
    """Number of orthogonally adjacent FLOOR pairs (graph edges)."""
    cells = floor_cells(grid)
    return sum(1 for x, y in cells for n in ((x + 1, y), (x, y + 1)) if n in cells)


def dead_ends(grid):
    cells = floor_cells(grid)
    return [
        (x, y)
        for x, y in cells
        if sum(1 for n in ((x + 1, y), (x - 1, y), (x, y + 1), (x, y - 1)) if n in cells) == 1
    ]
