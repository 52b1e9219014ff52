"""Recursive backtracking maze generator.

Phases:
    * carve   - depth-first walk from the grid centre on a 2-cell stride,
                driven by an explicit stack so large grids never hit the
                recursion limit. Produces a perfect maze (a tree).
    * loops   - best-effort injection of up to ``loop_count`` extra openings.
    * prune   - dead-end removal controlled by ``dead_end_keep_chance``.
    * smooth  - optional edge smoothing shared with the cave generator.
"""
from __future__ import annotations

from typing import List

from .cells import FLOOR_THRESHOLD, Grid, count_floor_neighbors, grid_size, new_grid
from .config import MazeSettings
from .generator import LayoutGenerator, Phase
from .layout_utils import smooth_edges
from .pruning import prune_dead_ends

# Carving order matters for reproducibility: N, E, S, W.
CARVE_DIRECTIONS = ((0, -2), (2, 0), (0, 2), (-2, 0))


class MazeGenerator(LayoutGenerator):
    kind = "maze"
    settings_class = MazeSettings

    def _phases(self, width: int, height: int) -> List[Phase]:
        phases: List[Phase] = [("carve", lambda _grid: self._carve(width, height))]
        if self.settings.loop_count > 0:
            phases.append(("loops", self._add_loops))
        if self.settings.dead_end_keep_chance < 1:
            phases.append(("prune", self._prune))
        if self.settings.smooth_edges:
            phases.append(("smooth", self._smooth))
        return phases

    def _carve(self, width: int, height: int) -> Grid:
        floor = self.settings.height
        grid = new_grid(width, height)
        visited = [[False] * height for _ in range(width)]
        start = (width // 2, height // 2)
        stack = [start]
        visited[start[0]][start[1]] = True
        grid[start[0]][start[1]] = floor
        carved = 1
        while stack:
            x, y = stack[-1]
            candidates = []
            for dx, dy in CARVE_DIRECTIONS:
                nx, ny = x + dx, y + dy
                if 0 < nx < width - 1 and 0 < ny < height - 1 and not visited[nx][ny]:
                    candidates.append((nx, ny, dx, dy))
            if not candidates:
                stack.pop()
                continue
            nx, ny, dx, dy = candidates[self._rng.randrange(len(candidates))]
            grid[x + dx // 2][y + dy // 2] = floor
            grid[nx][ny] = floor
            visited[nx][ny] = True
            stack.append((nx, ny))
            carved += 2
        self._metrics["cells_carved"] = carved
        return grid

    def _add_loops(self, grid: Grid) -> Grid:
        width, height = grid_size(grid)
        wanted = self.settings.loop_count
        self._metrics["loops_requested"] = wanted
        added = 0
        attempts = 0
        # Candidates sit at least two cells from every edge; tiny grids have none.
        if width - 2 > 2 and height - 2 > 2:
            max_attempts = wanted * 10
            while added < wanted and attempts < max_attempts:
                attempts += 1
                x = self._rng.randrange(2, width - 2)
                y = self._rng.randrange(2, height - 2)
                if grid[x][y] < FLOOR_THRESHOLD and count_floor_neighbors(grid, x, y) >= 2:
                    grid[x][y] = self.settings.height
                    added += 1
        self._metrics["loops_added"] = added
        self._metrics["loop_attempts"] = attempts
        if added < wanted:
            self._log.warn(event="loops_short", requested=wanted, added=added, attempts=attempts)
        return grid

    def _prune(self, grid: Grid) -> Grid:
        self._metrics["dead_ends_removed"] = prune_dead_ends(grid, self.settings.dead_end_keep_chance, self._rng)
        return grid

    def _smooth(self, grid: Grid) -> Grid:
        self._metrics["cells_smoothed"] = smooth_edges(grid, self.settings.height)
        return grid


__all__ = ["MazeGenerator", "CARVE_DIRECTIONS"]
