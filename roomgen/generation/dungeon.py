"""Cellular automata cave generator.

High-level generation phases:
    * Scatter walls over the interior with probability ``density``; the outer
      ring is always wall.
    * Run ``iterations`` automaton steps over the 8-neighbourhood
      (out-of-bounds counts as wall): >=5 walls -> wall, <=3 -> floor,
      exactly 4 -> unchanged.
    * Keep only the largest 4-connected floor region.
    * Optionally dilate every floor cell into a ``path_width`` square.
    * Optionally smooth jagged edges.

Output invariants enforced by code & tests:
    * Border ring is wall.
    * Floor cells form a single 4-connected region, or there is no floor.
"""
from __future__ import annotations

from typing import List

from .cells import FLOOR_THRESHOLD, WALL_HEIGHT, Grid, copy_grid, grid_size, interior_cells, new_grid
from .config import DungeonSettings
from .connectivity import keep_largest_region
from .generator import LayoutGenerator, Phase
from .layout_utils import smooth_edges


class DungeonGenerator(LayoutGenerator):
    kind = "dungeon"
    settings_class = DungeonSettings

    def _phases(self, width: int, height: int) -> List[Phase]:
        phases: List[Phase] = [
            ("init", lambda _grid: self._init_grid(width, height)),
            ("iterate", self._iterate),
            ("connect", self._connect),
        ]
        if self.settings.path_width > 1:
            phases.append(("widen", self._widen_paths))
        if self.settings.smooth_edges:
            phases.append(("smooth", self._smooth))
        return phases

    # ------------------------------------------------------------------
    # Phases
    # ------------------------------------------------------------------
    def _init_grid(self, width: int, height: int) -> Grid:
        floor = self.settings.height
        density = self.settings.density
        grid = new_grid(width, height)
        for x, y in interior_cells(width, height):
            grid[x][y] = WALL_HEIGHT if self._rng.random() < density else floor
        return grid

    def _iterate(self, grid: Grid) -> Grid:
        for _ in range(self.settings.iterations):
            grid = self._cellular_step(grid)
        return grid

    def _cellular_step(self, grid: Grid) -> Grid:
        # Reads only from ``grid``; results land in a fresh buffer so scan order never matters.
        width, height = grid_size(grid)
        floor = self.settings.height
        new = new_grid(width, height)
        for x in range(1, width - 1):
            for y in range(1, height - 1):
                walls = count_wall_neighbors(grid, x, y)
                if walls >= 5:
                    new[x][y] = WALL_HEIGHT
                elif walls <= 3:
                    new[x][y] = floor
                else:
                    new[x][y] = grid[x][y]
        return new

    def _connect(self, grid: Grid) -> Grid:
        regions, discarded = keep_largest_region(grid)
        self._metrics["regions_found"] = regions
        self._metrics["regions_discarded"] = max(0, regions - 1)
        self._metrics["cells_discarded"] = discarded
        if regions > 1:
            self._log.debug(event="regions_discarded", regions=regions, cells=discarded)
        return grid

    def _widen_paths(self, grid: Grid) -> Grid:
        """Stamp a path_width square of floor anchored at every floor cell.

        Scans the pre-widen grid and writes into a copy; stamps stop one cell
        short of the right and bottom border so the outer ring stays wall.
        """
        width, height = grid_size(grid)
        size = self.settings.path_width
        floor = self.settings.height
        new = copy_grid(grid)
        widened = 0
        for x in range(1, width - 1):
            for y in range(1, height - 1):
                if grid[x][y] < FLOOR_THRESHOLD:
                    continue
                for nx in range(x, min(x + size, width - 1)):
                    for ny in range(y, min(y + size, height - 1)):
                        if new[nx][ny] < FLOOR_THRESHOLD:
                            widened += 1
                        new[nx][ny] = floor
        self._metrics["cells_widened"] = widened
        return new

    def _smooth(self, grid: Grid) -> Grid:
        self._metrics["cells_smoothed"] = smooth_edges(grid, self.settings.height)
        return grid


def count_wall_neighbors(grid: Grid, x: int, y: int) -> int:
    """Count wall cells in the 8-neighbourhood; cells past the edge count as walls."""
    width, height = grid_size(grid)
    count = 0
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            nx, ny = x + dx, y + dy
            if nx < 0 or nx >= width or ny < 0 or ny >= height or grid[nx][ny] < FLOOR_THRESHOLD:
                count += 1
    return count


__all__ = ["DungeonGenerator", "count_wall_neighbors"]
