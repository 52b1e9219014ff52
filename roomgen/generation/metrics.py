from typing import Any, Dict

from .cells import FLOOR_THRESHOLD, Grid

DUNGEON_COUNTERS = (
    "regions_found",
    "regions_discarded",
    "cells_discarded",
    "cells_widened",
    "cells_smoothed",
)

MAZE_COUNTERS = (
    "cells_carved",
    "loops_requested",
    "loops_added",
    "loop_attempts",
    "dead_ends_removed",
    "cells_smoothed",
)


def init_metrics(kind: str, seed: int, width: int, height: int) -> Dict[str, Any]:
    counters = DUNGEON_COUNTERS if kind == "dungeon" else MAZE_COUNTERS
    metrics: Dict[str, Any] = {
        "kind": kind,
        "seed": seed,
        "width": width,
        "height": height,
        "runtime_ms": 0.0,
        "phase_ms": {},
    }
    for key in counters:
        metrics[key] = 0
    return metrics


def count_tiles(grid: Grid) -> Dict[str, int]:
    floor = sum(1 for column in grid for value in column if value >= FLOOR_THRESHOLD)
    total = sum(len(column) for column in grid)
    return {"tiles_floor": floor, "tiles_wall": total - floor}
