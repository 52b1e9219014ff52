"""Common contract for layout generators.

A generator is built once from a settings object and may be asked for any
number of layouts. Each ``generate`` call validates the requested size, reseeds
the generator's private RNG from ``settings.seed`` and runs an ordered list of
named phases, timing each one into ``last_metrics["phase_ms"]``.

Instances are not re-entrant (the RNG is replaced per call); use one
generator per thread.
"""
from __future__ import annotations

import random
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..logging_utils import get_logger
from .cells import Grid
from .config import LayoutSettings
from .metrics import count_tiles, init_metrics
from .validation import InvalidParameter, require_dimensions

Phase = Tuple[str, Callable[[Optional[Grid]], Grid]]


class LayoutGenerator:
    kind = "layout"
    settings_class = LayoutSettings
    # One interior cell is the smallest area either algorithm can work with.
    min_size = 3

    def __init__(self, settings: LayoutSettings | None = None):
        if settings is None:
            settings = self.settings_class()
        elif not isinstance(settings, self.settings_class):
            raise InvalidParameter(
                "settings",
                f"{type(self).__name__} expects {self.settings_class.__name__}, got {type(settings).__name__}",
            )
        self.settings = settings
        self._rng: Optional[random.Random] = None
        self._metrics: Dict[str, Any] = {}
        self.last_metrics: Dict[str, Any] = {}
        self._log = get_logger(f"roomgen.{self.kind}")

    def generate(self, width: int, height: int) -> Grid:
        require_dimensions(width, height, self.min_size)
        # Fresh stream per call so results never depend on earlier calls
        self._rng = random.Random(self.settings.seed)
        self._metrics = init_metrics(self.kind, self.settings.seed, width, height)
        phase_times = {}
        start = time.perf_counter()
        grid: Optional[Grid] = None
        for label, fn in self._phases(width, height):
            ps = time.perf_counter()
            grid = fn(grid)
            phase_times[label] = round((time.perf_counter() - ps) * 1000, 3)
        metrics = self._metrics
        metrics["phase_ms"] = phase_times
        metrics["runtime_ms"] = round((time.perf_counter() - start) * 1000, 3)
        metrics.update(count_tiles(grid))
        self.last_metrics = metrics
        self._metrics = {}
        if metrics["tiles_floor"] == 0:
            self._log.warn(event="layout_empty", seed=self.settings.seed, width=width, height=height)
        self._log.debug(
            event="layout_generated",
            seed=self.settings.seed,
            width=width,
            height=height,
            floor=metrics["tiles_floor"],
            runtime_ms=metrics["runtime_ms"],
        )
        return grid

    def _phases(self, width: int, height: int) -> List[Phase]:
        raise NotImplementedError


__all__ = ["LayoutGenerator", "Phase"]
