"""Parameter validation for layout generation.

Every check raises :class:`InvalidParameter` synchronously, before a generator
touches any grid, so callers never observe a partially built layout.
"""
from __future__ import annotations

import math
from typing import Any


class InvalidParameter(ValueError):
    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def require_int(field: str, value: Any) -> int:
    # bool is an int subclass; a toggle passed as a count is a caller bug
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(field, f"expected int, got {type(value).__name__}")
    return value


def require_min(field: str, value: Any, minimum: int) -> int:
    value = require_int(field, value)
    if value < minimum:
        raise InvalidParameter(field, f"must be >= {minimum} (got {value})")
    return value


def require_bool(field: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidParameter(field, f"expected bool, got {type(value).__name__}")
    return value


def require_number(field: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(field, f"expected number, got {type(value).__name__}")
    if math.isnan(value):
        raise InvalidParameter(field, "must not be NaN")
    return float(value)


def require_unit_interval(field: str, value: Any) -> float:
    value = require_number(field, value)
    if not 0.0 <= value <= 1.0:
        raise InvalidParameter(field, f"must be within [0, 1] (got {value})")
    return value


def require_dimensions(width: Any, height: Any, minimum: int) -> None:
    """Validate requested grid dimensions against an algorithm's minimum area."""
    require_min("width", width, 1)
    require_min("height", height, 1)
    if width < minimum or height < minimum:
        raise InvalidParameter(
            "width" if width < minimum else "height",
            f"grid must be at least {minimum}x{minimum} (got {width}x{height})",
        )


__all__ = [
    "InvalidParameter",
    "require_int",
    "require_min",
    "require_bool",
    "require_number",
    "require_unit_interval",
    "require_dimensions",
]
