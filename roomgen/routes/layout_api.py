"""
project: roomgen
module: layout_api.py

Layout preview API routes.

Generates dungeon and maze layouts on demand and returns them as JSON so
editors and tools can preview settings without embedding the library.

    GET  /api/layout/<kind>?width=&height=&seed=&...   full grid + metrics
    GET  /api/layout/<kind>/metrics?...                 metrics only
    POST /api/layout/seed                               seed coercion helper
"""

import copy
import hashlib
import os
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from roomgen.generation import GENERATORS, create_generator, grid_to_rows, settings_for
from roomgen.generation.validation import InvalidParameter, require_min
from roomgen.logging_utils import get_logger

bp_layout = Blueprint("layout_api", __name__)
log = get_logger("roomgen.api")

SEED_MAX_INT = 2**63 - 1
DEFAULT_SIZE = 32
DEFAULT_MAX_CELLS = 250_000

# Simple in-process cache (kind, settings, width, height)->(grid, metrics). Locked because the
# dev server may serve requests from several threads.
_layout_cache = {}
_layout_cache_lock = threading.Lock()
_LAYOUT_CACHE_MAX = 16  # small LRU-ish manual cap


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int."""
    if payload_seed is None:
        return random.randint(1, 1_000_000)
    if isinstance(payload_seed, bool):
        raise InvalidParameter("seed", "expected int or string")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX_INT
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return random.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % SEED_MAX_INT
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX_INT
    raise InvalidParameter("seed", "expected int or string")


def _parse_size(name: str) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return DEFAULT_SIZE
    try:
        value = int(raw)
    except ValueError:
        raise InvalidParameter(name, f"cannot parse {raw!r} as int") from None
    return require_min(name, value, 1)


def _max_cells() -> int:
    configured = current_app.config.get("ROOMGEN_MAX_CELLS")
    if configured is None:
        configured = os.getenv("ROOMGEN_MAX_CELLS", DEFAULT_MAX_CELLS)
    return int(configured)


def get_cached_layout(kind: str, settings, width: int, height: int):
    """Return (grid, metrics) for the request, generating on a cache miss.

    Callers always receive deep copies so mutating a response never leaks
    back into the cache.
    """
    if os.environ.get("ROOMGEN_DISABLE_CACHE") == "1":
        generator = create_generator(kind, settings)
        grid = generator.generate(width, height)
        return grid, generator.last_metrics
    key = (GENERATORS[kind].kind, settings, width, height)
    with _layout_cache_lock:
        hit = _layout_cache.get(key)
    if hit is None:
        generator = create_generator(kind, settings)
        grid = generator.generate(width, height)
        hit = (grid, generator.last_metrics)
        with _layout_cache_lock:
            if len(_layout_cache) >= _LAYOUT_CACHE_MAX:
                # Drop oldest inserted entry
                _layout_cache.pop(next(iter(_layout_cache)))
            _layout_cache[key] = hit
    return copy.deepcopy(hit[0]), copy.deepcopy(hit[1])


def clear_layout_cache() -> None:
    with _layout_cache_lock:
        _layout_cache.clear()


def _resolve_request(kind: str):
    kind = kind.lower()
    width = _parse_size("width")
    height = _parse_size("height")
    limit = _max_cells()
    if width * height > limit:
        raise InvalidParameter("width", f"{width}x{height} exceeds the {limit} cell limit")
    params = request.args.to_dict()
    # ``height`` on the query string is the grid dimension; the floor value travels as ``floor_height``.
    params.pop("width", None)
    params.pop("height", None)
    if "floor_height" in params:
        params["height"] = params.pop("floor_height")
    settings = settings_for(kind, params)
    return kind, settings, width, height


@bp_layout.errorhandler(InvalidParameter)
def _invalid_parameter(err: InvalidParameter):
    log.info(event="invalid_parameter", field=err.field, error=err.message, path=request.path)
    return jsonify({"error": err.message, "field": err.field}), 400


@bp_layout.route("/api/layout/<kind>", methods=["GET"])
def get_layout(kind):
    """Generate a layout.

    Query parameters: width, height (default 32) plus any settings field of
    the generator (seed, height, density, iterations, path_width,
    smooth_edges, loop_count, dead_end_keep_chance). The query ``height`` is
    the grid dimension; the floor value is passed as ``floor_height``.

    Response: {kind, width, height, seed, settings, grid, rows, metrics}
    """
    if kind.lower() not in GENERATORS:
        return jsonify({"error": f"unknown generator {kind!r}"}), 404
    kind, settings, width, height = _resolve_request(kind)
    grid, metrics = get_cached_layout(kind, settings, width, height)
    return jsonify(
        {
            "kind": kind,
            "width": width,
            "height": height,
            "seed": settings.seed,
            "settings": settings.to_dict(),
            "grid": grid,
            "rows": grid_to_rows(grid),
            "metrics": metrics,
        }
    )


@bp_layout.route("/api/layout/<kind>/metrics", methods=["GET"])
def get_layout_metrics(kind):
    if kind.lower() not in GENERATORS:
        return jsonify({"error": f"unknown generator {kind!r}"}), 404
    kind, settings, width, height = _resolve_request(kind)
    _grid, metrics = get_cached_layout(kind, settings, width, height)
    return jsonify({"kind": kind, "seed": settings.seed, "metrics": metrics})


@bp_layout.route("/api/layout/seed", methods=["POST"])
def set_seed():
    """Normalize a seed.

    Body JSON (optional): { "seed": <int|str|null> }
    - omitted/null/empty string => random seed
    - digit string => parsed
    - any other string => SHA-256 derived, stable across calls

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    return jsonify({"seed": _coerce_seed(data.get("seed"))})
