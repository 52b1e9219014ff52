"""HTTP route blueprints."""

from .layout_api import bp_layout  # noqa: F401
