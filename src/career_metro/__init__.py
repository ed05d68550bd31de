"""Transit-map layouts for career paths."""

from .config import LayoutConfig, RouteOptions, load_config
from .layout import compute_layout, compute_routes, generate_route
from .model import (
    Bounds,
    CareerPath,
    LayoutNode,
    LayoutPath,
    LayoutResult,
    PlacementStrategy,
    Position,
    PositionDetail,
    RouteMode,
)

__all__ = [
    "Bounds",
    "CareerPath",
    "LayoutConfig",
    "LayoutNode",
    "LayoutPath",
    "LayoutResult",
    "PlacementStrategy",
    "Position",
    "PositionDetail",
    "RouteMode",
    "RouteOptions",
    "compute_layout",
    "compute_routes",
    "generate_route",
    "load_config",
]
