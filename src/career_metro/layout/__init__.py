"""Metro map layout engine for career paths.

Paths fan out from the centre at relaxed angles, interchanges are pulled
inward, and lines are routed straight, orthogonally or with rounded corners.
"""

from .angles import assign_angles
from .bounds import compute_bounds
from .engine import compute_layout, compute_routes, route_for_path
from .grouping import group_by
from .placement import compute_level_range, jitter_offsets, place_nodes
from .relationships import Analysis, analyze, build_membership_graph, relationship_score
from .routing import generate_connection, generate_route

__all__ = [
    "analyze",
    "Analysis",
    "build_membership_graph",
    "relationship_score",
    "assign_angles",
    "compute_level_range",
    "jitter_offsets",
    "place_nodes",
    "compute_bounds",
    "generate_route",
    "generate_connection",
    "group_by",
    "compute_layout",
    "compute_routes",
    "route_for_path",
]
