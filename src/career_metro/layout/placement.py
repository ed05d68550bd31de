"""Node placement: coordinates for every position detail.

Three strategies share ordering, interchange detection and jitter and only
differ in the coordinate formula:

- polar: each path is a ray at its assigned angle, radius from level
- grid: each path is a vertical lane, levels run top to bottom
- linear: each path is a horizontal lane, levels run left to right
"""

import hashlib
import logging
import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from ..config import LayoutConfig
from ..model import CareerPath, LayoutNode, PlacementStrategy, Position, PositionDetail
from .grouping import group_by

logger = logging.getLogger(__name__)

# Fraction of radius_step separating same-level nodes by sequence
SEQUENCE_SPREAD = 0.3
# Angular nudge per level of distance from the mid level
LEVEL_ANGLE_STEP = 0.05
# Upper bound on the per-node angular step of a path's arc
MAX_PATH_CURVE = 0.3

SkipCallback = Callable[[PositionDetail, str], None]


@dataclass(frozen=True)
class LevelRange:
    """Minimum, maximum and mid level of a set of details."""

    min_level: int
    max_level: int
    mid_level: float


def compute_level_range(
    position_details: Sequence[PositionDetail],
    mid_level_override: float | None = None,
) -> LevelRange:
    """Find the level range, ignoring non-positive levels.

    Falls back to level 1 when no detail has a positive level.
    """
    levels = [detail.level for detail in position_details if detail.level > 0]
    min_level = min(levels) if levels else 1
    max_level = max(levels) if levels else min_level
    mid_level = (min_level + max_level) / 2 if mid_level_override is None else mid_level_override
    return LevelRange(min_level=min_level, max_level=max_level, mid_level=mid_level)


def jitter_offsets(node_id: str, seed: str = "") -> tuple[float, float]:
    """Deterministic pair of offsets in [-0.5, 0.5) derived from a node id."""
    digest = hashlib.sha256(f"{seed}\x00{node_id}".encode()).digest()
    u = int.from_bytes(digest[:8], "big") / 2**64
    v = int.from_bytes(digest[8:16], "big") / 2**64
    return u - 0.5, v - 0.5


def order_path_details(details: Sequence[PositionDetail]) -> list[PositionDetail]:
    """Sort a path's details by sequence_in_path when any is set, else by level."""
    if any(detail.sequence_in_path is not None for detail in details):
        return sorted(
            details,
            key=lambda d: d.sequence_in_path if d.sequence_in_path is not None else d.level,
        )
    return sorted(details, key=lambda d: d.level)


def effective_centrality(centrality: int, factor: float) -> float:
    """Divisor pulling interchanges toward the centre."""
    if centrality > 1:
        return centrality**factor
    return 1.0


def polar_radius(
    detail: PositionDetail,
    levels: LevelRange,
    centrality: int,
    config: LayoutConfig,
) -> float:
    """Radius of a node in the polar layout.

    A non-negative center_radius bulges levels around the mid level; a
    negative one fans all levels outward from the centre.
    """
    base_radius = abs(config.center_radius)
    if config.center_radius >= 0:
        base_radius += config.radius_step * abs(detail.level - levels.mid_level)
    else:
        base_radius += config.radius_step * (detail.level - levels.min_level)

    sequence_offset = 0.0
    if detail.sequence_in_path is not None:
        sequence_offset = (
            (detail.sequence_in_path - detail.level) * SEQUENCE_SPREAD * config.radius_step
        )

    return (base_radius + sequence_offset) / effective_centrality(
        centrality, config.centrality_factor
    )


def curve_offset(index: int, total: int) -> float:
    """Angular offset bowing a path into a gentle arc."""
    path_curve = min(MAX_PATH_CURVE, 0.1 * math.log(total + 1))
    return path_curve * (index - (total - 1) / 2)


def level_offset(level: int, mid_level: float) -> float:
    """Angular nudge for levels far from the mid level."""
    direction = -1 if level < mid_level else 1
    return (level - mid_level) * LEVEL_ANGLE_STEP * direction


def assign_lanes(
    paths: Sequence[CareerPath],
    details_by_path: Mapping[str, Sequence[PositionDetail]],
) -> dict[str, float]:
    """Give each path a lane index centred on 0, larger paths first."""
    by_size = sorted(paths, key=lambda p: -len(details_by_path.get(p.id, ())))
    count = len(by_size)
    return {path.id: index - (count - 1) / 2 for index, path in enumerate(by_size)}


def interchange_lane(
    path_ids: Sequence[str],
    lanes: Mapping[str, float],
    details_by_path: Mapping[str, Sequence[PositionDetail]],
) -> float:
    """Mean lane of the given paths, weighted by log(path size + 1)."""
    weights = [math.log(len(details_by_path.get(pid, ())) + 1) for pid in path_ids]
    total = sum(weights)
    if total == 0:
        return sum(lanes.get(pid, 0.0) for pid in path_ids) / len(path_ids)
    return sum(w * lanes.get(pid, 0.0) for pid, w in zip(path_ids, weights)) / total


def _lane_coordinate(
    detail: PositionDetail,
    related: Sequence[str],
    is_interchange: bool,
    lanes: Mapping[str, float],
    details_by_path: Mapping[str, Sequence[PositionDetail]],
    lane_spacing: float,
    center_weight: float,
) -> float:
    """Cross-lane coordinate, pulling interchanges toward their paths' centre."""
    base = lanes.get(detail.career_path_id, 0.0) * lane_spacing
    if not is_interchange:
        return base
    weighted = interchange_lane(related, lanes, details_by_path) * lane_spacing
    return base * (1 - center_weight) + weighted * center_weight


def place_nodes(
    paths: Sequence[CareerPath],
    positions: Sequence[Position],
    position_details: Sequence[PositionDetail],
    centrality: Mapping[str, int],
    angles: Mapping[str, float],
    config: LayoutConfig,
    on_skip: SkipCallback | None = None,
) -> list[LayoutNode]:
    """Place one node per position detail.

    The first pass resolves references and orders each path's details; the
    second computes coordinates with the configured placement strategy.
    Details referencing an unknown position or path are skipped.

    Args:
        paths: Paths in display order.
        positions: Generic positions.
        position_details: Position occurrences to place.
        centrality: Distinct-path count per position id.
        angles: Angle in radians per path id (used by the polar strategy).
        config: Layout configuration.
        on_skip: Called with (detail, reason) for every skipped detail.

    Returns:
        Nodes appended per path, in each path's detail order.
    """
    position_map = {position.id: position for position in positions}
    path_map: dict[str, CareerPath] = {}
    for path in paths:
        path_map.setdefault(path.id, path)

    # Pass 1: resolve references
    valid: list[PositionDetail] = []
    for detail in position_details:
        if detail.position_id not in position_map:
            _skip(detail, f"unknown position {detail.position_id!r}", on_skip)
        elif detail.career_path_id not in path_map:
            _skip(detail, f"unknown path {detail.career_path_id!r}", on_skip)
        else:
            valid.append(detail)

    if not valid:
        return []

    details_by_path = {
        path_id: order_path_details(details)
        for path_id, details in group_by(valid, lambda d: d.career_path_id).items()
    }
    paths_by_position = {
        position_id: tuple(sorted({d.career_path_id for d in details}))
        for position_id, details in group_by(valid, lambda d: d.position_id).items()
    }
    levels = compute_level_range(valid, config.mid_level_override)
    lanes = assign_lanes(list(path_map.values()), details_by_path)

    # Pass 2: coordinates
    nodes: list[LayoutNode] = []
    for path in path_map.values():
        path_details = details_by_path.get(path.id, [])
        total = len(path_details)
        for index, detail in enumerate(path_details):
            node_centrality = centrality.get(detail.position_id, 1)
            is_interchange = node_centrality > 1
            related = paths_by_position.get(detail.position_id, (path.id,))

            if config.placement_strategy is PlacementStrategy.POLAR:
                radius = polar_radius(detail, levels, node_centrality, config)
                angle = (
                    angles.get(path.id, 0.0)
                    + curve_offset(index, total)
                    + level_offset(detail.level, levels.mid_level)
                )
                x = radius * math.cos(angle)
                y = radius * math.sin(angle)
                jitter_scale_x = jitter_scale_y = config.radius_step
            elif config.placement_strategy is PlacementStrategy.GRID:
                x = _lane_coordinate(
                    detail, related, is_interchange, lanes, details_by_path,
                    config.cell_width * config.domain_spread, config.center_weight,
                )
                y = (levels.mid_level - detail.level) * config.cell_height * config.level_multiplier
                jitter_scale_x, jitter_scale_y = config.cell_width, config.cell_height
            else:
                x = (detail.level - levels.mid_level) * config.cell_width * config.level_multiplier
                y = _lane_coordinate(
                    detail, related, is_interchange, lanes, details_by_path,
                    config.cell_height * config.domain_spread, config.center_weight,
                )
                jitter_scale_x, jitter_scale_y = config.cell_width, config.cell_height

            jx, jy = jitter_offsets(detail.id, config.jitter_seed)
            nodes.append(
                LayoutNode(
                    id=detail.id,
                    position_id=detail.position_id,
                    path_id=path.id,
                    level=detail.level,
                    x=x + config.jitter_amount * jx * jitter_scale_x,
                    y=y + config.jitter_amount * jy * jitter_scale_y,
                    color=path.color,
                    is_interchange=is_interchange,
                    sequence_in_path=detail.sequence_in_path,
                    name=position_map[detail.position_id].name,
                    related_paths=related,
                )
            )

    return nodes


def _skip(detail: PositionDetail, reason: str, on_skip: SkipCallback | None) -> None:
    logger.warning("Skipping position detail %s: %s", detail.id, reason)
    if on_skip is not None:
        on_skip(detail, reason)
