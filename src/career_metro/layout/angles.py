"""Angle assignment for paths by iterative force relaxation."""

import logging
import math
from collections.abc import Sequence

from ..model import CareerPath
from .relationships import relationship_score

logger = logging.getLogger(__name__)

TWO_PI = 2 * math.pi

# Angular distance below which repulsion stops growing
MIN_REPULSION_DISTANCE = 0.1


def _normalize_angle(angle: float) -> float:
    """Normalize angle to [-pi, pi] range."""
    while angle > math.pi:
        angle -= TWO_PI
    while angle < -math.pi:
        angle += TWO_PI
    return angle


def _angular_diff(a: float, b: float) -> float:
    """Compute signed angular difference (a - b) in [-pi, pi]."""
    return _normalize_angle(a - b)


def normalize_positive(angle: float) -> float:
    """Normalize angle to [0, 2pi)."""
    normalized = math.fmod(angle, TWO_PI)
    if normalized < 0:
        normalized += TWO_PI
    # fmod of a tiny negative number can round up to exactly 2pi
    if normalized >= TWO_PI:
        normalized = 0.0
    return normalized


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


def initial_angles(
    path_ids: Sequence[str],
    start_angle_deg: float,
    spread_deg: float,
) -> dict[str, float]:
    """Split [start, start + spread) evenly by path index, in radians."""
    start = math.radians(start_angle_deg)
    spread = math.radians(spread_deg)
    n = len(path_ids)
    return {path_id: start + (i / n) * spread for i, path_id in enumerate(path_ids)}


def pair_force(
    distance: float,
    relationship: int,
    repulsion: float,
    attraction: float,
) -> float:
    """Force exerted on a path by another path at a signed angular distance.

    distance is (this - other) wrapped to [-pi, pi]. Repulsion pushes away
    from the other path and grows as the paths approach; it vanishes for
    paths exactly opposite each other, where both directions are equally
    far. Attraction pulls related paths together in proportion to the
    number of shared positions.
    """
    force = 0.0
    if not math.isclose(abs(distance), math.pi, abs_tol=1e-9):
        force += _sign(distance) * repulsion / max(MIN_REPULSION_DISTANCE, abs(distance))
    if relationship > 0:
        force += attraction * relationship * -_sign(distance)
    return force


def assign_angles(
    paths: Sequence[CareerPath],
    relationships: dict[str, dict[str, int]],
    start_angle_deg: float = 0.0,
    spread_deg: float = 360.0,
    iterations: int = 20,
    repulsion: float = 0.2,
    attraction: float = 0.3,
    step_scale: float = 0.1,
) -> dict[str, float]:
    """Assign one stable angle per path.

    Starts from an even angular split and relaxes it: every pair of paths
    repels, related pairs also attract. Forces are applied with a damping
    factor decaying linearly from 1 to 0 over the iteration budget.

    Args:
        paths: Paths in display order.
        relationships: Symmetric shared-position counts per path pair.
        start_angle_deg: Angle of the first path, in degrees.
        spread_deg: Total angle to spread the paths over, in degrees.
        iterations: Number of relaxation iterations.
        repulsion: Strength of the pairwise repulsion.
        attraction: Strength of the relationship attraction.
        step_scale: Scale applied to the summed force at each step.

    Returns:
        Angle in radians, in [0, 2pi), for each path id.
    """
    path_ids = list(dict.fromkeys(path.id for path in paths))
    if not path_ids:
        return {}
    if len(path_ids) == 1:
        return {path_ids[0]: normalize_positive(math.radians(start_angle_deg))}

    angles = initial_angles(path_ids, start_angle_deg, spread_deg)

    for iteration in range(iterations):
        damping = 1 - iteration / iterations
        forces: dict[str, float] = {}
        for path_id in path_ids:
            total = 0.0
            for other_id in path_ids:
                if other_id == path_id:
                    continue
                distance = _angular_diff(angles[path_id], angles[other_id])
                total += pair_force(
                    distance,
                    relationship_score(relationships, path_id, other_id),
                    repulsion,
                    attraction,
                )
            forces[path_id] = total

        # Apply all forces at once so the update does not depend on path order
        for path_id in path_ids:
            angles[path_id] = normalize_positive(
                angles[path_id] + forces[path_id] * damping * step_scale
            )

    # Zero iterations still has to honour the [0, 2pi) range
    angles = {path_id: normalize_positive(angle) for path_id, angle in angles.items()}
    logger.debug("Assigned angles after %d iterations: %s", iterations, angles)
    return angles
