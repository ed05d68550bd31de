"""Route strings for metro lines and station connections.

Routes use SVG path syntax: M (move), L (line), A (arc) and C (cubic
curve), with space separated coordinates.
"""

import math
from collections.abc import Sequence

from ..config import RouteOptions
from ..model import LayoutNode, RouteMode

Point = tuple[float, float]

# Below this distance on both axes a connection is drawn straight
MIN_CURVE_DISTANCE = 50.0


def _fmt(value: float) -> str:
    """Compact fixed-point rendering of a coordinate."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _point(point: Point) -> str:
    return f"{_fmt(point[0])} {_fmt(point[1])}"


def sort_route_nodes(nodes: Sequence[LayoutNode]) -> list[LayoutNode]:
    """Stable traversal order: level, then sequence, then x, then y."""
    return sorted(
        nodes,
        key=lambda n: (
            n.level,
            n.sequence_in_path if n.sequence_in_path is not None else 0,
            n.x,
            n.y,
        ),
    )


def orthogonal_hops(
    nodes: Sequence[LayoutNode],
    vertical_first: bool = True,
    min_segment_length: float = 5.0,
) -> list[tuple[Point, bool]]:
    """Points of a Manhattan route, each flagged True when it is an elbow.

    Each hop moves along one axis then the other. When only one offset
    reaches min_segment_length the long axis is drawn first and the short
    step follows it. When neither does, the hop is a single direct segment.
    Every hop ends on its node.
    """
    hops: list[tuple[Point, bool]] = [((nodes[0].x, nodes[0].y), False)]
    for prev, curr in zip(nodes, nodes[1:]):
        long_x = abs(curr.x - prev.x) >= min_segment_length
        long_y = abs(curr.y - prev.y) >= min_segment_length
        if long_x or long_y:
            vertical = vertical_first if long_x and long_y else long_y
            corner = (prev.x, curr.y) if vertical else (curr.x, prev.y)
            if corner != (prev.x, prev.y) and corner != (curr.x, curr.y):
                hops.append((corner, True))
        hops.append(((curr.x, curr.y), False))
    return hops


def orthogonal_points(
    nodes: Sequence[LayoutNode],
    vertical_first: bool = True,
    min_segment_length: float = 5.0,
) -> list[Point]:
    """Corner and station points of a Manhattan route."""
    return [point for point, _ in orthogonal_hops(nodes, vertical_first, min_segment_length)]


def polyline(points: Sequence[Point]) -> str:
    """Move to the first point and draw lines through the rest."""
    return " ".join(
        [f"M {_point(points[0])}"] + [f"L {_point(point)}" for point in points[1:]]
    )


def corner_arc(
    prev: Point,
    corner: Point,
    nxt: Point,
    corner_radius: float,
    short_segment_threshold: float = 2.0,
) -> tuple[Point, Point, float, int] | None:
    """Arc replacing a corner, or None when the corner must stay sharp.

    The radius is capped at half of each adjacent segment. The sweep flag
    follows the sign of the cross product of the incoming and outgoing
    directions.

    Returns:
        (arc start, arc end, radius, sweep flag), or None for degenerate
        corners (short or collinear segments, zero radius).
    """
    ax, ay = corner[0] - prev[0], corner[1] - prev[1]
    bx, by = nxt[0] - corner[0], nxt[1] - corner[1]
    len_in = math.hypot(ax, ay)
    len_out = math.hypot(bx, by)
    if len_in < short_segment_threshold or len_out < short_segment_threshold:
        return None

    cross = ax * by - ay * bx
    if abs(cross) <= 1e-9 * len_in * len_out:
        return None

    radius = min(corner_radius, len_in / 2, len_out / 2)
    if radius <= 0:
        return None

    start = (corner[0] - ax / len_in * radius, corner[1] - ay / len_in * radius)
    end = (corner[0] + bx / len_out * radius, corner[1] + by / len_out * radius)
    sweep = 1 if cross > 0 else 0
    return start, end, radius, sweep


def smooth_polyline(
    points: Sequence[Point],
    corner_radius: float,
    short_segment_threshold: float = 2.0,
    elbows: Sequence[bool] | None = None,
) -> str:
    """Polyline whose interior corners are rounded with circular arcs.

    When elbows is given, only points flagged True are rounded; the others
    are stations and stay sharp so the line passes through their centre.
    """
    if corner_radius <= 0:
        return polyline(points)

    commands = [f"M {_point(points[0])}"]
    for index, (prev, corner, nxt) in enumerate(zip(points, points[1:], points[2:]), 1):
        if elbows is not None and not elbows[index]:
            commands.append(f"L {_point(corner)}")
            continue
        arc =corner_arc(prev, corner, nxt, corner_radius, short_segment_threshold)
        if arc is None:
            commands.append(f"L {_point(corner)}")
            continue
        start, end, radius, sweep = arc
        commands.append(f"L {_point(start)}")
        commands.append(f"A {_fmt(radius)} {_fmt(radius)} 0 0 {sweep} {_point(end)}")
    commands.append(f"L {_point(points[-1])}")
    return " ".join(commands)


def generate_direct_route(nodes: Sequence[LayoutNode]) -> str:
    """Straight segments between consecutive nodes in traversal order."""
    if len(nodes) < 2:
        return ""
    ordered = sort_route_nodes(nodes)
    return polyline([(n.x, n.y) for n in ordered])


def generate_manhattan_route(
    nodes: Sequence[LayoutNode],
    options: RouteOptions | None = None,
) -> str:
    """Horizontal and vertical segments between consecutive nodes."""
    if len(nodes) < 2:
        return ""
    options = options or RouteOptions()
    points = orthogonal_points(
        sort_route_nodes(nodes), options.vertical_first, options.min_segment_length
    )
    return polyline(points)


def generate_smooth_route(
    nodes: Sequence[LayoutNode],
    options: RouteOptions | None = None,
) -> str:
    """Manhattan route with rounded elbows."""
    if len(nodes) < 2:
        return ""
    options = options or RouteOptions()
    hops = orthogonal_hops(
        sort_route_nodes(nodes), options.vertical_first, options.min_segment_length
    )
    return smooth_polyline(
        [point for point, _ in hops],
        options.corner_radius,
        options.short_segment_threshold,
        elbows=[is_elbow for _, is_elbow in hops],
    )


def generate_route(
    nodes: Sequence[LayoutNode],
    mode: RouteMode | str = RouteMode.MANHATTAN,
    options: RouteOptions | None = None,
) -> str:
    """Route string through nodes in the given mode.

    Args:
        nodes: Nodes of one path, or any two nodes to connect.
        mode: direct, manhattan or smooth.
        options: Routing options (defaults apply when omitted).

    Returns:
        Path description, or "" when there are fewer than two nodes.

    Raises:
        ValueError: If mode is not a known route mode.
    """
    mode = RouteMode(mode)
    if mode is RouteMode.DIRECT:
        return generate_direct_route(nodes)
    if mode is RouteMode.SMOOTH:
        return generate_smooth_route(nodes, options)
    return generate_manhattan_route(nodes, options)


def generate_connection(
    source: LayoutNode,
    target: LayoutNode,
    min_curve_distance: float = MIN_CURVE_DISTANCE,
) -> str:
    """Curved transition between two stations.

    Close stations get a straight segment; otherwise a cubic curve leaves
    and enters horizontally, bending around the horizontal midpoint.
    """
    dx = target.x - source.x
    dy = target.y - source.y
    start = (source.x, source.y)
    end = (target.x, target.y)
    if abs(dx) < min_curve_distance and abs(dy) < min_curve_distance:
        return f"M {_point(start)} L {_point(end)}"

    mid_x = source.x + dx / 2
    return (
        f"M {_point(start)} "
        f"C {_point((mid_x, source.y))} {_point((mid_x, target.y))} {_point(end)}"
    )
