"""Padded bounding box of placed nodes."""

import math
from collections.abc import Iterable

from ..model import DEFAULT_BOUNDS, Bounds, LayoutNode


def compute_bounds(
    nodes: Iterable[LayoutNode],
    padding_x: float,
    padding_y: float | None = None,
) -> Bounds:
    """Compute the bounding box of all nodes, padded on each side.

    Nodes with non-finite coordinates are ignored. With nothing to measure
    the default box (+/-100) is returned.

    Args:
        nodes: Placed nodes.
        padding_x: Padding added left and right.
        padding_y: Padding added top and bottom (defaults to padding_x).

    Returns:
        Bounds of the nodes.
    """
    if padding_y is None:
        padding_y = padding_x

    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for node in nodes:
        if not (math.isfinite(node.x) and math.isfinite(node.y)):
            continue
        min_x = min(min_x, node.x)
        max_x = max(max_x, node.x)
        min_y = min(min_y, node.y)
        max_y = max(max_y, node.y)

    if min_x == math.inf:
        return DEFAULT_BOUNDS

    return Bounds(
        min_x=min_x - padding_x,
        max_x=max_x + padding_x,
        min_y=min_y - padding_y,
        max_y=max_y + padding_y,
    )
