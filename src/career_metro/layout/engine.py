"""Layout pipeline: analysis, angles, placement, bounds and routes."""

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from ..config import LayoutConfig, RouteOptions
from ..model import (
    DEFAULT_BOUNDS,
    CareerPath,
    LayoutPath,
    LayoutResult,
    Position,
    PositionDetail,
    RouteMode,
)
from .angles import assign_angles
from .bounds import compute_bounds
from .grouping import group_by
from .placement import compute_level_range, place_nodes
from .relationships import analyze
from .routing import generate_route

logger = logging.getLogger(__name__)

EventHook = Callable[[str, dict], None]
T = TypeVar("T")


def _emit(on_event: EventHook | None, event: str, **payload: Any) -> None:
    if on_event is not None:
        on_event(event, payload)


def _coerce_rows(
    rows: Any,
    record: Callable[[Any], T],
    kind: str,
    on_event: EventHook | None,
) -> list[T] | None:
    """Turn host rows into records, dropping rows that cannot be read.

    Returns None when the collection itself is unusable.
    """
    if rows is None or isinstance(rows, (str, bytes, dict)) or not isinstance(rows, Iterable):
        logger.warning("Layout input %s is not a list: %r", kind, type(rows).__name__)
        _emit(on_event, "invalid_input", kind=kind, reason="not a list")
        return None

    records: list[T] = []
    for row in rows:
        try:
            records.append(record(row))
        except (KeyError, TypeError, ValueError) as err:
            logger.warning("Skipping invalid %s row %r: %s", kind, row, err)
            event = "skipped_detail" if kind == "position_details" else "skipped_row"
            _emit(on_event, event, kind=kind, row=row, reason=str(err))
    return records


def _empty_result(config: LayoutConfig) -> LayoutResult:
    return LayoutResult(nodes=[], paths=[], bounds=DEFAULT_BOUNDS, config_used=config)


def compute_layout(
    paths: Sequence[CareerPath | dict],
    positions: Sequence[Position | dict],
    position_details: Sequence[PositionDetail | dict],
    config: LayoutConfig | dict | None = None,
    on_event: EventHook | None = None,
) -> LayoutResult:
    """Compute a metro map layout.

    Every call is independent: the result only depends on the arguments.
    Empty or unusable input yields an empty layout with the default bounds;
    unreadable rows and details with dangling references are skipped and
    reported through logging and on_event.

    Args:
        paths: Career paths, as records or plain dicts.
        positions: Generic positions, as records or plain dicts.
        position_details: Position occurrences, as records or plain dicts.
        config: LayoutConfig or a mapping of options.
        on_event: Optional hook called as on_event(name, payload) for
            "invalid_input", "skipped_detail", "skipped_row" and
            "layout_computed".

    Returns:
        LayoutResult with nodes, paths and bounds.
    """
    if not isinstance(config, LayoutConfig):
        config = LayoutConfig.from_mapping(config)

    path_records = _coerce_rows(paths, CareerPath.from_dict, "paths", on_event)
    position_records = _coerce_rows(positions, Position.from_dict, "positions", on_event)
    detail_records = _coerce_rows(
        position_details, PositionDetail.from_dict, "position_details", on_event
    )
    if not path_records or not position_records or not detail_records:
        logger.warning("Layout generation: missing or invalid core data")
        _emit(on_event, "invalid_input", kind="all", reason="empty input")
        return _empty_result(config)

    unique_paths: dict[str, CareerPath] = {}
    for path in path_records:
        unique_paths.setdefault(path.id, path)
    path_records = list(unique_paths.values())

    def report_skip(detail: PositionDetail, reason: str) -> None:
        _emit(on_event, "skipped_detail", detail_id=detail.id, reason=reason)

    # Details that cannot be drawn must not count toward centrality
    position_ids = {position.id for position in position_records}
    path_ids = {path.id for path in path_records}
    drawable = [
        d for d in detail_records
        if d.position_id in position_ids and d.career_path_id in path_ids
    ]

    analysis = analyze(drawable)
    angles = assign_angles(
        path_records,
        analysis.relationships,
        config.start_angle_deg,
        config.angle_spread_deg,
        iterations=config.relaxation_iterations,
        repulsion=config.repulsion,
        attraction=config.attraction,
        step_scale=config.step_scale,
    )
    nodes = place_nodes(
        path_records,
        position_records,
        detail_records,
        analysis.centrality,
        angles,
        config,
        on_skip=report_skip,
    )

    node_ids_by_path = group_by(nodes, lambda n: n.path_id)
    layout_paths = [
        LayoutPath(
            id=path.id,
            name=path.name,
            color=path.color,
            angle=angles.get(path.id, 0.0),
            node_ids=tuple(node.id for node in node_ids_by_path.get(path.id, ())),
        )
        for path in path_records
    ]

    bounds = compute_bounds(nodes, config.padding_x, config.effective_padding_y)
    levels = compute_level_range(drawable, config.mid_level_override)

    logger.debug(
        "Layout generated: %d nodes, %d paths, bounds=%s, mid level %s, levels %d-%d",
        len(nodes), len(layout_paths), bounds, levels.mid_level,
        levels.min_level, levels.max_level,
    )
    _emit(
        on_event,
        "layout_computed",
        node_count=len(nodes),
        path_count=len(layout_paths),
        bounds=bounds,
        mid_level=levels.mid_level,
        level_range=(levels.min_level, levels.max_level),
    )

    return LayoutResult(
        nodes=nodes,
        paths=layout_paths,
        bounds=bounds,
        config_used=config,
        centrality=analysis.centrality,
        relationships=analysis.relationships,
        mid_level=levels.mid_level,
        level_range=(levels.min_level, levels.max_level),
    )


def route_for_path(
    result: LayoutResult,
    path_id: str,
    mode: RouteMode | str | None = None,
    options: RouteOptions | None = None,
) -> str:
    """Route string for one path of a layout.

    Mode and options default to those of the config the layout was computed
    with. An unknown path gives "".
    """
    config = result.config_used or LayoutConfig()
    path = result.paths_by_id.get(path_id)
    if path is None:
        return ""
    nodes_by_id = result.nodes_by_id
    nodes = [nodes_by_id[node_id] for node_id in path.node_ids if node_id in nodes_by_id]
    return generate_route(
        nodes,
        mode if mode is not None else config.route_mode,
        options if options is not None else config.route_options(),
    )


def compute_routes(
    result: LayoutResult,
    mode: RouteMode | str | None = None,
    options: RouteOptions | None = None,
) -> dict[str, str]:
    """Route string for every path of a layout, keyed by path id."""
    return {path.id: route_for_path(result, path.id, mode, options) for path in result.paths}
