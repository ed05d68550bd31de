"""Input records and layout output records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_COLOR = "#cccccc"


class RouteMode(Enum):
    """How consecutive stations of a line are joined."""

    DIRECT = "direct"  # straight segments
    MANHATTAN = "manhattan"  # horizontal and vertical segments only
    SMOOTH = "smooth"  # manhattan with rounded corners


class PlacementStrategy(Enum):
    """Coordinate formula used by the node placer."""

    POLAR = "polar"  # lines fan out from the centre
    GRID = "grid"  # vertical lanes, levels top to bottom
    LINEAR = "linear"  # horizontal lanes, levels left to right


def _pick(row: dict, *keys: str, default: Any = None) -> Any:
    """Return the first present key from a row, accepting snake and camel case."""
    for key in keys:
        if key in row:
            return row[key]
    return default


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or value is None:
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def _require(row: dict, *keys: str) -> Any:
    value = _pick(row, *keys)
    if value is None:
        raise ValueError(f"missing required field {keys[0]!r}")
    return value


@dataclass(frozen=True)
class CareerPath:
    """A named line on the map."""

    id: str
    name: str
    color: str = DEFAULT_COLOR

    @classmethod
    def from_dict(cls, row: "CareerPath | dict") -> "CareerPath":
        if isinstance(row, cls):
            return row
        if not isinstance(row, dict):
            raise TypeError(f"expected a mapping, got {type(row).__name__}")
        return cls(
            id=str(_require(row, "id")),
            name=str(_pick(row, "name", default="")),
            color=_pick(row, "color", default=None) or DEFAULT_COLOR,
        )


@dataclass(frozen=True)
class Position:
    """A generic role title, shared between paths."""

    id: str
    name: str

    @classmethod
    def from_dict(cls, row: "Position | dict") -> "Position":
        if isinstance(row, cls):
            return row
        if not isinstance(row, dict):
            raise TypeError(f"expected a mapping, got {type(row).__name__}")
        return cls(id=str(_require(row, "id")), name=str(_pick(row, "name", default="")))


@dataclass(frozen=True)
class PositionDetail:
    """One occurrence of a Position inside one path at a seniority level."""

    id: str
    position_id: str
    career_path_id: str
    level: int
    sequence_in_path: int | None = None

    @classmethod
    def from_dict(cls, row: "PositionDetail | dict") -> "PositionDetail":
        if isinstance(row, cls):
            return row
        if not isinstance(row, dict):
            raise TypeError(f"expected a mapping, got {type(row).__name__}")
        sequence = _pick(row, "sequence_in_path", "sequenceInPath")
        return cls(
            id=str(_require(row, "id")),
            position_id=str(_require(row, "position_id", "positionId")),
            career_path_id=str(_require(row, "career_path_id", "careerPathId", "path_id")),
            level=_as_int(_pick(row, "level"), "level"),
            sequence_in_path=None if sequence is None else _as_int(sequence, "sequence_in_path"),
        )


@dataclass(frozen=True)
class LayoutNode:
    """A placed station. One per PositionDetail."""

    id: str
    position_id: str
    path_id: str
    level: int
    x: float
    y: float
    color: str
    is_interchange: bool
    sequence_in_path: int | None = None
    name: str = ""
    related_paths: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "positionId": self.position_id,
            "pathId": self.path_id,
            "level": self.level,
            "name": self.name,
            "x": self.x,
            "y": self.y,
            "color": self.color,
            "isInterchange": self.is_interchange,
            "relatedPaths": list(self.related_paths),
        }
        if self.sequence_in_path is not None:
            data["sequenceInPath"] = self.sequence_in_path
        return data


@dataclass(frozen=True)
class LayoutPath:
    """A placed line: its base angle and its stations in drawing order."""

    id: str
    name: str
    color: str
    angle: float
    node_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "angle": self.angle,
            "nodeIds": list(self.node_ids),
        }


@dataclass(frozen=True)
class Bounds:
    """Padded bounding box of a layout."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> dict:
        return {"minX": self.min_x, "maxX": self.max_x, "minY": self.min_y, "maxY": self.max_y}


DEFAULT_BOUNDS = Bounds(min_x=-100.0, max_x=100.0, min_y=-100.0, max_y=100.0)


@dataclass
class LayoutResult:
    """Everything a renderer needs to draw the map."""

    nodes: list[LayoutNode] = field(default_factory=list)
    paths: list[LayoutPath] = field(default_factory=list)
    bounds: Bounds = DEFAULT_BOUNDS
    config_used: Any = None  # LayoutConfig
    centrality: dict[str, int] = field(default_factory=dict)
    relationships: dict[str, dict[str, int]] = field(default_factory=dict)
    mid_level: float | None = None
    level_range: tuple[int, int] | None = None

    @property
    def nodes_by_id(self) -> dict[str, LayoutNode]:
        return {node.id: node for node in self.nodes}

    @property
    def paths_by_id(self) -> dict[str, LayoutPath]:
        return {path.id: path for path in self.paths}

    def to_dict(self) -> dict:
        """Camel-cased wire form consumed by the renderer."""
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "paths": [path.to_dict() for path in self.paths],
            "bounds": self.bounds.to_dict(),
            "configUsed": self.config_used.to_dict() if self.config_used is not None else None,
        }
