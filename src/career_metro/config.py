"""Layout configuration: defaults, option parsing and YAML loading."""

import dataclasses
import re
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any, Mapping

import yaml

from .model import PlacementStrategy, RouteMode

# Legacy option names used by older hosts
_ALIASES = {
    "start_angle": "start_angle_deg",
    "angle_spread": "angle_spread_deg",
    "jitter": "jitter_amount",
    "iterations": "relaxation_iterations",
    "routing_mode": "route_mode",
    "x_padding": "padding",
    "y_padding": "padding_y",
}


@dataclass(frozen=True)
class RouteOptions:
    """Options for the route generator."""

    vertical_first: bool = True
    min_segment_length: float = 5.0
    corner_radius: float = 10.0
    # Segments shorter than this get a sharp corner instead of an arc
    short_segment_threshold: float = 2.0


@dataclass(frozen=True)
class LayoutConfig:
    """Every recognised layout option with its default."""

    radius_step: float = 120.0
    center_radius: float = -100.0  # negative: levels expand outward from the centre
    start_angle_deg: float = 0.0
    angle_spread_deg: float = 360.0
    padding: float = 80.0
    padding_y: float | None = None
    mid_level_override: float | None = None
    centrality_factor: float = 1.6
    jitter_amount: float = 0.01
    jitter_seed: str = ""

    # Angle relaxation
    relaxation_iterations: int = 20
    repulsion: float = 0.2
    attraction: float = 0.3
    step_scale: float = 0.1

    # Placement
    placement_strategy: PlacementStrategy = PlacementStrategy.POLAR
    cell_width: float = 100.0
    cell_height: float = 80.0
    level_multiplier: float = 1.2
    domain_spread: float = 1.8
    center_weight: float = 0.7

    # Routing
    route_mode: RouteMode = RouteMode.MANHATTAN
    vertical_first: bool = True
    min_segment_length: float = 5.0
    corner_radius: float = 10.0

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "placement_strategy",
            _enum_value(PlacementStrategy, self.placement_strategy, "placement_strategy"),
        )
        object.__setattr__(
            self, "route_mode", _enum_value(RouteMode, self.route_mode, "route_mode")
        )

    @property
    def padding_x(self) -> float:
        return self.padding

    @property
    def effective_padding_y(self) -> float:
        return self.padding if self.padding_y is None else self.padding_y

    def route_options(self) -> RouteOptions:
        return RouteOptions(
            vertical_first=self.vertical_first,
            min_segment_length=self.min_segment_length,
            corner_radius=self.corner_radius,
        )

    def replace(self, **changes: Any) -> "LayoutConfig":
        """Return a copy with the given options overridden (same parsing as from_mapping)."""
        merged = self.to_dict()
        merged.update(changes)
        return LayoutConfig.from_mapping(merged)

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = value.value if isinstance(value, Enum) else value
        return data

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any] | None) -> "LayoutConfig":
        """Build a config from host options.

        Keys may be snake_case, camelCase or kebab-case. Unknown keys are
        ignored. None values keep the default, except for the options whose
        default is None.

        Args:
            options: Mapping of option name to value.

        Returns:
            A LayoutConfig.

        Raises:
            ValueError: If an enum-valued or boolean option has an
                unrecognised value.
        """
        if not options:
            return cls()

        known = {f.name: f for f in fields(cls)}
        values: dict[str, Any] = {}
        for raw_key, value in options.items():
            key = _normalize_key(str(raw_key))
            key = _ALIASES.get(key, key)
            if key not in known:
                continue
            if value is None and known[key].default is not None:
                continue
            values[key] = _coerce(known[key], value)
        return cls(**values)


def _normalize_key(key: str) -> str:
    key = key.replace("-", "_")
    key = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", key)
    return key.lower()


def _coerce(f: dataclasses.Field, value: Any) -> Any:
    if f.name == "placement_strategy":
        return _enum_value(PlacementStrategy, value, f.name)
    if f.name == "route_mode":
        return _enum_value(RouteMode, value, f.name)
    if f.name == "vertical_first":
        return _bool_value(value, f.name)
    if f.name == "relaxation_iterations":
        return int(value)
    if f.name == "jitter_seed":
        return str(value)
    if value is None:
        return None
    return float(value)


_TRUE = ("true", "yes", "on", "1")
_FALSE = ("false", "no", "off", "0")


def _bool_value(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
    raise ValueError(f"Invalid {name} {value!r} (expected true or false)")


def _enum_value(enum_cls: type[Enum], value: Any, name: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError as err:
        choices = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Invalid {name} {value!r} (expected one of: {choices})") from err


def load_config(config_path: Path) -> LayoutConfig:
    """Load layout configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        LayoutConfig built from the file. An empty file gives the defaults.

    Raises:
        ValueError: If the file does not contain a mapping.
    """
    with open(config_path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return LayoutConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return LayoutConfig.from_mapping(data)
