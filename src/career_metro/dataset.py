"""Load the three layout input collections from a JSON or YAML file."""

import json
from dataclasses import dataclass, field
from pathlib import Path

import yaml

_PATH_KEYS = ("paths", "career_paths", "careerPaths")
_POSITION_KEYS = ("positions",)
_DETAIL_KEYS = ("position_details", "positionDetails", "details")


@dataclass
class Dataset:
    """Raw input rows, exactly as read from the file."""

    paths: list = field(default_factory=list)
    positions: list = field(default_factory=list)
    position_details: list = field(default_factory=list)


def _first(data: dict, keys: tuple[str, ...]) -> list:
    for key in keys:
        if key in data:
            value = data[key]
            return value if value is not None else []
    return []


def parse_dataset(data: object) -> Dataset:
    """Build a Dataset from an already decoded document.

    Raises:
        ValueError: If the document is not a mapping.
    """
    if data is None:
        return Dataset()
    if not isinstance(data, dict):
        raise ValueError("Input document must be a mapping with paths, positions and details")
    return Dataset(
        paths=_first(data, _PATH_KEYS),
        positions=_first(data, _POSITION_KEYS),
        position_details=_first(data, _DETAIL_KEYS),
    )


def load_dataset(input_path: Path) -> Dataset:
    """Read a dataset file. ``.json`` is parsed as JSON, anything else as YAML.

    Args:
        input_path: Path to the input file.

    Returns:
        Dataset with the raw rows.

    Raises:
        ValueError: If the file cannot be decoded or is not a mapping.
    """
    text = Path(input_path).read_text()
    try:
        if Path(input_path).suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as err:
        raise ValueError(f"Cannot parse {input_path}: {err}") from err
    return parse_dataset(data)
