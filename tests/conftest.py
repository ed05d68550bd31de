"""Pytest fixtures for layout module tests."""

import re

import pytest

from career_metro.model import CareerPath, LayoutNode, Position, PositionDetail

_COMMAND = re.compile(r"([MLAC])([^MLAC]*)")


def _parse_route(route: str) -> list[tuple[str, list[float]]]:
    """Split a route string into (command, numbers) pairs."""
    return [
        (command, [float(v) for v in args.split()])
        for command, args in _COMMAND.findall(route)
    ]


@pytest.fixture
def parse_route():
    """Parser for route strings."""
    return _parse_route


@pytest.fixture
def make_node():
    """Factory for layout nodes at given coordinates."""

    def factory(
        node_id: str,
        x: float,
        y: float,
        level: int = 1,
        sequence: int | None = None,
    ) -> LayoutNode:
        return LayoutNode(
            id=node_id,
            position_id=f"pos-{node_id}",
            path_id="p",
            level=level,
            x=x,
            y=y,
            color="#000000",
            is_interchange=False,
            sequence_in_path=sequence,
        )

    return factory


@pytest.fixture
def shared_interchange() -> tuple[list[CareerPath], list[Position], list[PositionDetail]]:
    """Three paths sharing one interchange position at level 3."""
    paths = [
        CareerPath("eng", "Engineering", "#e6194b"),
        CareerPath("data", "Data", "#3cb44b"),
        CareerPath("prod", "Product", "#4363d8"),
    ]
    positions = [
        Position("lead", "Team Lead"),
        Position("eng-jr", "Junior Engineer"),
        Position("eng-sr", "Senior Engineer"),
        Position("data-jr", "Junior Analyst"),
        Position("data-sr", "Senior Analyst"),
        Position("prod-jr", "Associate PM"),
        Position("prod-sr", "Product Manager"),
    ]
    details = [
        PositionDetail("d1", "eng-jr", "eng", 1),
        PositionDetail("d2", "eng-sr", "eng", 2),
        PositionDetail("d3", "lead", "eng", 3),
        PositionDetail("d4", "data-jr", "data", 1),
        PositionDetail("d5", "data-sr", "data", 2),
        PositionDetail("d6", "lead", "data", 3),
        PositionDetail("d7", "prod-jr", "prod", 1),
        PositionDetail("d8", "prod-sr", "prod", 2),
        PositionDetail("d9", "lead", "prod", 3),
    ]
    return paths, positions, details


@pytest.fixture
def sequenced_paths() -> tuple[list[CareerPath], list[Position], list[PositionDetail]]:
    """Two paths with explicit sequences, including two nodes on one level."""
    paths = [CareerPath("a", "Alpha", "#111111"), CareerPath("b", "Beta", "#222222")]
    positions = [Position(f"p{i}", f"Role {i}") for i in range(1, 7)]
    details = [
        PositionDetail("a3", "p3", "a", 2, sequence_in_path=3),
        PositionDetail("a1", "p1", "a", 1, sequence_in_path=1),
        PositionDetail("a2", "p2", "a", 2, sequence_in_path=2),
        PositionDetail("b1", "p4", "b", 1, sequence_in_path=1),
        PositionDetail("b2", "p5", "b", 3, sequence_in_path=2),
        PositionDetail("b3", "p6", "b", 4, sequence_in_path=3),
    ]
    return paths, positions, details


@pytest.fixture
def dict_rows() -> dict:
    """Plain host rows, as a database layer would hand them over."""
    return {
        "paths": [
            {"id": "eng", "name": "Engineering", "color": "#e6194b"},
            {"id": "ops", "name": "Operations"},
        ],
        "positions": [
            {"id": "jr", "name": "Junior"},
            {"id": "sr", "name": "Senior"},
            {"id": "mgr", "name": "Manager"},
        ],
        "position_details": [
            {"id": "e1", "position_id": "jr", "career_path_id": "eng", "level": 1},
            {"id": "e2", "position_id": "sr", "career_path_id": "eng", "level": 2},
            {"id": "e3", "position_id": "mgr", "career_path_id": "eng", "level": 4},
            {"id": "o1", "positionId": "jr", "careerPathId": "ops", "level": 1},
            {"id": "o2", "positionId": "mgr", "careerPathId": "ops", "level": 3,
             "sequenceInPath": 2},
        ],
    }
