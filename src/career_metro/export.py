"""Write layout outputs."""

import json
from pathlib import Path

from .model import LayoutResult


def generate_json(
    result: LayoutResult,
    output_file: Path,
    routes: dict[str, str] | None = None,
) -> None:
    """Write the layout (and optional routes) as JSON.

    Args:
        result: The computed layout.
        output_file: Path to write the JSON file.
        routes: Optional route string per path id.
    """
    document = result.to_dict()
    if routes is not None:
        document["routes"] = routes

    with open(output_file, "w") as f:
        json.dump(document, f, indent=2)


def generate_summary(result: LayoutResult, output_file: Path, top: int = 20) -> None:
    """Write a human-readable summary of a layout.

    Args:
        result: The computed layout.
        output_file: Path to write the summary file.
        top: Number of interchanges and relationships to list.
    """
    with open(output_file, "w") as f:
        f.write("=" * 60 + "\n")
        f.write("Career Metro Layout Summary\n")
        f.write("=" * 60 + "\n\n")

        f.write(f"Stations: {len(result.nodes)}\n")
        f.write(f"Lines: {len(result.paths)}\n")
        if result.level_range is not None:
            low, high = result.level_range
            f.write(f"Levels: {low} to {high} (mid {result.mid_level:g})\n")
        b = result.bounds
        f.write(f"Bounds: x {b.min_x:.1f} .. {b.max_x:.1f}, y {b.min_y:.1f} .. {b.max_y:.1f}\n\n")

        f.write("Lines:\n")
        f.write("-" * 40 + "\n")
        for path in result.paths:
            f.write(f"  {path.name or path.id:30s} {len(path.node_ids):3d} stations  "
                    f"angle {path.angle:.3f} rad\n")

        interchanges = format_interchanges(result.centrality, top)
        if interchanges:
            f.write("\nTop Interchanges:\n")
            f.write("-" * 40 + "\n")
            for line in interchanges:
                f.write(f"  {line}\n")

        relationships = format_relationships(result.relationships, top)
        if relationships:
            f.write("\nStrongest Line Relationships:\n")
            f.write("-" * 40 + "\n")
            for line in relationships:
                f.write(f"  {line}\n")


def format_interchanges(centrality: dict[str, int], top: int) -> list[str]:
    """Lines describing the most central positions (centrality > 1)."""
    ranked = sorted(
        ((pid, count) for pid, count in centrality.items() if count > 1),
        key=lambda x: (-x[1], x[0]),
    )
    return [f"{count:4d} lines  {pid}" for pid, count in ranked[:top]]


def format_relationships(relationships: dict[str, dict[str, int]], top: int) -> list[str]:
    """Lines describing the path pairs sharing the most positions."""
    pairs = {
        tuple(sorted((a, b))): shared
        for a, others in relationships.items()
        for b, shared in others.items()
    }
    ranked = sorted(pairs.items(), key=lambda x: (-x[1], x[0]))
    return [f"{shared:4d} shared  {a} <-> {b}" for (a, b), shared in ranked[:top]]
