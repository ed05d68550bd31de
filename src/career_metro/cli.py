"""CLI for career-metro."""

import argparse
import logging
from pathlib import Path

from .config import LayoutConfig, load_config
from .dataset import Dataset, load_dataset
from .export import format_interchanges, format_relationships, generate_json, generate_summary
from .layout import compute_layout, compute_routes
from .layout.relationships import analyze
from .model import PlacementStrategy, PositionDetail, RouteMode


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add common arguments shared between subcommands."""
    parser.add_argument(
        "--input", type=Path, required=True, help="JSON or YAML file with paths, positions and details"
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def read_dataset(args: argparse.Namespace, parser: argparse.ArgumentParser) -> Dataset:
    """Load the input file, turning read errors into argument errors."""
    if not args.input.exists():
        parser.error(f"--input file not found: {args.input}")
    try:
        return load_dataset(args.input)
    except (OSError, ValueError) as err:
        parser.error(str(err))


def resolve_config(args: argparse.Namespace, parser: argparse.ArgumentParser) -> LayoutConfig:
    """Load the config file if given and apply command line overrides."""
    config = LayoutConfig()
    if args.config:
        try:
            config = load_config(args.config)
        except (OSError, ValueError) as err:
            parser.error(f"Cannot load config {args.config}: {err}")

    overrides = {}
    if getattr(args, "route_mode", None):
        overrides["route_mode"] = args.route_mode
    if getattr(args, "strategy", None):
        overrides["placement_strategy"] = args.strategy
    return config.replace(**overrides) if overrides else config


def cmd_layout(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Compute a layout and write layout.json and summary.txt."""
    dataset = read_dataset(args, parser)
    config = resolve_config(args, parser)
    args.output = args.output.resolve()
    args.output.mkdir(parents=True, exist_ok=True)

    print(f"Laying out {args.input}...")
    skipped: list[str] = []

    def on_event(event: str, payload: dict) -> None:
        if event == "skipped_detail":
            skipped.append(str(payload.get("detail_id", payload.get("row"))))

    result = compute_layout(
        dataset.paths, dataset.positions, dataset.position_details, config, on_event=on_event
    )
    print(f"Placed {len(result.nodes)} stations on {len(result.paths)} lines")
    if skipped:
        print(f"Warning: skipped {len(skipped)} position details: {', '.join(skipped[:10])}")

    routes = compute_routes(result)
    generate_json(result, args.output / "layout.json", routes=routes)
    print("Wrote layout.json")

    generate_summary(result, args.output / "summary.txt")
    print("Wrote summary.txt")
    print(f"\nAll outputs written to {args.output}/")


def cmd_inspect(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Print interchanges and path relationships of a dataset."""
    dataset = read_dataset(args, parser)

    details = []
    for row in dataset.position_details:
        try:
            details.append(PositionDetail.from_dict(row))
        except (KeyError, TypeError, ValueError) as err:
            print(f"Warning: skipping invalid position detail {row!r}: {err}")

    analysis = analyze(details)
    interchanges = format_interchanges(analysis.centrality, args.top)
    relationships = format_relationships(analysis.relationships, args.top)

    print(f"{len(dataset.paths)} paths, {len(dataset.positions)} positions, {len(details)} details")
    print("\n=== INTERCHANGES ===")
    for line in interchanges or ["(none)"]:
        print(f"  {line}")
    print("\n=== PATH RELATIONSHIPS ===")
    for line in relationships or ["(none)"]:
        print(f"  {line}")


def main(argv: list[str] | None = None) -> None:
    """Main entry point for career-metro CLI."""
    parser = argparse.ArgumentParser(description="Lay out career paths as a metro map")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    layout_parser = subparsers.add_parser("layout", help="Compute a layout and its routes")
    add_common_args(layout_parser)
    layout_parser.add_argument(
        "--output",
        type=Path,
        default=Path("results"),
        help="Output directory (default: results)",
    )
    layout_parser.add_argument(
        "--route-mode",
        choices=[mode.value for mode in RouteMode],
        help="Override the routing mode",
    )
    layout_parser.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in PlacementStrategy],
        help="Override the placement strategy",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show interchanges and shared positions between paths"
    )
    add_common_args(inspect_parser)
    inspect_parser.add_argument(
        "-n", "--top", type=int, default=10, help="Number of entries to show (default: 10)"
    )

    args = parser.parse_args(argv)

    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "layout":
        cmd_layout(args, layout_parser)
    elif args.command == "inspect":
        cmd_inspect(args, inspect_parser)
    else:
        # No subcommand provided - show help
        parser.print_help()


if __name__ == "__main__":
    main()
