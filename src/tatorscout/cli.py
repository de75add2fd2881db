"""Command-line interface for tatorscout."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .analysis.movement import analyze_movement
from .analysis.summary import summarize
from .config import (
    TatorScoutConfig,
    default_config,
    get_default_config_path,
    load_config,
)
from .errors import TatorScoutError
from .grid import FixedPointGrid
from .seasons import default_registry
from .trace import Trace

logger = logging.getLogger(__name__)


def _load_cli_config(config_path: str | None) -> TatorScoutConfig:
    """Load the config named on the command line, the default file, or defaults."""
    if config_path:
        config = load_config(Path(config_path))
    else:
        default_path = get_default_config_path()
        config = load_config(default_path) if default_path.exists() else default_config()
    config.validate()
    return config


def _read_trace(path: Path, grid: FixedPointGrid) -> Trace:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TatorScoutError(
            f"Cannot read trace file: {path} ({e})",
            {"path": str(path), "suggested_action": "Check the file path"},
        ) from e
    return Trace.parse(text, grid).unwrap()


def _report_error(e: TatorScoutError, as_json: bool) -> None:
    if as_json:
        error_result = {
            "error": {
                "type": type(e).__name__,
                "message": str(e),
                "details": getattr(e, "details", {}),
            },
            "status": "error",
        }
        print(json.dumps(error_result, indent=2, default=str))
    else:
        print(f"Error: {e}", file=sys.stderr)
        if "suggested_action" in e.details:
            print(f"Suggestion: {e.details['suggested_action']}", file=sys.stderr)


def handle_inspect_command(args) -> int:
    """Handle the inspect subcommand.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        config = _load_cli_config(args.config)
        grid = config.build_grid()
        bins = args.bins or config.analysis.histogram_bins
        threshold = config.analysis.stationary_threshold

        results = {}
        for file_name in args.trace_files:
            trace = _read_trace(Path(file_name), grid)
            results[file_name] = analyze_movement(trace, threshold, bins)

        aggregate = None
        if len(results) > 1:
            aggregate = {
                metric: summarize([r[metric] for r in results.values()])
                for metric in (
                    "avg_velocity",
                    "max_velocity",
                    "distance",
                    "seconds_not_moving",
                )
            }

        if args.json:
            output = {"traces": results}
            if aggregate is not None:
                output["aggregate"] = aggregate
            print(json.dumps(output, indent=2))
        else:
            for file_name, result in results.items():
                print(f"Trace: {file_name}")
                print(f"  Average velocity: {result['avg_velocity']:.2f} ft/s")
                print(f"  Max velocity: {result['max_velocity']:.2f} ft/s")
                print(f"  Distance: {result['distance']:.1f} ft")
                print(f"  Not moving: {result['seconds_not_moving']:.2f} s")
                if result["action_counts"]:
                    actions = ", ".join(
                        f"{code}={count}"
                        for code, count in sorted(result["action_counts"].items())
                    )
                    print(f"  Actions: {actions}")
            if aggregate is not None:
                print(f"\nAcross {len(results)} traces:")
                for metric, stats in aggregate.items():
                    print(
                        f"  {metric}: mean {stats['mean']:.2f}, "
                        f"median {stats['median']:.2f}, stddev {stats['stddev']:.2f}"
                    )

        return 0

    except TatorScoutError as e:
        _report_error(e, args.json)
        return 1


def handle_convert_command(args) -> int:
    """Re-serialize a trace file as compressed (default) or parsed JSON."""
    try:
        config = _load_cli_config(args.config)
        trace = _read_trace(Path(args.trace_file), config.build_grid())
        serialized = trace.serialize(compressed=not args.parsed)

        if args.out:
            Path(args.out).write_text(serialized, encoding="utf-8")
            logger.info(f"Wrote {len(serialized)} bytes to {args.out}")
            print(args.out)
        else:
            print(serialized)
        return 0

    except TatorScoutError as e:
        _report_error(e, False)
        return 1


def handle_score_command(args) -> int:
    """Print alliance and score breakdown for a trace under a season's rules."""
    try:
        config = _load_cli_config(args.config)
        year = args.season or config.season.year
        season = default_registry().get(year)
        trace = _read_trace(Path(args.trace_file), config.build_grid())

        alliance = season.get_alliance(trace)
        score = season.parse_score(trace)

        if args.json:
            print(
                json.dumps(
                    {"season": year, "alliance": alliance, "score": score}, indent=2
                )
            )
        else:
            print(f"Season: {year} {season.name}")
            print(f"Alliance: {alliance}")
            for period in ("auto", "teleop", "endgame"):
                print(f"  {period}: {score[period]['total']}")
            print(f"Total: {score['total']}")
        return 0

    except TatorScoutError as e:
        _report_error(e, args.json)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tatorscout",
        description="Robot match trace encoding and movement analysis",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tatorscout {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # Create subparsers for different commands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Inspect subcommand
    inspect_parser = subparsers.add_parser(
        "inspect", help="Print movement analytics for one or more trace files"
    )
    inspect_parser.add_argument(
        "trace_files", nargs="+", type=str, help="Trace JSON file(s)"
    )
    inspect_parser.add_argument(
        "--bins", type=int, default=None, help="Velocity histogram buckets"
    )
    inspect_parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in machine-readable JSON format",
    )
    inspect_parser.add_argument("--config", type=str, help="Path to config.toml")

    # Convert subcommand
    convert_parser = subparsers.add_parser(
        "convert", help="Re-serialize a trace file"
    )
    convert_parser.add_argument("trace_file", type=str, help="Trace JSON file")
    convert_parser.add_argument(
        "--parsed",
        action="store_true",
        help="Write the sparse point array instead of the compressed string",
    )
    convert_parser.add_argument("--out", type=str, help="Output file (default: stdout)")
    convert_parser.add_argument("--config", type=str, help="Path to config.toml")

    # Score subcommand
    score_parser = subparsers.add_parser(
        "score", help="Score a trace under a season's rules"
    )
    score_parser.add_argument("trace_file", type=str, help="Trace JSON file")
    score_parser.add_argument("--season", type=int, help="Season year (e.g. 2024)")
    score_parser.add_argument(
        "--json",
        action="store_true",
        help="Output results in machine-readable JSON format",
    )
    score_parser.add_argument("--config", type=str, help="Path to config.toml")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Route to appropriate handler
    if args.command == "inspect":
        return handle_inspect_command(args)
    elif args.command == "convert":
        return handle_convert_command(args)
    elif args.command == "score":
        return handle_score_command(args)
    else:
        # No subcommand provided, show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
