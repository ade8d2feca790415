"""CLI entry point for the ride matching engine."""

import argparse
import logging
import sys

from ridematch.core.config import MatchPreferences, Settings, SortKey
from ridematch.core.schemas import GeoPoint, SearchIntent
from ridematch.core.store import load_rides
from ridematch.matching.presentation import (
    explain_match,
    format_distance,
    format_time_difference,
    match_quality,
)
from ridematch.pipeline.orchestrator import (
    RecommendationResult,
    export_matches_json,
    run_recommendation,
)


def parse_point(value: str) -> GeoPoint:
    """argparse type for "LAT,LNG"."""
    try:
        lat, lng = (float(part) for part in value.split(","))
    except ValueError:
        msg = f"expected LAT,LNG but got {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    return GeoPoint(lat=lat, lng=lng)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Ride matching engine - rank posted rides for a rider's search",
    )
    subparsers = parser.add_subparsers(dest="command")

    rec = subparsers.add_parser("recommend", help="Recommend rides for a search")
    rec.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML file (default: built-in defaults)",
    )
    rec.add_argument("--rides", required=True, help="Path to exported rides JSON")
    rec.add_argument("--pickup", required=True, type=parse_point, help="Pickup point LAT,LNG")
    rec.add_argument("--dropoff", required=True, type=parse_point, help="Dropoff point LAT,LNG")
    rec.add_argument("--date", required=True, help="Desired date, e.g. 2025-06-01")
    rec.add_argument("--time", required=True, help='Desired time, e.g. "3:00 PM" or 15:00')
    rec.add_argument(
        "--sort",
        choices=[k.value for k in SortKey],
        help="Sort order (default: from config, else match)",
    )
    rec.add_argument(
        "--min-score",
        type=float,
        help="Override the minimum match score (0-100)",
    )
    rec.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )
    rec.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(2)
    return args


def setup_logging(verbose: bool, level: str = "INFO") -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def print_result(result: RecommendationResult) -> None:
    """Print a human-readable summary of recommended rides."""
    print(
        f"\n{len(result.matches)} matches from {result.eligible_count} eligible "
        f"of {result.raw_count} rides."
    )
    for m in result.matches:
        r = m.ride
        s = m.match_score
        quality = match_quality(m.match_percentage)
        timing = (
            format_time_difference(s.time_difference)
            if s.time_difference is not None
            else "unknown"
        )
        print(
            f"  {quality.icon} {m.match_percentage}% {quality.label}: "
            f"{r.pickup_label or r.id} -> {r.dropoff_label} on {r.date} {r.time}, "
            f"{r.price:.2f}/seat, {r.available_seats} seats"
        )
        print(
            f"      pickup {format_distance(s.pickup_distance)}, "
            f"dropoff {format_distance(s.dropoff_distance)}, time diff {timing}"
        )
        for line in explain_match(s):
            print(f"      {line}")


def cmd_recommend(args: argparse.Namespace, settings: Settings) -> None:
    """Handle recommend subcommand."""
    rides = load_rides(args.rides)

    updates: dict[str, object] = {}
    if args.sort:
        updates["sort_by"] = SortKey(args.sort)
    if args.min_score is not None:
        prefs = MatchPreferences.model_validate(
            {**settings.preferences.model_dump(), "min_match_score": args.min_score},
        )
        updates["preferences"] = prefs
    if updates:
        settings = settings.model_copy(update=updates)

    intent = SearchIntent(
        pickup=args.pickup,
        dropoff=args.dropoff,
        date=args.date,
        time=args.time,
    )
    result = run_recommendation(settings, rides, intent)

    if args.export == "json":
        print(export_matches_json(result))
    else:
        print_result(result)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    try:
        settings = Settings.from_yaml(args.config) if args.config else Settings()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    setup_logging(args.verbose, settings.logging.level)

    try:
        cmd_recommend(args, settings)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
