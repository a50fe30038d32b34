"""CLI entry point: one scheduled refresh of the flight board."""

import argparse
import logging
import sys

from dotenv import load_dotenv

from pvrflights.board.config import SOURCES, BoardConfig, output_path_from_env
from pvrflights.board.errors import ConfigError
from pvrflights.board.models import DEGRADED_MESSAGE, Snapshot
from pvrflights.board.service import BoardService
from pvrflights.board.stats import compute_stats
from pvrflights.board.storage import write_snapshot
from pvrflights.reference.airports import PVR


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Fetch today's Puerto Vallarta arrivals and departures into a JSON snapshot"
    )
    parser.add_argument(
        "--source",
        choices=SOURCES,
        default=None,
        help="Upstream source (default: PVR_FLIGHT_SOURCE or aviationstack)",
    )
    parser.add_argument(
        "--output",
        "-o",
        default=None,
        help="Snapshot path (default: PVR_OUTPUT_PATH or data/flights.json)",
    )
    parser.add_argument(
        "--sequential",
        action="store_true",
        help="Fetch arrivals and departures one after the other",
    )
    parser.add_argument(
        "--stats",
        "-s",
        action="store_true",
        help="Print a status summary",
    )
    parser.add_argument(
        "--show",
        choices=("arrivals", "departures"),
        default=None,
        help="Print one direction as a table",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    try:
        config = BoardConfig.from_env(
            source=args.source,
            output_path=args.output,
            concurrent_fetch=False if args.sequential else None,
        )
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        output_path = output_path_from_env(override=args.output)
        write_snapshot(Snapshot.degraded(PVR, f"{DEGRADED_MESSAGE} ({e})"), output_path)
        print(f"Saved empty data file as fallback: {output_path}", file=sys.stderr)
        return 1

    service = BoardService(config)
    try:
        snapshot = service.run()
    except Exception as e:
        print(f"Error fetching flight data: {e}", file=sys.stderr)
        print(f"Saved empty data file as fallback: {config.output_path}", file=sys.stderr)
        return 1

    print(f"Arrivals: {len(snapshot.arrivals)} flights")
    print(f"Departures: {len(snapshot.departures)} flights")
    print(f"Saved to: {config.output_path}")
    for report in service.reports.values():
        if report.dropped:
            print(
                f"  {report.direction}: dropped {report.dropped} of {report.raw} "
                f"(no number {report.missing_flight_number}, no time {report.unresolved_time}, "
                f"other day {report.other_day}, duplicates {report.duplicates})",
                file=sys.stderr,
            )

    if args.stats:
        stats = compute_stats(snapshot)
        if stats.by_airline:
            print("\nBy airline:")
            for airline, count in sorted(stats.by_airline.items(), key=lambda x: -x[1]):
                print(f"  {airline}: {count}")
        df = stats.status_dataframe()
        if not df.empty:
            print("\nStatus summary:")
            print(df.to_string(index=False))

    if args.show:
        direction = "arrival" if args.show == "arrivals" else "departure"
        df = snapshot.to_dataframe(direction)
        if df.empty:
            print(f"No {args.show} today.", file=sys.stderr)
        else:
            print()
            print(df.to_string(index=False))

    return 0


if __name__ == "__main__":
    sys.exit(main())
