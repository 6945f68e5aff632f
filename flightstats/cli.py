# cli.py
import argparse
import logging
import os
import sys
from datetime import time, timedelta
from typing import List, Optional, Sequence

from . import config
from .errors import ConfigError, DecodeError, MissingScheduleError
from .kpis import (
    airline_summary,
    average_duration_across_all,
    average_duration_for_airline,
    find_busiest_routes,
    flights_before_cutoff,
    flights_between_airports,
    flights_matching_airports,
    grouped_average_by_airline,
    grouped_total_by_airline,
    sorted_by_arrival,
    sorted_by_duration,
    total_duration_for_airline,
)
from .load import load_flights
from .preprocess import flights_to_frame, project_flights
from .schema import FlightInfo
from .visualize import plot_airline_totals, plot_duration_vs_volume

logger = logging.getLogger(__name__)


def format_duration(td: timedelta) -> str:
    """Renders a timedelta as H:MM, with a leading '-' for negative spans."""
    total = int(td.total_seconds())
    sign = '-' if total < 0 else ''
    hours, rest = divmod(abs(total), 3600)
    return f"{sign}{hours}:{rest // 60:02d}"


def format_flight(f: FlightInfo) -> str:
    dep = f.departure.strftime('%Y-%m-%d %H:%M') if f.departure else '-'
    arr = f.arrival.strftime('%Y-%m-%d %H:%M') if f.arrival else '-'
    return (f"{f.name or '-':<8} {f.airline or '-':<24} "
            f"{f.origin or '-'} -> {f.destination or '-'}  "
            f"dep {dep}  arr {arr}  ({format_duration(f.duration)})")


def print_flights(flights: Sequence[FlightInfo], limit: Optional[int] = None):
    shown = flights if limit is None else flights[:limit]
    for f in shown:
        print(format_flight(f))
    print(f"{len(flights)} flight(s)")


def _parse_time(value: str) -> time:
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid time of day: {value!r} (expected HH:MM or HH:MM:SS)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='flightstats', description='Flight schedule analytics.')
    parser.add_argument('--file', default=config.FLIGHTS_FILE,
                        help=f'JSON flight file (default: {config.FLIGHTS_FILE})')
    parser.add_argument('--strict', action='store_true',
                        help='fail on flights without a scheduled departure/arrival instead of skipping them')
    parser.add_argument('--overnight', action='store_true', default=config.ROLL_OVERNIGHT,
                        help='treat arrivals earlier than departure as landing the next day')

    sub = parser.add_subparsers(dest='command', required=True)

    sub.add_parser('summary', help='per-airline totals and averages')

    p = sub.add_parser('airline', help='total and average flight time for one airline')
    p.add_argument('name')

    p = sub.add_parser('route', help='flights between two airports')
    p.add_argument('origin')
    p.add_argument('destination')
    p.add_argument('--contains', action='store_true', help='match airport names by substring')

    p = sub.add_parser('before', help='flights departing before a time of day')
    p.add_argument('cutoff', type=_parse_time, help='HH:MM or HH:MM:SS')

    p = sub.add_parser('sort', help='list flights sorted by arrival or duration')
    p.add_argument('key', choices=['arrival', 'duration'])
    p.add_argument('--limit', type=int, default=None)

    p = sub.add_parser('export', help='write the projected flights to CSV')
    p.add_argument('output')

    p = sub.add_parser('plot', help='write airline charts as HTML')
    p.add_argument('output_dir', nargs='?', default=os.path.join(config.OUTPUT_DIR, 'plots'))

    return parser


def run(args: argparse.Namespace) -> None:
    records = load_flights(args.file)
    on_missing = 'raise' if args.strict else config.MISSING_SCHEDULE_POLICY

    if args.command == 'route' and not args.contains:
        matches = flights_between_airports(records, args.origin, args.destination)
        print(f"Flights from {args.origin} to {args.destination}: {len(matches)}")
        for r in matches:
            print(f"{r.flight_number or '-':<8} {r.airline_name or '-'}")
        return

    if args.command == 'before':
        print_flights(flights_before_cutoff(records, args.cutoff, roll_overnight=args.overnight))
        return

    flights = project_flights(records, on_missing=on_missing, roll_overnight=args.overnight)

    if args.command == 'summary':
        print("--- Total flight time per airline ---")
        for airline, total in grouped_total_by_airline(flights).items():
            print(f"{airline}: {format_duration(total)}")
        print("\n--- Average flight time per airline ---")
        for airline, average in grouped_average_by_airline(flights).items():
            print(f"{airline}: {format_duration(average)}")
        print(f"\nAverage flight time across all airlines: {average_duration_across_all(flights):.2f} hours")
        print("\n--- Airline summary ---")
        print(airline_summary(flights).to_string(index=False))
        print("\n--- Busiest routes ---")
        print(find_busiest_routes(flights).to_string(index=False))

    elif args.command == 'airline':
        total = total_duration_for_airline(flights, args.name)
        average = average_duration_for_airline(flights, args.name)
        print(f"Total flight time for {args.name}: {format_duration(total)}")
        print(f"Average flight time for {args.name}: {format_duration(average)}")

    elif args.command == 'route':
        print_flights(flights_matching_airports(flights, args.origin, args.destination))

    elif args.command == 'sort':
        ordered = sorted_by_arrival(flights) if args.key == 'arrival' else sorted_by_duration(flights)
        print_flights(ordered, limit=args.limit)

    elif args.command == 'export':
        out_dir = os.path.dirname(args.output)
        if out_dir and not os.path.exists(out_dir):
            os.makedirs(out_dir)
        flights_to_frame(flights).to_csv(args.output, index=False)
        print(f"Saved {len(flights)} flights to {args.output}")

    elif args.command == 'plot':
        if not os.path.exists(args.output_dir):
            os.makedirs(args.output_dir)
        summary = airline_summary(flights)
        plot_airline_totals(summary, os.path.join(args.output_dir, 'airline_totals.html'))
        plot_duration_vs_volume(summary, os.path.join(args.output_dir, 'duration_vs_volume.html'))
        print(f"Saved plots to {args.output_dir}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config.check_settings()
        logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
        run(args)
    except (ConfigError, DecodeError, MissingScheduleError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
