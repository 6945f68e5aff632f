import logging
from datetime import datetime, time, timedelta
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

from .preprocess import flights_to_frame, project_flights
from .schema import FlightInfo, FlightRecord

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ['airline', 'total_flights', 'total_hours', 'average_minutes']
ROUTE_COLUMNS = ['origin', 'destination', 'total_flights', 'average_minutes']


# --- Helpers ---

def _casefold_equals(series: pd.Series, value: str) -> pd.Series:
    """Case-insensitive exact match; absent values never match."""
    return series.notna() & series.fillna('').str.casefold().eq(value.casefold())


def _casefold_contains(series: pd.Series, part: str) -> pd.Series:
    """Case-insensitive substring match; absent values never match."""
    return series.notna() & series.fillna('').str.casefold().str.contains(part.casefold(), regex=False)


def _whole_minutes(durations: pd.Series) -> pd.Series:
    # Truncate toward zero, so -90.5 minutes counts as -90
    return np.trunc(durations / pd.Timedelta(minutes=1))


def _to_timedelta(value) -> timedelta:
    if pd.isna(value):
        return timedelta(0)
    return pd.Timedelta(value).to_pytimedelta()


def _minutes_to_timedelta(value) -> timedelta:
    if pd.isna(value):
        return timedelta(0)
    return timedelta(minutes=int(value))


def _time_of_day(cutoff: time) -> pd.Timedelta:
    return pd.Timedelta(hours=cutoff.hour, minutes=cutoff.minute,
                        seconds=cutoff.second, microseconds=cutoff.microsecond)


def _select(items: Sequence, positions) -> list:
    items = list(items)
    return [items[i] for i in positions]


# --- Per-airline totals ---

def total_duration_for_airline(flights: Sequence[FlightInfo], airline: str) -> timedelta:
    """
    Sums the scheduled duration of every flight operated by the airline.

    The airline name is matched case-insensitively; flights without an airline
    are ignored. Returns a zero timedelta when nothing matches.
    """
    df = flights_to_frame(flights)
    matched = df.loc[_casefold_equals(df['airline'], airline), 'duration']
    return _to_timedelta(matched.sum())


def average_duration_for_airline(flights: Sequence[FlightInfo], airline: str) -> timedelta:
    """
    Mean scheduled duration for the airline, in whole minutes.

    Each duration is truncated to whole minutes before averaging and the mean
    is truncated as well. Returns a zero timedelta when nothing matches.
    """
    df = flights_to_frame(flights)
    matched = df.loc[_casefold_equals(df['airline'], airline), 'duration']
    return _minutes_to_timedelta(_whole_minutes(matched).mean())


def average_duration_across_all(flights: Sequence[FlightInfo]) -> float:
    """
    Mean scheduled duration in hours over all flights with a departure time.

    Returns 0.0 if no flight qualifies.
    """
    df = flights_to_frame(flights)
    qualifying = df.loc[df['departure'].notna(), 'duration']
    mean_minutes = _whole_minutes(qualifying).mean()
    if pd.isna(mean_minutes):
        return 0.0
    return float(mean_minutes) / 60.0


def grouped_total_by_airline(flights: Sequence[FlightInfo]) -> Dict[str, timedelta]:
    """Total scheduled duration per airline, keyed by the airline name as written in the data."""
    df = flights_to_frame(flights).dropna(subset=['airline'])
    totals = df.groupby('airline', sort=True)['duration'].sum()
    return {airline: _to_timedelta(total) for airline, total in totals.items()}


def grouped_average_by_airline(flights: Sequence[FlightInfo]) -> Dict[str, timedelta]:
    """Mean scheduled duration per airline, in whole minutes."""
    df = flights_to_frame(flights).dropna(subset=['airline'])
    means = _whole_minutes(df['duration']).groupby(df['airline'], sort=True).mean()
    return {airline: _minutes_to_timedelta(mean) for airline, mean in means.items()}


# --- Airport filters ---

def flights_between_airports(records: Sequence[FlightRecord], origin_name: str,
                             destination_name: str) -> List[FlightRecord]:
    """
    Records flying from one named airport to another.

    Both names must match exactly, ignoring case. Records missing either
    airport name are left out. Input order is kept.
    """
    airports = pd.DataFrame(
        {
            'origin': [r.departure.airport_name for r in records],
            'destination': [r.arrival.airport_name for r in records],
        },
        dtype=object,
    )
    mask = _casefold_equals(airports['origin'], origin_name) & \
        _casefold_equals(airports['destination'], destination_name)
    return _select(records, airports.index[mask])


def flights_matching_airports(flights: Sequence[FlightInfo], origin_part: str,
                              destination_part: str) -> List[FlightInfo]:
    """
    Flights whose origin and destination names contain the given fragments.

    Unlike flights_between_airports this is a case-insensitive substring
    search, so 'frankfurt' matches 'Frankfurt am Main'.
    """
    df = flights_to_frame(flights)
    mask = _casefold_contains(df['origin'], origin_part) & \
        _casefold_contains(df['destination'], destination_part)
    return _select(flights, df.index[mask])


# --- Time filters ---

def flights_before_cutoff(records: Sequence[FlightRecord], cutoff: time,
                          roll_overnight: bool = False) -> List[FlightInfo]:
    """
    Projects the records and keeps flights departing before a time of day.

    Only the clock time of the departure is compared, the date is ignored.
    Records without a scheduled departure or arrival are skipped.
    """
    flights = project_flights(records, on_missing='skip', roll_overnight=roll_overnight)
    df = flights_to_frame(flights)
    departure = df['departure']
    since_midnight = departure - departure.dt.normalize()
    mask = departure.notna() & (since_midnight < _time_of_day(cutoff))
    return _select(flights, df.index[mask])


def flights_departing_before(flights: Sequence[FlightInfo], moment: datetime) -> List[FlightInfo]:
    """Flights scheduled to depart strictly before the given timestamp."""
    df = flights_to_frame(flights)
    mask = df['departure'].notna() & (df['departure'] < pd.Timestamp(moment))
    return _select(flights, df.index[mask])


# --- Orderings ---

def sorted_by_arrival(flights: Sequence[FlightInfo]) -> List[FlightInfo]:
    """Flights ordered by scheduled arrival, earliest first; flights without an arrival come last."""
    df = flights_to_frame(flights)
    ordered = df.sort_values('arrival', kind='stable', na_position='last')
    return _select(flights, ordered.index)


def sorted_by_duration(flights: Sequence[FlightInfo]) -> List[FlightInfo]:
    """Flights ordered by duration, shortest (or most negative) first."""
    df = flights_to_frame(flights)
    ordered = df.sort_values('duration', kind='stable')
    return _select(flights, ordered.index)


# --- Summary tables ---

def airline_summary(flights: Sequence[FlightInfo]) -> pd.DataFrame:
    """
    Per-airline flight counts and durations.

    Args:
        flights: The projected flights.

    Returns:
        A DataFrame with one row per airline:
        - total_flights
        - total_hours
        - average_minutes (whole-minute durations, averaged)
        sorted by total_hours, largest first.
    """
    logger.info("Calculating airline summary...")
    df = flights_to_frame(flights).dropna(subset=['airline']).copy()
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    df['hours'] = df['duration'] / pd.Timedelta(hours=1)
    df['minutes'] = _whole_minutes(df['duration'])

    summary = df.groupby('airline').agg(
        total_flights=('hours', 'size'),
        total_hours=('hours', 'sum'),
        average_minutes=('minutes', 'mean'),
    ).reset_index()

    summary['total_hours'] = summary['total_hours'].round(2)
    summary['average_minutes'] = summary['average_minutes'].round(2)

    return summary.sort_values('total_hours', ascending=False, kind='stable').reset_index(drop=True)


def find_busiest_routes(flights: Sequence[FlightInfo], top_n: int = 5) -> pd.DataFrame:
    """
    Identifies the most frequently flown airport pairs.

    Args:
        flights: The projected flights.
        top_n: The number of routes to return.

    Returns:
        A DataFrame with origin, destination, total_flights and average_minutes.
    """
    df = flights_to_frame(flights).dropna(subset=['origin', 'destination']).copy()
    if df.empty:
        return pd.DataFrame(columns=ROUTE_COLUMNS)

    df['minutes'] = _whole_minutes(df['duration'])
    routes = df.groupby(['origin', 'destination']).agg(
        total_flights=('minutes', 'size'),
        average_minutes=('minutes', 'mean'),
    ).reset_index()
    routes['average_minutes'] = routes['average_minutes'].round(2)

    return routes.sort_values('total_flights', ascending=False, kind='stable').head(top_n).reset_index(drop=True)
