import logging
from typing import List, Sequence

import pandas as pd

from .errors import MissingScheduleError
from .schema import FlightInfo, FlightRecord

logger = logging.getLogger(__name__)

MISSING_POLICIES = ('raise', 'skip')

FRAME_COLUMNS = [
    'name', 'iata_code', 'airline', 'origin', 'destination',
    'departure', 'arrival', 'duration',
]

DATETIME_DTYPE = 'datetime64[us]'
TIMEDELTA_DTYPE = 'timedelta64[us]'


def project_flights(records: Sequence[FlightRecord], on_missing: str = 'raise',
                    roll_overnight: bool = False) -> List[FlightInfo]:
    """
    Projects raw flight records into duration-bearing FlightInfo objects.

    Args:
        records: The decoded flight records.
        on_missing: 'raise' to abort on a record without a scheduled departure or
            arrival, 'skip' to leave such records out.
        roll_overnight: Treat an arrival earlier than its departure as landing the next day.

    Returns:
        One FlightInfo per usable record, in input order.

    Raises:
        MissingScheduleError: In 'raise' mode, for the first record lacking a schedule.
    """
    if on_missing not in MISSING_POLICIES:
        raise ValueError(f"on_missing must be one of {MISSING_POLICIES}, got {on_missing!r}")

    flights = []
    skipped = 0
    for i, record in enumerate(records):
        try:
            flights.append(FlightInfo.from_record(record, roll_overnight=roll_overnight, index=i))
        except MissingScheduleError as e:
            if on_missing == 'raise':
                raise
            logger.warning("Skipping %s", e)
            skipped += 1

    logger.info("Projected %d flights (%d skipped)", len(flights), skipped)
    return flights


def flights_to_frame(flights: Sequence[FlightInfo]) -> pd.DataFrame:
    """
    Builds a DataFrame view of the flights.

    The frame has a positional RangeIndex, so row ``i`` describes ``flights[i]``.
    Absent values become NaN/NaT. Timestamps and durations are held at
    microsecond resolution, the same as ``datetime``, so dates outside the
    nanosecond range (years 1677 to 2262) still fit.
    """
    flights = list(flights)
    df = pd.DataFrame({
        'name': pd.Series([f.name for f in flights], dtype=object),
        'iata_code': pd.Series([f.iata_code for f in flights], dtype=object),
        'airline': pd.Series([f.airline for f in flights], dtype=object),
        'origin': pd.Series([f.origin for f in flights], dtype=object),
        'destination': pd.Series([f.destination for f in flights], dtype=object),
        'departure': pd.Series([f.departure for f in flights], dtype=DATETIME_DTYPE),
        'arrival': pd.Series([f.arrival for f in flights], dtype=DATETIME_DTYPE),
        'duration': pd.Series([f.duration for f in flights], dtype=TIMEDELTA_DTYPE),
    }, columns=FRAME_COLUMNS)

    return df.reset_index(drop=True)
