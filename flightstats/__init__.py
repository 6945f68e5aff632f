"""Flight schedule analytics: durations, per-airline totals, airport and time filters."""

from .errors import ConfigError, DecodeError, FlightDataError, MissingScheduleError
from .load import load_flights
from .preprocess import flights_to_frame, project_flights
from .schema import FlightInfo, FlightRecord, ScheduleEntry

__all__ = [
    'ConfigError',
    'DecodeError',
    'FlightDataError',
    'FlightInfo',
    'FlightRecord',
    'MissingScheduleError',
    'ScheduleEntry',
    'flights_to_frame',
    'load_flights',
    'project_flights',
]
