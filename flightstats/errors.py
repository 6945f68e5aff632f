from typing import Optional, Tuple


class FlightDataError(Exception):
    """Base class for errors raised while reading or projecting flight data."""


class DecodeError(FlightDataError):
    """The flight source could not be read or does not have the expected shape."""

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class MissingScheduleError(FlightDataError):
    """A flight lacks the scheduled departure or arrival needed for its duration."""

    def __init__(self, missing: Tuple[str, ...], flight_number: Optional[str] = None, index: Optional[int] = None):
        self.missing = missing
        self.flight_number = flight_number
        self.index = index
        where = f"record {index}" if index is not None else "record"
        if flight_number:
            where += f" (flight {flight_number})"
        super().__init__(f"{where} has no scheduled {' or '.join(missing)} time")


class ConfigError(FlightDataError):
    """A setting read from the environment has a value that cannot be used."""
