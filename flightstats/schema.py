# flightstats/schema.py

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from .errors import MissingScheduleError


@dataclass(frozen=True)
class ScheduleEntry:
    airport_name: Optional[str] = None
    scheduled_at: Optional[datetime] = None  # naive wall-clock time


@dataclass(frozen=True)
class FlightRecord:
    flight_number: Optional[str]
    iata_code: Optional[str]
    airline_name: Optional[str]
    departure: ScheduleEntry = field(default_factory=ScheduleEntry)
    arrival: ScheduleEntry = field(default_factory=ScheduleEntry)


@dataclass(frozen=True)
class FlightInfo:
    name: Optional[str]
    iata_code: Optional[str]
    airline: Optional[str]
    departure: Optional[datetime]
    arrival: Optional[datetime]
    origin: Optional[str]
    destination: Optional[str]
    duration: timedelta

    @classmethod
    def from_record(cls, record: FlightRecord, roll_overnight: bool = False, index: Optional[int] = None) -> "FlightInfo":
        """
        Flattens a FlightRecord and computes its scheduled duration.

        Args:
            record: The decoded flight.
            roll_overnight: Add one day to the arrival when it falls before the departure.
            index: Position of the record in its batch, reported on failure.

        Raises:
            MissingScheduleError: If either scheduled timestamp is absent.
        """
        departure = record.departure.scheduled_at
        arrival = record.arrival.scheduled_at

        missing = tuple(side for side, value in (('departure', departure), ('arrival', arrival)) if value is None)
        if missing:
            raise MissingScheduleError(missing, flight_number=record.flight_number, index=index)

        if roll_overnight and arrival < departure:
            arrival += timedelta(days=1)

        return cls(
            name=record.flight_number,
            iata_code=record.iata_code,
            airline=record.airline_name,
            departure=departure,
            arrival=arrival,
            origin=record.departure.airport_name,
            destination=record.arrival.airport_name,
            duration=arrival - departure,
        )
