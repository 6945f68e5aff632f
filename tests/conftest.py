"""
Shared fixtures: small hand-built flight sets whose durations are easy to
check by hand.
"""
import json
from datetime import datetime

import pytest

from flightstats.schema import FlightRecord, ScheduleEntry


def _make_record(number='LH100', airline='Lufthansa', origin='Frankfurt', departure=None,
                 destination='Halle', arrival=None):
    return FlightRecord(
        flight_number=number,
        iata_code=number,
        airline_name=airline,
        departure=ScheduleEntry(origin, departure),
        arrival=ScheduleEntry(destination, arrival),
    )


@pytest.fixture
def make_record():
    return _make_record


@pytest.fixture
def lufthansa_records():
    """Two Lufthansa flights of 2h30 and 1h30."""
    return [
        _make_record('LH1', departure=datetime(2024, 1, 1, 10, 0), arrival=datetime(2024, 1, 1, 12, 30)),
        _make_record('LH2', departure=datetime(2024, 1, 2, 8, 0), arrival=datetime(2024, 1, 2, 9, 30)),
    ]


@pytest.fixture
def mixed_records():
    """
    Six flights covering the awkward cases:
    - LH1  Lufthansa        Frankfurt -> Halle                        150 min
    - LH2  Lufthansa        Queen Alia International -> Halle          90 min
    - RJ3  Royal Jordanian  Queen Alia International -> Frankfurt     270 min, departs 00:45
    - XX4  (no airline)     Halle -> Frankfurt                         45 min, departs 01:15
    - RJ5  Royal Jordanian  (no origin) -> Halle                      -40 min, arrival before departure
    - LH6  Lufthansa        Frankfurt -> Halle                         no scheduled arrival
    """
    return [
        _make_record('LH1', 'Lufthansa', 'Frankfurt', datetime(2024, 1, 1, 10, 0),
                     'Halle', datetime(2024, 1, 1, 12, 30)),
        _make_record('LH2', 'Lufthansa', 'Queen Alia International', datetime(2024, 1, 2, 8, 0),
                     'Halle', datetime(2024, 1, 2, 9, 30)),
        _make_record('RJ3', 'Royal Jordanian', 'Queen Alia International', datetime(2024, 1, 1, 0, 45),
                     'Frankfurt', datetime(2024, 1, 1, 5, 15)),
        _make_record('XX4', None, 'Halle', datetime(2024, 1, 3, 1, 15),
                     'Frankfurt', datetime(2024, 1, 3, 2, 0)),
        _make_record('RJ5', 'Royal Jordanian', None, datetime(2024, 1, 1, 23, 30),
                     'Halle', datetime(2024, 1, 1, 22, 50)),
        _make_record('LH6', 'Lufthansa', 'Frankfurt', datetime(2024, 1, 4, 9, 0),
                     'Halle', None),
    ]


@pytest.fixture
def flights_json(tmp_path):
    """Writes an aviationstack-style flight file and returns its path."""
    document = [
        {
            "flight": {"number": "400", "iata": "LH400"},
            "airline": {"name": "Lufthansa"},
            "departure": {"airport": "Frankfurt", "scheduled": "2024-01-01T10:00:00+00:00"},
            "arrival": {"airport": "Halle", "scheduled": "2024-01-01T12:30:00+00:00"},
        },
        {
            "flight": {"number": "401", "iata": "LH401"},
            "airline": {"name": "Lufthansa"},
            "departure": {"airport": "Frankfurt", "scheduled": "2024-01-02T08:00:00Z"},
            "arrival": {"airport": "Halle", "scheduled": "2024-01-02T09:30:00Z"},
        },
        {
            "flight": {"number": "130", "iata": "RJ130"},
            "airline": {"name": "Royal Jordanian"},
            "departure": {"airport": "Queen Alia International", "scheduled": "2024-01-01T00:45:00"},
            "arrival": {"airport": "Halle", "scheduled": "2024-01-01T05:15:00"},
        },
        {
            "flight": {"number": "999", "iata": None},
            "airline": None,
            "departure": {"airport": "Halle", "scheduled": "2024-01-03T07:00:00"},
            "arrival": {"airport": None, "scheduled": None},
        },
    ]
    path = tmp_path / "flights.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)
