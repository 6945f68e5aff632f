import json
import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from .errors import DecodeError
from .schema import FlightRecord, ScheduleEntry

logger = logging.getLogger(__name__)


def _section(obj: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = obj.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def _text(section: Dict[str, Any], key: str) -> Optional[str]:
    value = section.get(key)
    if value is None:
        return None
    return str(value)


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parses an ISO 8601 timestamp into a naive wall-clock datetime.

    Accepts '2024-01-01T10:00:00', '2024-01-01T10:00:00Z' or a '+01:00' style
    offset. Any offset is dropped without conversion, so the local time as
    written in the source is kept.
    """
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {type(value).__name__}")
    s = value.strip()
    if s.endswith('Z'):
        s = s[:-1] + '+00:00'
    return datetime.fromisoformat(s).replace(tzinfo=None)


def parse_flight(obj: Dict[str, Any]) -> FlightRecord:
    """Converts one decoded flight object into a FlightRecord."""
    if not isinstance(obj, dict):
        raise ValueError(f"flight entry must be an object, got {type(obj).__name__}")

    flight = _section(obj, 'flight')
    airline = _section(obj, 'airline')
    departure = _section(obj, 'departure')
    arrival = _section(obj, 'arrival')

    return FlightRecord(
        flight_number=_text(flight, 'number'),
        iata_code=_text(flight, 'iata'),
        airline_name=_text(airline, 'name'),
        departure=ScheduleEntry(
            airport_name=_text(departure, 'airport'),
            scheduled_at=parse_timestamp(departure.get('scheduled')),
        ),
        arrival=ScheduleEntry(
            airport_name=_text(arrival, 'airport'),
            scheduled_at=parse_timestamp(arrival.get('scheduled')),
        ),
    )


def parse_flights(document: Any, source: Optional[str] = None) -> List[FlightRecord]:
    """
    Converts a decoded JSON document into FlightRecords.

    Args:
        document: Either a list of flight objects or an object holding them under 'data'.
        source: Name used in error messages.

    Raises:
        DecodeError: If the document or any entry is malformed.
    """
    if isinstance(document, dict) and 'data' in document:
        document = document['data']
    if not isinstance(document, list):
        raise DecodeError(f"expected a list of flights, got {type(document).__name__}", source)

    records = []
    for i, obj in enumerate(document):
        try:
            records.append(parse_flight(obj))
        except ValueError as e:
            raise DecodeError(f"flight {i}: {e}", source) from e
    return records


def load_flights(path: str) -> List[FlightRecord]:
    """
    Loads flight records from a JSON file.

    Args:
        path: The path to the JSON file.

    Returns:
        The decoded FlightRecords, in file order.

    Raises:
        DecodeError: If the file cannot be read or is not a valid flight document.
    """
    logger.info("Reading flights from %s", path)
    if not os.path.exists(path):
        raise DecodeError("file not found", path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise DecodeError(f"invalid JSON ({e})", path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise DecodeError(f"could not read file ({e})", path) from e

    records = parse_flights(document, source=path)
    logger.info("Loaded %d flight records", len(records))
    return records
