"""Normalization pipeline: raw records -> today's deduplicated, ordered flights."""

import logging
import re
from dataclasses import asdict, dataclass
from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from pvrflights.board.models import Direction, Flight, Snapshot, utc_timestamp
from pvrflights.board.sources.base import FlightSource
from pvrflights.reference.airports import AirportInfo
from pvrflights.reference.status import status_priority

logger = logging.getLogger(__name__)

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


@dataclass
class NormalizeReport:
    """Counts for one direction of one run."""

    direction: str
    raw: int = 0
    missing_flight_number: int = 0
    unresolved_time: int = 0
    other_day: int = 0
    duplicates: int = 0
    kept: int = 0

    @property
    def dropped(self) -> int:
        return self.missing_flight_number + self.unresolved_time + self.other_day + self.duplicates

    def to_dict(self) -> dict:
        return asdict(self)


def local_today(tz_name: str, now: Optional[datetime] = None) -> date:
    """Current calendar date in the airport's timezone."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(ZoneInfo(tz_name)).date()


def resolve_local(value: Optional[str], tz_name: str, today: date) -> Optional[datetime]:
    """Parse a source timestamp into an aware datetime in the airport zone.

    Accepts ISO-8601 with an offset or Z (converted), naive ISO-8601 (read
    as airport-local), and bare 'HH:MM' local times (placed on today).
    Returns None when nothing can be parsed.
    """
    if not value or not isinstance(value, str):
        return None
    s = value.strip()
    if not s:
        return None
    tz = ZoneInfo(tz_name)

    m = _CLOCK_RE.match(s)
    if m:
        hour, minute, second = int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)
        if hour > 23 or minute > 59 or second > 59:
            return None
        return datetime.combine(today, time(hour, minute, second), tzinfo=tz)

    if s[-1] in "Zz":
        s = s[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(s)
    except ValueError:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def _flight_key(flight_number: str) -> str:
    return "".join(flight_number.split()).upper()


def sort_key(flight: Flight, tz_name: str, today: date) -> Tuple[int, float, str]:
    """Ascending by scheduled time; unparseable times last, then by flight number."""
    dt = resolve_local(flight.scheduled, tz_name, today)
    if dt is None:
        return (1, 0.0, _flight_key(flight.flight_number))
    return (0, dt.timestamp(), _flight_key(flight.flight_number))


def sort_flights(flights: Iterable[Flight], tz_name: str, today: date) -> List[Flight]:
    return sorted(flights, key=lambda f: sort_key(f, tz_name, today))


def dedupe(flights: Iterable[Flight], tz_name: str, today: date) -> List[Flight]:
    """Keep one record per flight number.

    The winner has the highest status priority (Landed/Departed first,
    Cancelled last), then the earliest scheduled time, then first seen.
    """
    best: dict = {}
    for index, flight in enumerate(flights):
        dt = resolve_local(flight.scheduled, tz_name, today)
        rank = (
            -status_priority(flight.status),
            dt.timestamp() if dt is not None else float("inf"),
            index,
        )
        key = _flight_key(flight.flight_number)
        current = best.get(key)
        if current is None or rank < current[0]:
            best[key] = (rank, flight)
    return [flight for _, flight in best.values()]


def normalize(
    source: FlightSource,
    raws: Iterable[dict],
    direction: Direction,
    tz_name: str,
    today: date,
) -> Tuple[List[Flight], NormalizeReport]:
    """Map, filter to today, dedupe and sort one direction's raw records."""
    report = NormalizeReport(direction=direction)
    todays: List[Flight] = []

    for raw in raws:
        report.raw += 1
        flight = source.raw_to_flight(raw, direction)
        if flight is None or not flight.flight_number.strip():
            report.missing_flight_number += 1
            continue
        scheduled = resolve_local(flight.scheduled, tz_name, today)
        if scheduled is None:
            report.unresolved_time += 1
            logger.debug("Dropping %s: no usable scheduled time (%r)", flight.flight_number, flight.scheduled)
            continue
        if scheduled.date() != today:
            report.other_day += 1
            continue
        todays.append(flight)

    unique = dedupe(todays, tz_name, today)
    report.duplicates = len(todays) - len(unique)
    flights = sort_flights(unique, tz_name, today)
    report.kept = len(flights)
    logger.info(
        "%s: %d raw -> %d kept (%d dropped)", direction, report.raw, report.kept, report.dropped
    )
    return flights, report


def assemble(
    airport: AirportInfo,
    arrivals: List[Flight],
    departures: List[Flight],
    now: Optional[datetime] = None,
) -> Snapshot:
    """Combine both directions into a fresh snapshot."""
    return Snapshot(
        last_updated=utc_timestamp(now),
        airport=airport,
        arrivals=list(arrivals),
        departures=list(departures),
    )
