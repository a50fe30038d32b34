"""Data models for the flight board."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pvrflights.reference.airports import AirportInfo

Direction = Literal["arrival", "departure"]
ARRIVAL: Direction = "arrival"
DEPARTURE: Direction = "departure"
DIRECTIONS: tuple = (ARRIVAL, DEPARTURE)

DEGRADED_MESSAGE = "Failed to fetch flight data. Will retry on next scheduled run."


@dataclass
class Flight:
    """Normalized flight record.

    Arrivals carry origin fields, departures carry destination fields;
    the other pair stays None.
    """

    flight_number: str
    airline: str
    airline_code: str
    scheduled: Optional[str]
    status: str
    origin: Optional[str] = None
    origin_code: Optional[str] = None
    destination: Optional[str] = None
    destination_code: Optional[str] = None
    estimated: Optional[str] = None
    actual: Optional[str] = None
    terminal: Optional[str] = None
    gate: Optional[str] = None

    @property
    def direction(self) -> Direction:
        return ARRIVAL if self.origin is not None else DEPARTURE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the published JSON shape."""
        return {
            "flightNumber": self.flight_number,
            "airline": self.airline,
            "airlineCode": self.airline_code,
            "origin": self.origin,
            "originCode": self.origin_code,
            "destination": self.destination,
            "destinationCode": self.destination_code,
            "scheduled": self.scheduled,
            "estimated": self.estimated,
            "actual": self.actual,
            "status": self.status,
            "terminal": self.terminal,
            "gate": self.gate,
        }


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with a Z suffix, e.g. 2026-10-19T18:00:00Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


@dataclass
class Snapshot:
    """The published board: one day of arrivals and departures."""

    last_updated: str
    airport: AirportInfo
    arrivals: List[Flight] = field(default_factory=list)
    departures: List[Flight] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def degraded(
        cls, airport: AirportInfo, error: str, now: Optional[datetime] = None
    ) -> "Snapshot":
        """Empty snapshot flagged with an error, written when a run fails."""
        return cls(last_updated=utc_timestamp(now), airport=airport, error=error or DEGRADED_MESSAGE)

    def flights(self, direction: Direction) -> List[Flight]:
        return self.arrivals if direction == ARRIVAL else self.departures

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "lastUpdated": self.last_updated,
            "airport": self.airport.to_dict(),
            "arrivals": [f.to_dict() for f in self.arrivals],
            "departures": [f.to_dict() for f in self.departures],
        }
        if self.error is not None:
            data["error"] = self.error
        return data

    def to_dataframe(self, direction: Direction = ARRIVAL):
        """Convert one direction to a pandas DataFrame."""
        import pandas as pd

        city_key = "origin" if direction == ARRIVAL else "destination"
        columns = ["scheduled", "flightNumber", "airline", city_key, "status", "gate"]
        flights = self.flights(direction)
        if not flights:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame([{k: f.to_dict()[k] for k in columns} for f in flights])
