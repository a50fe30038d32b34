"""Abstract interface for flight data sources."""

from typing import Any, List, Optional, Protocol, runtime_checkable

from pvrflights.board.models import Direction, Flight


@runtime_checkable
class FlightSource(Protocol):
    """Protocol for pluggable upstream flight sources.

    fetch_flights returns records in the source's own shape; raw_to_flight
    maps one of them to a Flight, or None when it has no flight number.
    """

    def fetch_flights(self, direction: Direction) -> List[dict]:
        """Fetch raw records for 'arrival' or 'departure'."""
        ...

    def raw_to_flight(self, raw: dict, direction: Direction) -> Optional[Flight]:
        """Convert one raw record to a normalized Flight."""
        ...


def get_str(d: Optional[dict], *keys: str) -> Optional[str]:
    """First non-empty value among keys, stripped."""
    if not isinstance(d, dict):
        return None
    for k in keys:
        v = d.get(k)
        if v is not None and str(v).strip():
            return str(v).strip()
    return None


def get_dict(d: Optional[dict], key: str) -> dict:
    """Nested object at key, or an empty dict when absent or not an object."""
    if not isinstance(d, dict):
        return {}
    v: Any = d.get(key)
    return v if isinstance(v, dict) else {}
