"""FlightAware AeroAPI client (airport flights endpoint).

Data source: https://www.flightaware.com/aeroapi/
Requires an API key (FLIGHTAWARE_API_KEY env var), sent as the x-apikey header.

A single request returns the whole airport board, split server-side:
  GET /airports/{icao}/flights?max_pages=N
  -> {arrivals, departures, scheduled_arrivals, scheduled_departures}
Both directions share that one response.
"""

import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from pvrflights.board.errors import ConfigError, UpstreamError
from pvrflights.board.models import ARRIVAL, DEPARTURE, Direction, Flight
from pvrflights.board.sources.base import get_dict, get_str
from pvrflights.reference.airlines import airline_name, carrier_prefix
from pvrflights.reference.airports import PVR
from pvrflights.reference.status import infer_status

logger = logging.getLogger(__name__)

BASE_URL = "https://aeroapi.flightaware.com/aeroapi"

_BUCKETS = {
    ARRIVAL: ("arrivals", "scheduled_arrivals"),
    DEPARTURE: ("departures", "scheduled_departures"),
}


class AeroApiSource:
    """Flight data source using FlightAware AeroAPI."""

    def __init__(
        self,
        api_key: Optional[str],
        airport_icao: str = PVR.icao,
        base_url: str = BASE_URL,
        max_pages: int = 2,
        timeout: int = 30,
    ):
        if not api_key:
            raise ConfigError(
                "FlightAware AeroAPI key required. Set FLIGHTAWARE_API_KEY env var."
            )
        self.api_key = api_key
        self.airport_icao = airport_icao
        self.base_url = base_url.rstrip("/")
        self.max_pages = max_pages
        self.timeout = timeout
        self._payload: Optional[Dict[str, Any]] = None
        self._lock = threading.Lock()

    def fetch_flights(self, direction: Direction) -> List[dict]:
        """Raw records for one direction, live bucket first, then scheduled."""
        payload = self._airport_payload()
        records: List[dict] = []
        for bucket in _BUCKETS[direction]:
            items = payload.get(bucket) or []
            records.extend(r for r in items if isinstance(r, dict))
        logger.info("AeroAPI %s: %d records", direction, len(records))
        return records

    def _airport_payload(self) -> Dict[str, Any]:
        """Fetch the airport board once; later calls reuse it."""
        with self._lock:
            if self._payload is None:
                self._payload = self._request()
            return self._payload

    def _request(self) -> Dict[str, Any]:
        url = f"{self.base_url}/airports/{self.airport_icao}/flights"
        try:
            resp = requests.get(
                url,
                params={"max_pages": str(self.max_pages)},
                headers={"x-apikey": self.api_key, "Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"AeroAPI request failed: {e}") from e

        if not resp.ok:
            raise UpstreamError(f"AeroAPI request failed: {resp.status_code} {resp.reason}")
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError("AeroAPI returned a non-JSON body") from e
        if not isinstance(data, dict):
            raise UpstreamError("AeroAPI returned an unexpected payload")
        return data

    def raw_to_flight(self, raw: dict, direction: Direction) -> Optional[Flight]:
        """Convert an AeroAPI flight object to a Flight."""
        flight_number = get_str(raw, "ident_iata", "ident_icao", "ident")
        if not flight_number:
            return None

        arriving = direction == ARRIVAL
        other = get_dict(raw, "origin" if arriving else "destination")
        other_code = get_str(other, "code_iata", "code_icao", "code") or ""
        other_name = get_str(other, "city", "name") or other_code or "Unknown"

        airline_code = (
            get_str(raw, "operator_iata", "operator_icao", "operator")
            or carrier_prefix(flight_number)
            or ""
        )

        if arriving:
            scheduled = get_str(raw, "scheduled_in", "scheduled_on")
            estimated = get_str(raw, "estimated_in", "estimated_on")
            actual = get_str(raw, "actual_in", "actual_on")
            terminal = get_str(raw, "terminal_destination")
            gate = get_str(raw, "gate_destination")
        else:
            scheduled = get_str(raw, "scheduled_out", "scheduled_off")
            estimated = get_str(raw, "estimated_out", "estimated_off")
            actual = get_str(raw, "actual_out", "actual_off")
            terminal = get_str(raw, "terminal_origin")
            gate = get_str(raw, "gate_origin")

        status = infer_status(
            arrival=arriving,
            cancelled=bool(raw.get("cancelled")),
            diverted=bool(raw.get("diverted")),
            actual_arrival=actual if arriving else None,
            actual_departure=get_str(raw, "actual_off", "actual_out"),
        )

        return Flight(
            flight_number=flight_number,
            airline=airline_name(airline_code),
            airline_code=airline_code,
            origin=other_name if arriving else None,
            origin_code=other_code if arriving else None,
            destination=None if arriving else other_name,
            destination_code=None if arriving else other_code,
            scheduled=scheduled,
            estimated=estimated,
            actual=actual,
            status=status,
            terminal=terminal,
            gate=gate,
        )
