"""AviationStack REST API client (flights endpoint, filtered by airport).

Data source: https://aviationstack.com/ (free tier is HTTP only).
Requires an access key (AVIATIONSTACK_API_KEY env var).

One request per direction:
  Arrivals:   GET /v1/flights?access_key=...&arr_iata=PVR
  Departures: GET /v1/flights?access_key=...&dep_iata=PVR
"""

import logging
from typing import List, Optional

import requests

from pvrflights.board.errors import ConfigError, UpstreamError
from pvrflights.board.models import ARRIVAL, Direction, Flight
from pvrflights.board.sources.base import get_dict, get_str
from pvrflights.reference.airlines import airline_name
from pvrflights.reference.airports import PVR, get_airport
from pvrflights.reference.status import normalize_status_text

logger = logging.getLogger(__name__)

BASE_URL = "http://api.aviationstack.com/v1"
MAX_ROWS = 100


class AviationStackSource:
    """Flight data source using the AviationStack aggregator."""

    def __init__(
        self,
        api_key: Optional[str],
        airport_code: str = PVR.code,
        base_url: str = BASE_URL,
        timeout: int = 30,
    ):
        if not api_key:
            raise ConfigError(
                "AviationStack API key required. Set AVIATIONSTACK_API_KEY env var. "
                "Register free at https://aviationstack.com/"
            )
        self.api_key = api_key
        self.airport_code = airport_code
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def fetch_flights(self, direction: Direction) -> List[dict]:
        """Fetch raw flight records touching the airport in the given direction."""
        param = "arr_iata" if direction == ARRIVAL else "dep_iata"
        params = {
            "access_key": self.api_key,
            param: self.airport_code,
            "limit": str(MAX_ROWS),
        }
        try:
            resp = requests.get(f"{self.base_url}/flights", params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise UpstreamError(f"AviationStack request failed: {e}") from e

        if not resp.ok:
            raise UpstreamError(f"API request failed: {resp.status_code} {resp.reason}")
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError("AviationStack returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise UpstreamError("AviationStack returned an unexpected payload")
        if data.get("error"):
            err = data["error"]
            message = err.get("message") if isinstance(err, dict) else None
            raise UpstreamError(f"API error: {message or err}")

        records = data.get("data") or []
        logger.info("AviationStack %s: %d records", direction, len(records))
        return [r for r in records if isinstance(r, dict)]

    def raw_to_flight(self, raw: dict, direction: Direction) -> Optional[Flight]:
        """Convert an AviationStack record to a Flight."""
        flight = get_dict(raw, "flight")
        airline = get_dict(raw, "airline")
        airline_code = get_str(airline, "iata", "icao") or ""

        flight_number = get_str(flight, "iata", "icao")
        if not flight_number:
            number = get_str(flight, "number")
            if number and airline_code:
                flight_number = f"{airline_code}{number}"
        if not flight_number:
            return None

        arriving = direction == ARRIVAL
        # Times describe the board airport's side of the trip
        local = get_dict(raw, "arrival" if arriving else "departure")
        other = get_dict(raw, "departure" if arriving else "arrival")

        other_code = get_str(other, "iata", "icao") or ""
        other_name = get_str(other, "airport")
        if not other_name:
            info = get_airport(other_code)
            other_name = info.city if info else (other_code or "Unknown")

        return Flight(
            flight_number=flight_number,
            airline=get_str(airline, "name") or airline_name(airline_code),
            airline_code=airline_code,
            origin=other_name if arriving else None,
            origin_code=other_code if arriving else None,
            destination=None if arriving else other_name,
            destination_code=None if arriving else other_code,
            scheduled=get_str(local, "scheduled"),
            estimated=get_str(local, "estimated"),
            actual=get_str(local, "actual"),
            status=normalize_status_text(get_str(raw, "flight_status")),
            terminal=get_str(local, "terminal"),
            gate=get_str(local, "gate"),
        )
