"""Reference data lookups for airports, airlines, and flight status parsing."""

from pvrflights.reference.airlines import AirlineInfo, airline_name, carrier_prefix, get_airline
from pvrflights.reference.airports import PVR, AirportInfo, get_airport
from pvrflights.reference.status import (
    STATUS_PRIORITY,
    FlightStatus,
    infer_status,
    normalize_status_text,
)

__all__ = [
    "PVR",
    "STATUS_PRIORITY",
    "AirlineInfo",
    "AirportInfo",
    "FlightStatus",
    "airline_name",
    "carrier_prefix",
    "get_airline",
    "get_airport",
    "infer_status",
    "normalize_status_text",
]
