"""Airline lookup by IATA or ICAO carrier code."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class AirlineInfo:
    """Airline details from reference data."""

    iata: str
    icao: str
    name: str
    country: str


# Carriers seen at PVR; sources that only send a code are resolved against this
_AIRLINE_ROWS: list[AirlineInfo] = [
    AirlineInfo("AM", "AMX", "Aeromexico", "Mexico"),
    AirlineInfo("5D", "SLI", "Aeromexico Connect", "Mexico"),
    AirlineInfo("Y4", "VOI", "Volaris", "Mexico"),
    AirlineInfo("VB", "VIV", "Viva Aerobus", "Mexico"),
    AirlineInfo("TW", "TWB", "TAR Aerolineas", "Mexico"),
    AirlineInfo("AS", "ASA", "Alaska Airlines", "United States"),
    AirlineInfo("AA", "AAL", "American Airlines", "United States"),
    AirlineInfo("UA", "UAL", "United Airlines", "United States"),
    AirlineInfo("DL", "DAL", "Delta Air Lines", "United States"),
    AirlineInfo("WN", "SWA", "Southwest Airlines", "United States"),
    AirlineInfo("B6", "JBU", "JetBlue", "United States"),
    AirlineInfo("F9", "FFT", "Frontier Airlines", "United States"),
    AirlineInfo("SY", "SCX", "Sun Country Airlines", "United States"),
    AirlineInfo("AC", "ACA", "Air Canada", "Canada"),
    AirlineInfo("RV", "ROU", "Air Canada Rouge", "Canada"),
    AirlineInfo("WS", "WJA", "WestJet", "Canada"),
    AirlineInfo("TS", "TSC", "Air Transat", "Canada"),
    AirlineInfo("F8", "FLE", "Flair Airlines", "Canada"),
    AirlineInfo("WG", "SWG", "Sunwing Airlines", "Canada"),
    AirlineInfo("PD", "POE", "Porter Airlines", "Canada"),
]

_BY_IATA: dict[str, AirlineInfo] = {row.iata: row for row in _AIRLINE_ROWS}
_BY_ICAO: dict[str, AirlineInfo] = {row.icao: row for row in _AIRLINE_ROWS}


def get_airline(code: Optional[str]) -> Optional[AirlineInfo]:
    """Look up airline by 2-letter IATA or 3-letter ICAO code. Returns None if not found."""
    if not code:
        return None
    code = code.upper().strip()
    if len(code) == 3:
        return _BY_ICAO.get(code) or _BY_IATA.get(code)
    return _BY_IATA.get(code) or _BY_ICAO.get(code)


def airline_name(code: Optional[str], default: str = "Unknown Airline") -> str:
    """Display name for a carrier code: table name, else the raw code, else default."""
    info = get_airline(code)
    if info is not None:
        return info.name
    if code and code.strip():
        return code.strip().upper()
    return default


def carrier_prefix(flight_number: Optional[str]) -> Optional[str]:
    """Carrier code embedded in a flight number, e.g. 'AMX123' -> 'AMX', 'Y4 1020' -> 'Y4'."""
    if not flight_number:
        return None
    fn = flight_number.replace(" ", "").upper()
    for length in (3, 2):
        prefix = fn[:length]
        if len(fn) > length and fn[length].isdigit() and get_airline(prefix) is not None:
            return prefix
    return None
