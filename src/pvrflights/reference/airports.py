"""Airport descriptors for the board and its counterpart cities."""

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class AirportInfo:
    """Static airport descriptor published in every snapshot."""

    code: str
    icao: str
    name: str
    city: str
    timezone: str

    def to_dict(self) -> dict:
        return asdict(self)


PVR = AirportInfo(
    code="PVR",
    icao="MMPR",
    name="Gustavo Díaz Ordaz International Airport",
    city="Puerto Vallarta",
    timezone="America/Mexico_City",
)

# Frequent counterparts, used to fill in names when a source only gives codes
_AIRPORTS: dict[str, AirportInfo] = {
    a.code: a
    for a in (
        PVR,
        AirportInfo("MEX", "MMMX", "Mexico City International Airport", "Mexico City", "America/Mexico_City"),
        AirportInfo("GDL", "MMGL", "Guadalajara International Airport", "Guadalajara", "America/Mexico_City"),
        AirportInfo("MTY", "MMMY", "Monterrey International Airport", "Monterrey", "America/Monterrey"),
        AirportInfo("TIJ", "MMTJ", "Tijuana International Airport", "Tijuana", "America/Tijuana"),
        AirportInfo("LAX", "KLAX", "Los Angeles International Airport", "Los Angeles", "America/Los_Angeles"),
        AirportInfo("SFO", "KSFO", "San Francisco International Airport", "San Francisco", "America/Los_Angeles"),
        AirportInfo("SEA", "KSEA", "Seattle-Tacoma International Airport", "Seattle", "America/Los_Angeles"),
        AirportInfo("PHX", "KPHX", "Phoenix Sky Harbor International Airport", "Phoenix", "America/Phoenix"),
        AirportInfo("DFW", "KDFW", "Dallas/Fort Worth International Airport", "Dallas", "America/Chicago"),
        AirportInfo("IAH", "KIAH", "George Bush Intercontinental Airport", "Houston", "America/Chicago"),
        AirportInfo("ORD", "KORD", "O'Hare International Airport", "Chicago", "America/Chicago"),
        AirportInfo("DEN", "KDEN", "Denver International Airport", "Denver", "America/Denver"),
        AirportInfo("ATL", "KATL", "Hartsfield-Jackson Atlanta International Airport", "Atlanta", "America/New_York"),
        AirportInfo("MSP", "KMSP", "Minneapolis-Saint Paul International Airport", "Minneapolis", "America/Chicago"),
        AirportInfo("YVR", "CYVR", "Vancouver International Airport", "Vancouver", "America/Vancouver"),
        AirportInfo("YYC", "CYYC", "Calgary International Airport", "Calgary", "America/Edmonton"),
        AirportInfo("YYZ", "CYYZ", "Toronto Pearson International Airport", "Toronto", "America/Toronto"),
    )
}
_BY_ICAO: dict[str, AirportInfo] = {a.icao: a for a in _AIRPORTS.values()}


def get_airport(code: Optional[str]) -> Optional[AirportInfo]:
    """Look up an airport by IATA or ICAO code. Returns None if not found."""
    if not code:
        return None
    code = code.upper().strip()
    return _AIRPORTS.get(code) or _BY_ICAO.get(code)
