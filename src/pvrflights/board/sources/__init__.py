"""Pluggable upstream flight sources."""

from pvrflights.board.config import AEROAPI, AVIATIONSTACK, SCRAPE, BoardConfig
from pvrflights.board.errors import ConfigError
from pvrflights.board.sources.aeroapi import AeroApiSource
from pvrflights.board.sources.aviationstack import AviationStackSource
from pvrflights.board.sources.base import FlightSource
from pvrflights.board.sources.flightaware_live import FlightAwareLiveSource


def create_source(config: BoardConfig) -> FlightSource:
    """Build the source selected by config.source."""
    if config.source == AVIATIONSTACK:
        return AviationStackSource(
            api_key=config.aviationstack_api_key,
            airport_code=config.airport.code,
            timeout=config.timeout,
        )
    if config.source == AEROAPI:
        return AeroApiSource(
            api_key=config.aeroapi_api_key,
            airport_icao=config.airport.icao,
            max_pages=config.aeroapi_max_pages,
            timeout=config.timeout,
        )
    if config.source == SCRAPE:
        return FlightAwareLiveSource(airport_icao=config.airport.icao)
    raise ConfigError(f"Unknown flight source: {config.source!r}")


__all__ = [
    "AeroApiSource",
    "AviationStackSource",
    "FlightAwareLiveSource",
    "FlightSource",
    "create_source",
]
