"""Flight board package: sources, normalization pipeline and publishing."""

from pvrflights.board.config import BoardConfig
from pvrflights.board.errors import (
    ConfigError,
    FlightBoardError,
    ScrapeDegradation,
    UpstreamError,
)
from pvrflights.board.models import ARRIVAL, DEPARTURE, Flight, Snapshot
from pvrflights.board.service import BoardService

__all__ = [
    "ARRIVAL",
    "DEPARTURE",
    "BoardConfig",
    "BoardService",
    "ConfigError",
    "Flight",
    "FlightBoardError",
    "ScrapeDegradation",
    "Snapshot",
    "UpstreamError",
]
