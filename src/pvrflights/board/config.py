"""Run configuration, built once and passed to sources, pipeline and service."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from pvrflights.board.errors import ConfigError
from pvrflights.reference.airports import PVR, AirportInfo

AVIATIONSTACK = "aviationstack"
AEROAPI = "aeroapi"
SCRAPE = "scrape"
SOURCES = (AVIATIONSTACK, AEROAPI, SCRAPE)

DEFAULT_OUTPUT_PATH = Path("data") / "flights.json"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class BoardConfig:
    """Settings for one scheduled run."""

    source: str = AVIATIONSTACK
    aviationstack_api_key: Optional[str] = None
    aeroapi_api_key: Optional[str] = None
    output_path: Path = DEFAULT_OUTPUT_PATH
    concurrent_fetch: Optional[bool] = None
    request_delay: float = 2.0
    aeroapi_max_pages: int = 2
    timeout: int = 30
    airport: AirportInfo = field(default=PVR)

    def __post_init__(self):
        if self.source not in SOURCES:
            raise ConfigError(
                f"Unknown flight source: {self.source!r}. Expected one of {', '.join(SOURCES)}"
            )

    @property
    def fetch_concurrently(self) -> bool:
        """Scrape targets are fetched one direction at a time unless asked otherwise."""
        if self.concurrent_fetch is None:
            return self.source != SCRAPE
        return self.concurrent_fetch

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "BoardConfig":
        """Build config from environment variables; keyword overrides win."""
        env = os.environ if environ is None else environ
        values = {
            "source": (env.get("PVR_FLIGHT_SOURCE") or AVIATIONSTACK).strip().lower(),
            "aviationstack_api_key": env.get("AVIATIONSTACK_API_KEY") or None,
            "aeroapi_api_key": env.get("FLIGHTAWARE_API_KEY") or None,
            "output_path": output_path_from_env(env),
            "concurrent_fetch": _parse_bool(env.get("PVR_CONCURRENT_FETCH"), "PVR_CONCURRENT_FETCH"),
            "request_delay": _parse_number(env.get("PVR_REQUEST_DELAY"), "PVR_REQUEST_DELAY", float, 2.0),
            "aeroapi_max_pages": _parse_number(
                env.get("PVR_AEROAPI_MAX_PAGES"), "PVR_AEROAPI_MAX_PAGES", int, 2
            ),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _parse_bool(value: Optional[str], name: str) -> Optional[bool]:
    if value is None or not value.strip():
        return None
    v = value.strip().lower()
    if v in _TRUE:
        return True
    if v in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {value!r}")


def _parse_number(value: Optional[str], name: str, kind, default):
    if value is None or not value.strip():
        return default
    try:
        return kind(value.strip())
    except ValueError:
        raise ConfigError(f"Invalid number for {name}: {value!r}") from None


def output_path_from_env(
    environ: Optional[Mapping[str, str]] = None, override: Optional[str] = None
) -> Path:
    """Snapshot path: explicit override, then PVR_OUTPUT_PATH, then the default."""
    env = os.environ if environ is None else environ
    return Path(override or env.get("PVR_OUTPUT_PATH") or DEFAULT_OUTPUT_PATH)
