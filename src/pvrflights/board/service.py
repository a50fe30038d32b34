"""Board service - fetch both directions, normalize, assemble, persist."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Dict, List, Optional

from pvrflights.board.config import BoardConfig
from pvrflights.board.models import ARRIVAL, DEGRADED_MESSAGE, DEPARTURE, DIRECTIONS, Snapshot
from pvrflights.board.pipeline import NormalizeReport, assemble, local_today, normalize
from pvrflights.board.sources import FlightSource, create_source
from pvrflights.board.storage import write_snapshot

logger = logging.getLogger(__name__)


class BoardService:
    """Runs one scheduled refresh of the flight board."""

    def __init__(self, config: BoardConfig, source: Optional[FlightSource] = None, sleep=time.sleep):
        self.config = config
        self._source = source
        self._sleep = sleep
        self.reports: Dict[str, NormalizeReport] = {}

    @property
    def source(self) -> FlightSource:
        if self._source is None:
            self._source = create_source(self.config)
        return self._source

    def run(self, now: Optional[datetime] = None) -> Snapshot:
        """Build and write today's snapshot.

        Any failure writes a degraded snapshot (empty lists, error set)
        before the exception propagates.
        """
        now = now or datetime.now(timezone.utc)
        try:
            snapshot = self.build(now)
        except Exception as e:
            logger.exception("Flight fetch failed: %s", e)
            degraded = Snapshot.degraded(
                self.config.airport, f"{DEGRADED_MESSAGE} ({e})", now=now
            )
            write_snapshot(degraded, self.config.output_path)
            raise
        write_snapshot(snapshot, self.config.output_path)
        return snapshot

    def build(self, now: datetime) -> Snapshot:
        """Fetch and normalize both directions without writing anything."""
        source = self.source
        raw = self.fetch_all(source)

        airport = self.config.airport
        today = local_today(airport.timezone, now)
        arrivals, self.reports[ARRIVAL] = normalize(
            source, raw[ARRIVAL], ARRIVAL, airport.timezone, today
        )
        departures, self.reports[DEPARTURE] = normalize(
            source, raw[DEPARTURE], DEPARTURE, airport.timezone, today
        )
        return assemble(airport, arrivals, departures, now=now)

    def fetch_all(self, source: FlightSource) -> Dict[str, List[dict]]:
        """Raw records for both directions; returns once both are done."""
        if self.config.fetch_concurrently:
            with ThreadPoolExecutor(max_workers=len(DIRECTIONS)) as executor:
                futures = {d: executor.submit(source.fetch_flights, d) for d in DIRECTIONS}
                return {d: future.result() for d, future in futures.items()}

        raw: Dict[str, List[dict]] = {}
        for i, direction in enumerate(DIRECTIONS):
            if i and self.config.request_delay > 0:
                self._sleep(self.config.request_delay)
            raw[direction] = source.fetch_flights(direction)
        return raw
