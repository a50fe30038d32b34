"""Statistics computation for a published snapshot."""

from dataclasses import dataclass, field
from typing import Any, Dict

import pandas as pd

from pvrflights.board.models import Snapshot


@dataclass
class BoardStats:
    """Container for board statistics."""

    arrivals: int = 0
    departures: int = 0
    by_airline: Dict[str, int] = field(default_factory=dict)
    status_summary: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def total_flights(self) -> int:
        return self.arrivals + self.departures

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_flights": self.total_flights,
            "arrivals": self.arrivals,
            "departures": self.departures,
            "by_airline": self.by_airline,
            "status_summary": self.status_summary,
        }

    def status_dataframe(self) -> pd.DataFrame:
        """Status counts as a DataFrame, one row per status and direction."""
        rows = [
            {"direction": direction, "status": status, "count": count}
            for direction, counts in sorted(self.status_summary.items())
            for status, count in sorted(counts.items())
        ]
        if not rows:
            return pd.DataFrame(columns=["direction", "status", "count"])
        return pd.DataFrame(rows)


def compute_stats(snapshot: Snapshot) -> BoardStats:
    """Compute statistics from a snapshot."""
    stats = BoardStats(arrivals=len(snapshot.arrivals), departures=len(snapshot.departures))

    for direction, flights in (("arrivals", snapshot.arrivals), ("departures", snapshot.departures)):
        counts: Dict[str, int] = {}
        for f in flights:
            if f.airline:
                stats.by_airline[f.airline] = stats.by_airline.get(f.airline, 0) + 1
            counts[f.status] = counts.get(f.status, 0) + 1
        if counts:
            stats.status_summary[direction] = counts

    return stats
