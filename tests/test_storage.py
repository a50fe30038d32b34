"""Unit tests for snapshot persistence."""

import json

from pvrflights.board.models import Flight, Snapshot
from pvrflights.board.storage import read_snapshot, write_snapshot
from pvrflights.reference.airports import PVR


class TestWriteSnapshot:
    """Tests for write_snapshot / read_snapshot."""

    def test_creates_parent_dirs_and_pretty_prints(self, tmp_path) -> None:
        path = tmp_path / "nested" / "data" / "flights.json"
        snap = Snapshot(last_updated="2026-10-19T18:00:00Z", airport=PVR)

        write_snapshot(snap, path)

        text = path.read_text(encoding="utf-8")
        assert text.startswith('{\n  "lastUpdated"')
        # Non-ASCII airport name is written as UTF-8, not escaped
        assert "Díaz" in text
        assert read_snapshot(path) == snap.to_dict()

    def test_degraded_snapshot_is_valid_json(self, tmp_path) -> None:
        path = tmp_path / "flights.json"
        write_snapshot(Snapshot.degraded(PVR, "Failed to fetch flight data."), path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {"lastUpdated", "airport", "arrivals", "departures", "error"}
        assert data["error"]

    def test_flights_round_trip(self, tmp_path) -> None:
        path = tmp_path / "flights.json"
        flight = Flight("AM123", "Aeromexico", "AM", "16:05", "Landed", origin="LAX", origin_code="LAX")
        write_snapshot(Snapshot(last_updated="x", airport=PVR, arrivals=[flight]), path)
        assert read_snapshot(path)["arrivals"][0]["status"] == "Landed"
