"""Unit tests for BoardService orchestration and persistence."""

import json
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from pvrflights.board.config import BoardConfig
from pvrflights.board.errors import ConfigError, UpstreamError
from pvrflights.board.models import Flight
from pvrflights.board.service import BoardService

NOW = datetime(2026, 10, 19, 18, 0, tzinfo=timezone.utc)


def _raw(number: str, scheduled: str = "2026-10-19T10:00:00-06:00", status: str = "Scheduled") -> dict:
    return {"number": number, "scheduled": scheduled, "status": status}


def _to_flight(raw: dict, direction: str) -> Flight:
    if not raw["number"]:
        return None
    arriving = direction == "arrival"
    return Flight(
        flight_number=raw["number"],
        airline="Test Air",
        airline_code="TA",
        origin="Guadalajara" if arriving else None,
        origin_code="GDL" if arriving else None,
        destination=None if arriving else "Tijuana",
        destination_code=None if arriving else "TIJ",
        scheduled=raw["scheduled"],
        status=raw["status"],
    )


def _mock_source(arrivals, departures) -> MagicMock:
    source = MagicMock()
    source.fetch_flights.side_effect = lambda d: arrivals if d == "arrival" else departures
    source.raw_to_flight.side_effect = _to_flight
    return source


class TestBoardServiceRun:
    """Tests for BoardService.run with a mocked source."""

    def test_writes_snapshot(self, tmp_path) -> None:
        out = tmp_path / "data" / "flights.json"
        source = _mock_source(
            [_raw("TA2", "2026-10-19T12:00:00-06:00"), _raw("TA1"), _raw("")],
            [_raw("TA9", "2026-10-20T01:00:00-06:00"), _raw("TA3")],
        )
        service = BoardService(BoardConfig(output_path=out), source=source)
        snapshot = service.run(now=NOW)

        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["lastUpdated"] == "2026-10-19T18:00:00Z"
        assert data["airport"]["code"] == "PVR"
        assert [f["flightNumber"] for f in data["arrivals"]] == ["TA1", "TA2"]
        assert [f["flightNumber"] for f in data["departures"]] == ["TA3"]
        assert "error" not in data
        assert len(snapshot.arrivals) == 2

        assert service.reports["arrival"].missing_flight_number == 1
        assert service.reports["departure"].other_day == 1

    def test_overwrites_previous_file(self, tmp_path) -> None:
        out = tmp_path / "flights.json"
        out.write_text('{"stale": true, "arrivals": [1, 2, 3]}', encoding="utf-8")
        service = BoardService(BoardConfig(output_path=out), source=_mock_source([], []))
        service.run(now=NOW)

        data = json.loads(out.read_text(encoding="utf-8"))
        assert "stale" not in data
        assert data["arrivals"] == [] and data["departures"] == []
        assert list(tmp_path.iterdir()) == [out]

    def test_upstream_failure_writes_degraded_snapshot(self, tmp_path) -> None:
        out = tmp_path / "flights.json"
        source = MagicMock()
        source.fetch_flights.side_effect = UpstreamError("API request failed: 500 Server Error")
        service = BoardService(BoardConfig(output_path=out), source=source)

        with pytest.raises(UpstreamError):
            service.run(now=NOW)

        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["arrivals"] == []
        assert data["departures"] == []
        assert "500 Server Error" in data["error"]
        assert data["error"].startswith("Failed to fetch flight data.")
        assert data["airport"]["icao"] == "MMPR"

    def test_failure_log_keeps_traceback(self, tmp_path, caplog) -> None:
        source = MagicMock()
        source.fetch_flights.side_effect = KeyError("departure")
        service = BoardService(
            BoardConfig(concurrent_fetch=False, request_delay=0, output_path=tmp_path / "f.json"),
            source=source,
        )

        with caplog.at_level("ERROR"), pytest.raises(KeyError):
            service.run(now=NOW)

        records = [r for r in caplog.records if r.name == "pvrflights.board.service"]
        assert records and records[0].exc_info is not None
        assert "Traceback" in caplog.text

    def test_missing_key_writes_degraded_snapshot(self, tmp_path) -> None:
        out = tmp_path / "flights.json"
        service = BoardService(BoardConfig(source="aviationstack", output_path=out))

        with pytest.raises(ConfigError):
            service.run(now=NOW)

        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["arrivals"] == [] and data["departures"] == []
        assert "AVIATIONSTACK_API_KEY" in data["error"]

    def test_one_direction_empty_is_not_degraded(self, tmp_path) -> None:
        out = tmp_path / "flights.json"
        source = _mock_source([], [_raw("TA3")])
        BoardService(BoardConfig(source="scrape", output_path=out), source=source).run(now=NOW)

        data = json.loads(out.read_text(encoding="utf-8"))
        assert "error" not in data
        assert data["arrivals"] == []
        assert len(data["departures"]) == 1


class TestBoardServiceFetch:
    """Tests for fetch_all scheduling."""

    def test_concurrent_fetch_gets_both_directions(self) -> None:
        source = _mock_source([_raw("A")], [_raw("D")])
        sleep = MagicMock()
        service = BoardService(BoardConfig(concurrent_fetch=True), source=source, sleep=sleep)

        raw = service.fetch_all(source)

        assert raw == {"arrival": [_raw("A")], "departure": [_raw("D")]}
        sleep.assert_not_called()

    def test_sequential_fetch_pauses_between_requests(self) -> None:
        source = _mock_source([], [])
        sleep = MagicMock()
        config = BoardConfig(source="scrape", request_delay=1.5)
        service = BoardService(config, source=source, sleep=sleep)

        service.fetch_all(source)

        assert [c.args[0] for c in source.fetch_flights.call_args_list] == ["arrival", "departure"]
        sleep.assert_called_once_with(1.5)

    def test_concurrent_failure_propagates(self) -> None:
        source = MagicMock()
        source.fetch_flights.side_effect = UpstreamError("boom")
        service = BoardService(BoardConfig(concurrent_fetch=True), source=source)
        with pytest.raises(UpstreamError, match="boom"):
            service.fetch_all(source)
