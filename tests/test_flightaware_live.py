"""Unit tests for the FlightAware live board scraper (browser mocked)."""

import subprocess
import sys
import threading
from unittest.mock import MagicMock, patch

import pytest
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.common.by import By

from pvrflights.board.errors import UpstreamError
from pvrflights.board.sources.flightaware_live import (
    NO_FLIGHTS_XPATH,
    TABLE_SELECTOR,
    FlightAwareLiveSource,
    create_driver,
    parse_time,
)


def _element(text: str = "") -> MagicMock:
    el = MagicMock()
    el.text = text
    return el


def _row(ident: str, city: str, times: str, status: str) -> MagicMock:
    cells = [_element(ident), _element(city), _element(times), _element(status)]
    links = [_element(ident)] if ident else []
    row = _element(f"{ident} {city} {times} {status}")
    row.find_elements.side_effect = lambda by, value: cells if value == "td" else links
    return row


def _driver(rows=None, no_flights: bool = False, title: str = "PVR Arrivals", page: str = "<html></html>") -> MagicMock:
    table = MagicMock()
    table.find_elements.return_value = rows or []

    def find_elements(by, value):
        if by == By.CSS_SELECTOR and value == TABLE_SELECTOR:
            return [table] if rows is not None else []
        if by == By.XPATH and value == NO_FLIGHTS_XPATH:
            return [_element("No flights")] if no_flights else []
        return []

    driver = MagicMock()
    driver.title = title
    driver.page_source = page
    driver.find_elements.side_effect = find_elements
    return driver


class TestParseTime:
    """Tests for parse_time."""

    def test_24h(self) -> None:
        assert parse_time("Mon 14:05 CST") == "14:05"

    def test_12h(self) -> None:
        assert parse_time("Mon 02:30PM CST 04:10PM") == "14:30"
        assert parse_time("12:15am") == "00:15"
        assert parse_time("12:15 pm") == "12:15"

    def test_none(self) -> None:
        assert parse_time("no time here") is None
        assert parse_time(None) is None


class TestFlightAwareLiveFetchFlights:
    """Tests for fetch_flights with a mocked browser."""

    def test_extracts_rows(self) -> None:
        driver = _driver(
            rows=[
                _row("AMX123", "Mexico City (MMMX)", "Mon 02:30PM CST", "En Route / On Time"),
                _row("", "Nowhere", "Mon 03:00PM CST", "Scheduled"),
            ]
        )
        source = FlightAwareLiveSource(driver_factory=lambda: driver)
        rows = source.fetch_flights("arrival")

        driver.get.assert_called_once_with("https://www.flightaware.com/live/airport/MMPR/arrivals")
        driver.quit.assert_called_once()
        assert rows[0] == {
            "flight_number": "AMX123",
            "city": "Mexico City (MMMX)",
            "time": "14:30",
            "status": "En Route / On Time",
        }
        assert rows[1]["flight_number"] == ""

    def test_departures_url(self) -> None:
        driver = _driver(rows=[])
        FlightAwareLiveSource(driver_factory=lambda: driver).fetch_flights("departure")
        driver.get.assert_called_once_with("https://www.flightaware.com/live/airport/MMPR/departures")

    def test_no_flights_marker_is_empty(self) -> None:
        driver = _driver(rows=None, no_flights=True)
        assert FlightAwareLiveSource(driver_factory=lambda: driver).fetch_flights("arrival") == []
        driver.quit.assert_called_once()

    def test_bot_challenge_degrades_to_empty(self, caplog) -> None:
        driver = _driver(rows=[_row("AMX1", "X", "10:00", "Scheduled")], title="Just a moment...")
        with caplog.at_level("WARNING"):
            rows = FlightAwareLiveSource(driver_factory=lambda: driver).fetch_flights("arrival")
        assert rows == []
        assert "bot protection" in caplog.text
        driver.quit.assert_called_once()

    def test_missing_table_degrades_to_empty(self) -> None:
        driver = _driver(rows=None)
        source = FlightAwareLiveSource(wait_seconds=0, driver_factory=lambda: driver)
        assert source.fetch_flights("departure") == []
        driver.quit.assert_called_once()

    def test_browser_error_is_upstream_error(self) -> None:
        driver = _driver(rows=[])
        driver.get.side_effect = WebDriverException("net::ERR_NAME_NOT_RESOLVED")
        with pytest.raises(UpstreamError, match="ERR_NAME_NOT_RESOLVED"):
            FlightAwareLiveSource(driver_factory=lambda: driver).fetch_flights("arrival")
        driver.quit.assert_called_once()


class TestFlightAwareLiveRawToFlight:
    """Tests for raw_to_flight conversion."""

    def test_arrival(self) -> None:
        raw = {"flight_number": "AMX123", "city": "Mexico City (MMMX)", "time": "14:30", "status": "Landed / Taxiing"}
        f = FlightAwareLiveSource(driver_factory=MagicMock).raw_to_flight(raw, "arrival")
        assert f.flight_number == "AMX123"
        assert f.airline == "Aeromexico"
        assert f.airline_code == "AMX"
        assert f.origin == "Mexico City"
        assert f.origin_code == "MMMX"
        assert f.destination is None
        assert f.scheduled == "14:30"
        assert f.status == "Landed"

    def test_departure_without_code(self) -> None:
        raw = {"flight_number": "N512XY", "city": "Tepic", "time": None, "status": ""}
        f = FlightAwareLiveSource(driver_factory=MagicMock).raw_to_flight(raw, "departure")
        assert f.destination == "Tepic" and f.destination_code == ""
        assert f.origin is None and f.origin_code is None
        assert f.airline == "Unknown Airline"
        assert f.status == "Scheduled"

    def test_missing_flight_number(self) -> None:
        raw = {"flight_number": "  ", "city": "X", "time": "10:00", "status": ""}
        assert FlightAwareLiveSource(driver_factory=MagicMock).raw_to_flight(raw, "arrival") is None


def test_challenge_markup_in_page_degrades_to_empty() -> None:
    driver = _driver(rows=[], page="<html><div id='cf-challenge-running'></div></html>")
    assert FlightAwareLiveSource(driver_factory=lambda: driver).fetch_flights("departure") == []


class TestCreateDriver:
    """Tests for create_driver."""

    @patch("pvrflights.board.sources.flightaware_live.webdriver.Chrome")
    @patch("pvrflights.board.sources.flightaware_live.Service")
    @patch("pvrflights.board.sources.flightaware_live.ChromeDriverManager")
    def test_parallel_drivers_leave_stderr_alone(self, manager, service, chrome) -> None:
        manager.return_value.install.return_value = "/opt/chromedriver"
        started = threading.Barrier(2)

        def slow_chrome(**kwargs):
            started.wait(timeout=5)
            return MagicMock()

        chrome.side_effect = slow_chrome
        original = sys.stderr

        threads = [threading.Thread(target=create_driver) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=10)

        assert sys.stderr is original
        assert chrome.call_count == 2
        for call in service.call_args_list:
            assert call.args == ("/opt/chromedriver",)
            assert call.kwargs["log_output"] == subprocess.DEVNULL
