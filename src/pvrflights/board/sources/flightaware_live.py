"""FlightAware live airport board, scraped with headless Chrome.

Pages:
  Arrivals:   https://www.flightaware.com/live/airport/{icao}/arrivals
  Departures: https://www.flightaware.com/live/airport/{icao}/departures

Each direction gets its own browser session. A bot-challenge page or a
table that never shows up only empties that direction.
"""

import logging
import re
import subprocess
from typing import Callable, List, Optional

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import WebDriverWait
from webdriver_manager.chrome import ChromeDriverManager

from pvrflights.board.errors import ScrapeDegradation, UpstreamError
from pvrflights.board.models import ARRIVAL, Direction, Flight
from pvrflights.reference.airlines import airline_name, carrier_prefix
from pvrflights.reference.airports import PVR
from pvrflights.reference.status import normalize_status_text

logger = logging.getLogger(__name__)

BASE_URL = "https://www.flightaware.com/live/airport"

TABLE_SELECTOR = "table.prettyTable"
NO_FLIGHTS_XPATH = "//*[contains(translate(text(), 'NOFLIGHTS', 'noflights'), 'no flights')]"

# Titles of interstitial pages, and markup only found on challenge pages
CHALLENGE_TITLES = ("just a moment", "attention required", "access denied")
CHALLENGE_MARKERS = (
    "checking your browser",
    "verify you are human",
    "cf-challenge",
    "challenge-platform",
)

_TIME_RE = re.compile(r"\b(\d{1,2}):(\d{2})\s*([ap]m)?", re.IGNORECASE)
_CODE_RE = re.compile(r"\(([A-Z0-9]{3,4})\)")


def create_driver():
    """Create a headless Chrome WebDriver."""
    opts = Options()
    opts.add_argument("--headless=new")
    opts.add_argument("--no-sandbox")
    opts.add_argument("--disable-dev-shm-usage")
    opts.add_argument("--disable-gpu")
    opts.add_argument("--disable-blink-features=AutomationControlled")
    opts.add_argument("--log-level=3")
    opts.add_experimental_option("excludeSwitches", ["enable-automation", "enable-logging"])
    opts.add_argument(
        "--user-agent=Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )

    # Chromedriver logs are discarded at the subprocess, not via sys.stderr
    service = Service(ChromeDriverManager().install(), log_output=subprocess.DEVNULL)
    driver = webdriver.Chrome(service=service, options=opts)

    driver.execute_cdp_cmd(
        "Page.addScriptToEvaluateOnNewDocument",
        {"source": "Object.defineProperty(navigator, 'webdriver', {get: () => undefined})"},
    )
    return driver


def parse_time(text: Optional[str]) -> Optional[str]:
    """First clock time in text as 24h 'HH:MM' (handles '2:30PM')."""
    if not text:
        return None
    m = _TIME_RE.search(text)
    if not m:
        return None
    hour, minute, meridiem = int(m.group(1)), int(m.group(2)), m.group(3)
    if meridiem:
        meridiem = meridiem.lower()
        if hour == 12:
            hour = 0
        if meridiem == "pm":
            hour += 12
    if hour > 23 or minute > 59:
        return None
    return f"{hour:02d}:{minute:02d}"


class FlightAwareLiveSource:
    """Flight data source scraping the FlightAware live airport board."""

    def __init__(
        self,
        airport_icao: str = PVR.icao,
        base_url: str = BASE_URL,
        wait_seconds: int = 20,
        driver_factory: Optional[Callable[[], object]] = None,
    ):
        self.airport_icao = airport_icao
        self.base_url = base_url.rstrip("/")
        self.wait_seconds = wait_seconds
        self._driver_factory = driver_factory or create_driver

    def fetch_flights(self, direction: Direction) -> List[dict]:
        """Scrape one direction's table; degraded pages yield an empty list."""
        page = "arrivals" if direction == ARRIVAL else "departures"
        url = f"{self.base_url}/{self.airport_icao}/{page}"

        try:
            driver = self._driver_factory()
        except WebDriverException as e:
            raise UpstreamError(f"Could not start headless browser: {e.msg}") from e

        try:
            rows = self._load_rows(driver, url)
        except ScrapeDegradation as e:
            logger.warning("FlightAware %s unavailable, publishing none: %s", page, e)
            return []
        except WebDriverException as e:
            raise UpstreamError(f"Browser error loading {url}: {e.msg}") from e
        finally:
            driver.quit()

        logger.info("FlightAware %s: %d rows", page, len(rows))
        return rows

    def _load_rows(self, driver, url: str) -> List[dict]:
        driver.get(url)
        self._check_challenge(driver)

        try:
            WebDriverWait(driver, self.wait_seconds).until(
                lambda d: d.find_elements(By.CSS_SELECTOR, TABLE_SELECTOR)
                or d.find_elements(By.XPATH, NO_FLIGHTS_XPATH)
            )
        except TimeoutException:
            # Challenge pages sometimes replace the document after load
            self._check_challenge(driver)
            raise ScrapeDegradation(
                f"flight table not found after {self.wait_seconds}s at {url}"
            ) from None

        tables = driver.find_elements(By.CSS_SELECTOR, TABLE_SELECTOR)
        if not tables:
            logger.info("No flights listed at %s", url)
            return []

        rows = []
        for tr in tables[0].find_elements(By.CSS_SELECTOR, "tbody tr"):
            raw = self._extract_row(tr)
            if raw:
                rows.append(raw)
        return rows

    def _check_challenge(self, driver) -> None:
        title = (driver.title or "").lower()
        for marker in CHALLENGE_TITLES:
            if marker in title:
                raise ScrapeDegradation(f"bot protection page detected ({marker!r})")
        page = (driver.page_source or "").lower()
        for marker in CHALLENGE_MARKERS:
            if marker in page:
                raise ScrapeDegradation(f"bot protection page detected ({marker!r})")

    def _extract_row(self, tr) -> Optional[dict]:
        """Pull flight number, counterpart city, first time and status out of a table row."""
        cells = tr.find_elements(By.TAG_NAME, "td")
        if len(cells) < 2:
            return None
        links = tr.find_elements(By.TAG_NAME, "a")
        return {
            "flight_number": links[0].text.strip() if links else "",
            "city": cells[1].text.strip(),
            "time": parse_time(tr.text),
            "status": cells[-1].text.strip(),
        }

    def raw_to_flight(self, raw: dict, direction: Direction) -> Optional[Flight]:
        """Convert a scraped row to a Flight. Times are bare local 'HH:MM'."""
        flight_number = (raw.get("flight_number") or "").strip()
        if not flight_number:
            return None

        city_text = (raw.get("city") or "").strip()
        m = _CODE_RE.search(city_text)
        code = m.group(1) if m else ""
        city = _CODE_RE.sub("", city_text).strip() or code or "Unknown"

        airline_code = carrier_prefix(flight_number) or ""
        arriving = direction == ARRIVAL

        return Flight(
            flight_number=flight_number,
            airline=airline_name(airline_code),
            airline_code=airline_code,
            origin=city if arriving else None,
            origin_code=code if arriving else None,
            destination=None if arriving else city,
            destination_code=None if arriving else code,
            scheduled=raw.get("time"),
            status=normalize_status_text(raw.get("status")),
        )
