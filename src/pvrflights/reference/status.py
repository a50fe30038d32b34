"""Map upstream flight status flags and free text to the board's status set."""

from typing import Optional


class FlightStatus:
    """Closed set of status values published on the board."""

    SCHEDULED = "Scheduled"
    EN_ROUTE = "En Route"
    LANDED = "Landed"
    DEPARTED = "Departed"
    DELAYED = "Delayed"
    CANCELLED = "Cancelled"
    DIVERTED = "Diverted"
    INCIDENT = "Incident"

    ALL = frozenset(
        {SCHEDULED, EN_ROUTE, LANDED, DEPARTED, DELAYED, CANCELLED, DIVERTED, INCIDENT}
    )


# Higher wins when the same flight number shows up more than once
STATUS_PRIORITY: dict[str, int] = {
    FlightStatus.LANDED: 5,
    FlightStatus.DEPARTED: 5,
    FlightStatus.DIVERTED: 4,
    FlightStatus.INCIDENT: 4,
    FlightStatus.EN_ROUTE: 3,
    FlightStatus.DELAYED: 2,
    FlightStatus.SCHEDULED: 2,
    FlightStatus.CANCELLED: 0,
}
# Pass-through text that matched nothing
UNKNOWN_STATUS_PRIORITY = 1

# Checked in order; first keyword found in the lowercased text wins
_TEXT_RULES: list[tuple[tuple[str, ...], str]] = [
    (("cancel",), FlightStatus.CANCELLED),
    (("en route", "en-route", "enroute", "active", "in air", "in-air", "airborne"), FlightStatus.EN_ROUTE),
    (("landed", "arrived"), FlightStatus.LANDED),
    (("departed",), FlightStatus.DEPARTED),
    (("delay",), FlightStatus.DELAYED),
    (("scheduled",), FlightStatus.SCHEDULED),
    (("diverted",), FlightStatus.DIVERTED),
    (("incident",), FlightStatus.INCIDENT),
]


def normalize_status_text(status: Optional[str]) -> str:
    """Map free-text upstream status to the board set.

    Unmatched text is title-cased and passed through; missing text means
    the source has nothing beyond the schedule.
    """
    if not status or not isinstance(status, str):
        return FlightStatus.SCHEDULED
    s = " ".join(status.split())
    if not s:
        return FlightStatus.SCHEDULED

    lowered = s.lower()
    for keywords, value in _TEXT_RULES:
        if any(k in lowered for k in keywords):
            return value
    return s.title()


def infer_status(
    arrival: bool,
    cancelled: bool = False,
    diverted: bool = False,
    actual_arrival: Optional[str] = None,
    actual_departure: Optional[str] = None,
) -> str:
    """Status from boolean flags and actual-event times.

    For arrivals, actual_departure is the off-block/takeoff time at the
    origin. An estimated time on its own does not make a flight En Route.
    """
    if cancelled:
        return FlightStatus.CANCELLED
    if diverted:
        return FlightStatus.DIVERTED
    if arrival:
        if actual_arrival:
            return FlightStatus.LANDED
        if actual_departure:
            return FlightStatus.EN_ROUTE
        return FlightStatus.SCHEDULED
    if actual_departure:
        return FlightStatus.DEPARTED
    return FlightStatus.SCHEDULED


def status_priority(status: Optional[str]) -> int:
    """Rank used to pick between duplicate records of one flight."""
    if not status:
        return UNKNOWN_STATUS_PRIORITY
    return STATUS_PRIORITY.get(status, UNKNOWN_STATUS_PRIORITY)
