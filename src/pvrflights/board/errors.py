"""Exceptions raised while building the flight board."""


class FlightBoardError(Exception):
    """Base class for board failures."""


class ConfigError(FlightBoardError):
    """A required setting or credential is missing or invalid."""


class UpstreamError(FlightBoardError):
    """The upstream source failed: HTTP error, bad body, or a reported error payload."""


class ScrapeDegradation(FlightBoardError):
    """A scraped page could not be read (bot challenge, missing table).

    Only affects one direction; the source turns it into an empty list.
    """
