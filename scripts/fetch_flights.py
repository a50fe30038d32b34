#!/usr/bin/env python3
"""
Refresh data/flights.json for the Puerto Vallarta flight board.

Meant to be run by a scheduler (cron, CI workflow) once per period with no
arguments. Always leaves a valid snapshot behind; exits 1 if the run failed.

Usage:
    AVIATIONSTACK_API_KEY=... uv run python scripts/fetch_flights.py
    PVR_FLIGHT_SOURCE=scrape uv run python scripts/fetch_flights.py --stats
"""

import sys

from pvrflights.board.cli import main

if __name__ == "__main__":
    sys.exit(main())
