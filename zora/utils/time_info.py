"""
TIME INFORMATION UTILITY
========================

Returns the current date, time and year as the strings embedded in the system
prompt, so the LLM can answer "what day is it?" and similar questions. The
relay computes these on the server for every request.
"""

import datetime
from typing import NamedTuple, Optional


class TimeInformation(NamedTuple):
    current_date: str   # e.g. Monday, October 19, 2026
    current_time: str   # e.g. 05:07 PM
    current_year: int


def get_time_information(now: Optional[datetime.datetime] = None) -> TimeInformation:
    """Return the formatted date, 12-hour time and year for `now` (default: the local clock)."""
    now = now or datetime.datetime.now()
    return TimeInformation(
        current_date=f"{now.strftime('%A')}, {now.strftime('%B')} {now.day}, {now.year}",
        current_time=now.strftime("%I:%M %p"),
        current_year=now.year,
    )
