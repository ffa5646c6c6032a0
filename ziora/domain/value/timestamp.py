"""Timestamp parsing for comment records.

Stored comments carry timezone-aware datetimes. Legacy comments embedded in
content buckets carry either an ISO-8601 string or a locale string shaped like
``22/06/2025, 00:46:48``; the comma tells the two apart.
"""

from datetime import date, datetime
from typing import Any

LOCALE_FORMAT = "%d/%m/%Y, %H:%M:%S"


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a comment timestamp in any of the known shapes.

    Args:
        value: datetime, ISO-8601 string, ``DD/MM/YYYY, HH:MM:SS`` string or None

    Returns:
        Parsed datetime (naive values are local time), or None if the value
        cannot be parsed
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        if "," in text:
            date_part, time_part = (part.strip() for part in text.split(",", 1))
            day, month, year = date_part.split("/")
            return datetime.strptime(
                f"{int(day):02d}/{int(month):02d}/{year}, {time_part}", LOCALE_FORMAT
            )
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def local_date(moment: datetime) -> date:
    """Calendar date of a moment in the server's local time zone."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def is_on_day(value: Any, day: date) -> bool:
    """Whether a timestamp falls on the given local calendar day.

    Unparseable timestamps never match.
    """
    moment = parse_timestamp(value)
    if moment is None:
        return False
    return local_date(moment) == day
