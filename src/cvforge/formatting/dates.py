"""Month/year display and project durations.

Both helpers degrade to ``None`` on bad input instead of raising; a project
whose start date cannot be read simply renders without a duration line.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timezone

ONGOING = "ongoing"

# Reduced-precision ISO dates: "2023" or "2023-06".
_PARTIAL_DATE = re.compile(r"^(\d{4})(?:-(\d{2}))?$")


def _parse_iso(value: str) -> datetime | None:
    text = value.strip()
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = datetime.combine(date.fromisoformat(text), datetime.min.time())
        except ValueError:
            return _parse_partial(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed


def _parse_partial(text: str) -> datetime | None:
    match = _PARTIAL_DATE.match(text)
    if match is None:
        return None
    year, month = int(match.group(1)), int(match.group(2) or 1)
    if not 1 <= month <= 12:
        return None
    return datetime(year, month, 1)


def format_month_year(iso_date: str | None) -> str | None:
    """Return ``"MM/YYYY"`` for an ISO-8601 date (read in UTC), or None."""
    if not iso_date:
        return None
    parsed = _parse_iso(iso_date)
    if parsed is None:
        return None
    return f"{parsed.month:02d}/{parsed.year}"


def compute_duration(from_date: str | None, to_date: str | None) -> str | None:
    """Return ``"MM/YYYY - MM/YYYY"`` (or ``"... - ongoing"``), None without a start."""
    start = format_month_year(from_date)
    if start is None:
        return None
    end = format_month_year(to_date) or ONGOING
    return f"{start} - {end}"
