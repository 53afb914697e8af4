"""
Shared pure-utility functions for todoist-cli.

These helpers have no business logic and no side effects.
They are used across models.py, client.py, commands.py, and resolver.py.
"""

import re
from datetime import date

from todoist_cli.exceptions import DurationError, UsageError


def _get_field(d, snake, camel):
    """Get a value from a dict trying snake_case then camelCase key."""
    if snake in d:
        return d.get(snake)
    return d.get(camel)


def _first_field(d, *keys):
    """Return the first non-None value among *keys* (API versions disagree on names)."""
    for key in keys:
        value = d.get(key)
        if value is not None:
            return value
    return None


def _split_csv(raw):
    """Split a comma-separated flag value, dropping blanks."""
    return [v.strip() for v in raw.split(",") if v.strip()]


def _parse_int(raw, flag):
    """Parse an integer flag value. Raises UsageError on bad input."""
    try:
        return int(str(raw).strip())
    except ValueError as e:
        raise UsageError(f"Invalid --{flag} '{raw}'. Expected an integer.") from e


def _date_component(value):
    """Return the calendar date of a 'YYYY-MM-DD[THH:MM...]' string, or None."""
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

_DURATION_RE = re.compile(
    r"^(?:(?P<hours>\d+)\s*h(?:ours?|rs?)?)?\s*"
    r"(?:(?P<minutes>\d+)\s*m(?:in(?:ute)?s?)?)?$",
    re.IGNORECASE,
)


def parse_duration(text):
    """Parse '30m', '1h', '2h30m', '15min' or bare digits into minutes.

    Raises DurationError when nothing recognisable is present.
    """
    raw = (text or "").strip()
    if raw.isdigit():
        return int(raw)
    m = _DURATION_RE.match(raw)
    if not raw or not m or (m.group("hours") is None and m.group("minutes") is None):
        raise DurationError(text)
    hours = int(m.group("hours") or 0)
    minutes = int(m.group("minutes") or 0)
    return hours * 60 + minutes
