"""
Day Tokens
==========

Users ask for trucks "today" or "tomorrow". Anything else (a weekday
name, "Tomorrow" with a capital T, a typo) means today.

The date is taken from the host's local clock; the API expects plain
YYYY-MM-DD dates.
"""

from datetime import date, timedelta

TODAY = "today"
TOMORROW = "tomorrow"
DAY_TOKENS = (TODAY, TOMORROW)


def is_day_token(token: str | None) -> bool:
    """True only for the exact literals "today" and "tomorrow"."""
    return token in DAY_TOKENS


def normalize_day(token: str | None) -> str:
    """Return the token if it is recognized, otherwise "today"."""
    return token if is_day_token(token) else TODAY


def resolve_day(token: str | None, today: date | None = None) -> str:
    """
    Turn a day token into an ISO date.

    Args:
        token: "today", "tomorrow" or anything else (treated as today)
        today: Override for the current date, used by tests

    Returns:
        The date as YYYY-MM-DD
    """
    current = today or date.today()
    if normalize_day(token) == TOMORROW:
        current += timedelta(days=1)
    return current.isoformat()
