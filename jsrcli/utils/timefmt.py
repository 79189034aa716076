"""Human readable durations."""

SECOND = 1000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY
MONTH = 30 * DAY
YEAR = 365 * DAY

_AGO_UNITS = (
    (YEAR, "year"),
    (MONTH, "month"),
    (WEEK, "week"),
    (DAY, "day"),
    (HOUR, "hour"),
    (MINUTE, "minute"),
    (SECOND, "second"),
)


def pretty_time(diff_ms: int) -> str:
    """Format an elapsed duration in milliseconds, e.g. ``3s`` or ``250ms``."""
    if diff_ms > DAY:
        return f"{diff_ms // DAY}d"
    if diff_ms > HOUR:
        return f"{diff_ms // HOUR}h"
    if diff_ms > MINUTE:
        return f"{diff_ms // MINUTE}m"
    if diff_ms > SECOND:
        return f"{diff_ms // SECOND}s"
    return f"{diff_ms}ms"


def time_ago(diff_ms: int) -> str:
    """Format how long ago something happened, e.g. ``2 weeks ago``."""
    for period, unit in _AGO_UNITS:
        if diff_ms > period:
            value = diff_ms // period
            plural = "s" if value > 1 else ""
            return f"{value} {unit}{plural} ago"
    return "just now"
