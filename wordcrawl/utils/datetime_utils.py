from datetime import datetime, timezone
from email.utils import format_datetime


def format_rfc1123(value: datetime) -> str:
    """Format a datetime as RFC 1123 (e.g. `Tue, 03 Jun 2008 11:05:30 GMT`).

    Naive datetimes are assumed to be UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def format_duration(seconds: float) -> str:
    """Format elapsed seconds as `<minutes>m <seconds>s <millis>ms`."""
    total_ms = int(round(max(seconds, 0.0) * 1000))
    minutes, rest_ms = divmod(total_ms, 60_000)
    secs, millis = divmod(rest_ms, 1000)
    return f"{minutes}m {secs}s {millis}ms"
