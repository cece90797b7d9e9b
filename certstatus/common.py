import datetime as dt
from typing import Optional

NONE_LABEL = "<none>"

def iso_utc(d: dt.datetime) -> str:
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    d = d.astimezone(dt.timezone.utc).replace(microsecond=0)
    return d.isoformat().replace("+00:00", "Z")

def format_time(d: Optional[dt.datetime]) -> str:
    return iso_utc(d) if d is not None else NONE_LABEL

def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)

def human_duration(delta: dt.timedelta) -> str:
    """Compact age such as ``45s``, ``12m``, ``3h`` or ``5d``."""
    seconds = int(delta.total_seconds())
    if seconds < 0:
        return "<invalid>"
    if seconds < 120:
        return f"{seconds}s"
    minutes = seconds // 60
    if minutes < 120:
        return f"{minutes}m"
    hours = minutes // 60
    if hours < 48:
        return f"{hours}h"
    days = hours // 24
    if days < 365 * 2:
        return f"{days}d"
    return f"{days // 365}y"
