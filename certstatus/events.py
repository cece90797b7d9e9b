import datetime as dt
from typing import Callable, List, Optional, Protocol, Sequence

from .common import human_duration, utc_now
from .resources import Event

INDENT = "  "


class EventDescriber(Protocol):
    def __call__(self, events: Optional[Sequence[Event]], level: int) -> str: ...


def _fmt_table(rows: List[List[str]], prefix: str) -> str:
    widths = [max(len(c) for c in col) for col in zip(*rows)]
    out = []
    for r in rows:
        cells = [c.ljust(w) for c, w in zip(r[:-1], widths)] + [r[-1]]
        out.append(prefix + "  ".join(cells) + "\n")
    return "".join(out)


def _source(e: Event) -> str:
    if e.source_host:
        return f"{e.source_component}, {e.source_host}"
    return e.source_component


def _since(ts: Optional[dt.datetime], now: dt.datetime) -> str:
    if ts is None:
        return "<unknown>"
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return human_duration(now - ts)


def _age(e: Event, now: dt.datetime) -> str:
    if e.count > 1:
        return f"{_since(e.last_timestamp, now)} (x{e.count} over {_since(e.first_timestamp, now)})"
    return _since(e.first_timestamp or e.last_timestamp, now)


def _sort_key(e: Event) -> dt.datetime:
    ts = e.last_timestamp or e.first_timestamp
    if ts is None:
        return dt.datetime.min.replace(tzinfo=dt.timezone.utc)
    return ts if ts.tzinfo else ts.replace(tzinfo=dt.timezone.utc)


def describe_events(
    events: Optional[Sequence[Event]],
    level: int = 0,
    now_fn: Callable[[], dt.datetime] = utc_now,
) -> str:
    """
    Render an event list as an ``Events:`` table indented by ``level``.
    Oldest events come first; an empty or missing list renders as ``<none>``.
    """
    head = INDENT * level
    if not events:
        return f"{head}Events:  <none>\n"

    now = now_fn()
    rows = [["Type", "Reason", "Age", "From", "Message"], ["----", "------", "----", "----", "-------"]]
    for e in sorted(events, key=_sort_key):
        rows.append([e.type, e.reason, _age(e, now), _source(e), e.message])
    return f"{head}Events:\n" + _fmt_table(rows, head + INDENT)
