from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple

from .tz import attach_tz

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2))
    # 24:00 is allowed as the end of the day
    if not (0 <= hh <= 24 and 0 <= mm <= 59) or (hh == 24 and mm != 0):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_workhours(s: str) -> Tuple[int, int]:
    """Parse "08:00-18:00" into (start_hour, end_hour).

    The operating window is hour-aligned, so minutes must be zero.
    """
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("workhours must be like 08:00-18:00")
    sh, sm = parse_hhmm(parts[0])
    eh, em = parse_hhmm(parts[1])
    if sm or em:
        raise ValueError(f"workhours must be whole hours: {s!r}")
    if eh <= sh:
        raise ValueError("workhours end must be after start")
    return sh, eh


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()


def parse_timestamp(s: str, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """Parse an ISO-8601 timestamp ("2024-10-15T09:00:00Z", "2024-10-15T09:00").

    Naive values are attached to `tz`; aware values are converted to it.
    """
    if not isinstance(s, str) or not s.strip():
        raise ValueError(f"Invalid timestamp: {s!r}")
    ss = s.strip()
    if ss.endswith(("Z", "z")):
        ss = ss[:-1] + "+00:00"
    try:
        value = dt.datetime.fromisoformat(ss)
    except ValueError as ex:
        raise ValueError(f"Invalid timestamp: {s!r}") from ex
    return attach_tz(value, tz)


def minutes_between(start: dt.datetime, end: dt.datetime) -> int:
    """Whole minutes from `start` to `end`, truncated toward zero."""
    delta = end - start
    minute = dt.timedelta(minutes=1)
    if delta >= dt.timedelta(0):
        return delta // minute
    return -((-delta) // minute)
