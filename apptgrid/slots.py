# apptgrid/slots.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional, Union

from .config import CalendarConfig, DEFAULT_CALENDAR_CONFIG
from .format import slot_label
from .model import TimeSlot
from .util.tz import at_hour

DateLike = Union[dt.date, dt.datetime]


def _tz_of(reference_date: DateLike, tzinfo: Optional[dt.tzinfo]) -> Optional[dt.tzinfo]:
    if isinstance(reference_date, dt.datetime):
        return reference_date.tzinfo
    return tzinfo


def _as_date(reference_date: DateLike) -> dt.date:
    if isinstance(reference_date, dt.datetime):
        return reference_date.date()
    return reference_date


def generate_time_slots(
    reference_date: DateLike,
    cfg: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    *,
    tzinfo: Optional[dt.tzinfo] = None,
) -> List[TimeSlot]:
    """
    Display rows covering [start_hour, end_hour) on `reference_date`.

    A datetime reference keeps its own tzinfo; a plain date uses `tzinfo`
    (None -> naive). When slot_duration does not divide the window, the last
    slot is cut at the window end.
    """
    d = _as_date(reference_date)
    tz = _tz_of(reference_date, tzinfo)
    window_start = at_hour(d, cfg.start_hour, tz)
    window_end = at_hour(d, cfg.end_hour, tz)
    step = dt.timedelta(minutes=int(cfg.slot_duration))

    slots: List[TimeSlot] = []
    cur = window_start
    while cur < window_end:
        nxt = min(cur + step, window_end)
        slots.append(TimeSlot(start=cur, end=nxt, label=slot_label(cur)))
        cur = nxt
    return slots
