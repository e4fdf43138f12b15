# apptgrid/window.py
from __future__ import annotations

import datetime as dt
from typing import Iterable, List, Optional, Tuple

from .config import CalendarConfig, DEFAULT_CALENDAR_CONFIG
from .model import Appointment
from .util.tz import at_hour


def sort_key(appt: Appointment) -> Tuple[dt.datetime, str]:
    # Equal starts are ordered by id so column assignment is reproducible.
    return (appt.start_time, str(appt.id))


def appointments_in_window(
    appointments: Iterable[Appointment],
    window_start: dt.datetime,
    window_end: dt.datetime,
) -> List[Appointment]:
    """Appointments intersecting [window_start, window_end), sorted by (start, id).

    Appointments that only overlap an edge of the window are kept.
    """
    out = [a for a in appointments if a.start_time < window_end and a.end_time > window_start]
    out.sort(key=sort_key)
    return out


def day_window(
    day: dt.date,
    cfg: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    tzinfo: Optional[dt.tzinfo] = None,
) -> Tuple[dt.datetime, dt.datetime]:
    return at_hour(day, cfg.start_hour, tzinfo), at_hour(day, cfg.end_hour, tzinfo)


def appointments_for_day(
    appointments: Iterable[Appointment],
    day: dt.date,
    cfg: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    tzinfo: Optional[dt.tzinfo] = None,
) -> List[Appointment]:
    window_start, window_end = day_window(day, cfg, tzinfo)
    return appointments_in_window(appointments, window_start, window_end)


def starts_on_day(appt: Appointment, day: dt.date) -> bool:
    return appt.start_time.date() == day


def appointments_starting_in(
    appointments: Iterable[Appointment],
    slot_start: dt.datetime,
    slot_end: dt.datetime,
) -> List[Appointment]:
    """Appointments whose start lies in [slot_start, slot_end), in source order."""
    return [a for a in appointments if slot_start <= a.start_time < slot_end]
