# apptgrid/views.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Tuple

from .columns import assign_columns, max_concurrent
from .config import CalendarConfig, DEFAULT_CALENDAR_CONFIG, LayoutParams
from .enrich import AppointmentLookup, unenriched
from .format import day_header, doctor_line, week_range_label
from .geometry import resolve_geometry
from .model import (
    Appointment,
    DayLayout,
    Doctor,
    PopulatedAppointment,
    PositionedAppointment,
    WeekLayout,
)
from .slots import generate_time_slots
from .util.tz import resolve_tz
from .window import appointments_for_day, appointments_starting_in, day_window, starts_on_day

logger = logging.getLogger(__name__)

DEFAULT_LAYOUT = LayoutParams()


def _populate(
    appointments: Sequence[Appointment],
    lookup: Optional[AppointmentLookup],
) -> Tuple[List[PopulatedAppointment], Tuple[str, ...]]:
    if lookup is None:
        return [unenriched(a) for a in appointments], ()
    out: List[PopulatedAppointment] = []
    skipped: List[str] = []
    for a in appointments:
        p = lookup.populate(a)
        if p is None:
            skipped.append(a.id)
            continue
        out.append(p)
    return out, tuple(skipped)


def _zone(cfg: CalendarConfig, tzinfo: Optional[dt.tzinfo]) -> Optional[dt.tzinfo]:
    if tzinfo is not None or not cfg.tz:
        return tzinfo
    return resolve_tz(cfg.tz)


def _log_skipped(view: str, skipped: Tuple[str, ...]) -> None:
    if skipped:
        logger.warning(
            "%s view: %d appointment(s) without display data skipped: %s",
            view,
            len(skipped),
            ", ".join(skipped[:10]),
        )


def compose_day_view(
    appointments: Iterable[Appointment],
    day: dt.date,
    cfg: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    *,
    doctor: Optional[Doctor] = None,
    lookup: Optional[AppointmentLookup] = None,
    container_width_px: Optional[int] = None,
    layout: LayoutParams = DEFAULT_LAYOUT,
    tzinfo: Optional[dt.tzinfo] = None,
) -> DayLayout:
    """
    Timeline for one day.

    Columns are assigned once over the filtered, time-sorted appointments of
    the day and every geometry in the result is resolved against that same
    assignment. Appointments the lookup cannot populate keep their column
    (the layout is computed before enrichment) but are left out of `items`.

    Day boundaries are built in `tzinfo`, else in `cfg.tz`, else naive.
    """
    tzinfo = _zone(cfg, tzinfo)
    window_start, window_end = day_window(day, cfg, tzinfo)
    day_appts = appointments_for_day(appointments, day, cfg, tzinfo)
    assignment = assign_columns(day_appts)

    populated, skipped = _populate(day_appts, lookup)
    _log_skipped("day", skipped)

    items = [
        PositionedAppointment(
            item=p,
            placement=assignment[p.id],
            geometry=resolve_geometry(
                p.appointment,
                window_start,
                assignment,
                container_width_px,
                layout.pixels_per_minute,
                layout.gutter_px,
                min_height_px=layout.min_height_px,
                min_column_width_px=layout.min_column_width_px,
            ),
        )
        for p in populated
    ]

    return DayLayout(
        date=day,
        header=day_header(day),
        doctor_line=doctor_line(doctor, honorific=True),
        window_start=window_start,
        window_end=window_end,
        slots=generate_time_slots(day, cfg, tzinfo=tzinfo),
        items=items,
        assignment=assignment,
        max_concurrent=max_concurrent(day_appts),
        timeline_height_px=cfg.window_minutes * layout.pixels_per_minute,
        container_width_px=container_width_px,
        skipped_ids=skipped,
    )


def relayout(
    day_layout: DayLayout,
    container_width_px: Optional[int],
    layout: LayoutParams = DEFAULT_LAYOUT,
) -> DayLayout:
    """Re-resolve geometry for a new container width; columns are reused."""
    items = [
        replace(
            it,
            geometry=resolve_geometry(
                it.item.appointment,
                day_layout.window_start,
                day_layout.assignment,
                container_width_px,
                layout.pixels_per_minute,
                layout.gutter_px,
                min_height_px=layout.min_height_px,
                min_column_width_px=layout.min_column_width_px,
            ),
        )
        for it in day_layout.items
    ]
    return replace(day_layout, items=items, container_width_px=container_width_px)


def week_start_for(day: dt.date) -> dt.date:
    """Monday of the ISO week containing `day`."""
    return day - dt.timedelta(days=day.weekday())


def week_days(week_start: dt.date) -> List[dt.date]:
    return [week_start + dt.timedelta(days=i) for i in range(7)]


def week_range(
    day: dt.date,
    tzinfo: Optional[dt.tzinfo] = None,
) -> Tuple[dt.datetime, dt.datetime]:
    """Monday 00:00:00 .. Sunday 23:59:59 of the week containing `day`."""
    start = week_start_for(day)
    end = start + dt.timedelta(days=6)
    return (
        dt.datetime(start.year, start.month, start.day, 0, 0, 0, tzinfo=tzinfo),
        dt.datetime(end.year, end.month, end.day, 23, 59, 59, tzinfo=tzinfo),
    )


def compose_week_view(
    appointments: Iterable[Appointment],
    week_start: dt.date,
    cfg: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    *,
    doctor: Optional[Doctor] = None,
    lookup: Optional[AppointmentLookup] = None,
    tzinfo: Optional[dt.tzinfo] = None,
) -> WeekLayout:
    """
    Seven-day grid; each appointment is shown once, in the cell holding its
    start time. Cell contents keep source order and no columns are assigned.
    """
    tzinfo = _zone(cfg, tzinfo)
    appts = list(appointments)
    days = week_days(week_start)
    day_slots = [generate_time_slots(d, cfg, tzinfo=tzinfo) for d in days]
    n_slots = len(day_slots[0]) if day_slots else 0

    cells: List[List[List[PopulatedAppointment]]] = [[[] for _ in days] for _ in range(n_slots)]
    skipped_all: List[str] = []
    total = 0

    for di, d in enumerate(days):
        on_day = [a for a in appts if starts_on_day(a, d)]
        if not on_day:
            continue
        for si, slot in enumerate(day_slots[di]):
            in_cell = appointments_starting_in(on_day, slot.start, slot.end)
            populated, skipped = _populate(in_cell, lookup)
            skipped_all.extend(skipped)
            cells[si][di] = populated
            total += len(populated)

    skipped_t = tuple(skipped_all)
    _log_skipped("week", skipped_t)

    return WeekLayout(
        week_start=week_start,
        header=week_range_label(week_start),
        doctor_line=doctor_line(doctor, honorific=False),
        days=days,
        slots=day_slots[0] if day_slots else [],
        cells=cells,
        total=total,
        skipped_ids=skipped_t,
    )
