# apptgrid/format.py
"""Display strings for headers, slot rows and appointment cards."""

from __future__ import annotations

import datetime as dt
import re
from typing import Optional, Tuple

from .model import APPOINTMENT_TYPE_CONFIG, FALLBACK_TYPE_COLOR, Appointment, Doctor
from .util.timeparse import minutes_between

_WORD_START_RE = re.compile(r"\b\w")


def slot_label(t: dt.datetime) -> str:
    """8:00 AM, 12:30 PM"""
    h12 = t.hour % 12 or 12
    ampm = "AM" if t.hour < 12 else "PM"
    return f"{h12}:{t.minute:02d} {ampm}"


def time_range_label(start: dt.datetime, end: dt.datetime) -> str:
    return f"{slot_label(start)} - {slot_label(end)}"


def day_header(d: dt.date) -> str:
    """Monday, October 15, 2024"""
    return f"{d.strftime('%A')}, {d.strftime('%B')} {d.day}, {d.year}"


def week_range_label(week_start: dt.date) -> str:
    """Oct 14 - Oct 20, 2024"""
    week_end = week_start + dt.timedelta(days=6)
    left = f"{week_start.strftime('%b')} {week_start.day}"
    right = f"{week_end.strftime('%b')} {week_end.day}, {week_end.year}"
    if week_start.year != week_end.year:
        left = f"{left}, {week_start.year}"
    return f"{left} - {right}"


def specialty_label(specialty: Optional[str]) -> str:
    s = str(specialty or "").replace("-", " ")
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), s)


def doctor_line(doctor: Optional[Doctor], *, honorific: bool = True) -> Optional[str]:
    if doctor is None:
        return None
    name = f"Dr. {doctor.name}" if honorific else doctor.name
    spec = specialty_label(doctor.specialty)
    return f"{name} - {spec}" if spec else name


def type_style(type_name: str) -> Tuple[str, str]:
    """(label, color) for an appointment type; unknown types keep their raw name."""
    conf = APPOINTMENT_TYPE_CONFIG.get(type_name)
    if conf is None:
        return str(type_name), FALLBACK_TYPE_COLOR
    return conf["label"], conf["color"]


def duration_minutes(appt: Appointment) -> int:
    return minutes_between(appt.start_time, appt.end_time)
