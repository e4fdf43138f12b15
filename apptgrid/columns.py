# apptgrid/columns.py
from __future__ import annotations

import datetime as dt
from typing import Dict, Iterable, List, Sequence, Tuple

from .model import Appointment, ColumnAssignment, ColumnPlacement


def assign_columns(sorted_appointments: Sequence[Appointment]) -> ColumnAssignment:
    """
    Greedy interval partitioning over appointments already sorted by (start, id).

    Each appointment takes the lowest column whose last end is <= its start
    (back-to-back appointments share a column); otherwise a new column is
    opened. Every placement carries the final column count of the whole set.
    """
    column_end: List[dt.datetime] = []
    column_of: Dict[str, int] = {}

    for appt in sorted_appointments:
        col = -1
        for i, end in enumerate(column_end):
            if end <= appt.start_time:
                col = i
                break
        if col < 0:
            column_end.append(appt.end_time)
            col = len(column_end) - 1
        else:
            column_end[col] = appt.end_time
        column_of[appt.id] = col

    total = len(column_end)
    placements = {uid: ColumnPlacement(column=col, column_count=total) for uid, col in column_of.items()}
    return ColumnAssignment(placements=placements, column_count=total)


def max_concurrent(appointments: Iterable[Appointment]) -> int:
    """Largest number of appointments open at one instant (sweep line, half-open)."""
    pts: List[Tuple[dt.datetime, int]] = []
    for appt in appointments:
        pts.append((appt.start_time, +1))
        pts.append((appt.end_time, -1))
    # ends before starts at the same instant
    pts.sort(key=lambda x: (x[0], x[1]))

    active = 0
    best = 0
    for _t, kind in pts:
        active += kind
        if active > best:
            best = active
    return best


def overlaps(a: Appointment, b: Appointment) -> bool:
    return a.start_time < b.end_time and b.start_time < a.end_time
