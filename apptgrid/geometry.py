# apptgrid/geometry.py
from __future__ import annotations

import datetime as dt
from typing import Mapping, Optional

from .config import (
    DEFAULT_GUTTER_PX,
    DEFAULT_MIN_COLUMN_WIDTH_PX,
    DEFAULT_MIN_HEIGHT_PX,
    DEFAULT_PX_PER_MIN,
)
from .model import Appointment, ColumnPlacement, Geometry
from .util.timeparse import minutes_between

_UNPLACED = ColumnPlacement(column=0, column_count=1)


def column_width_px(
    container_width_px: int,
    column_count: int,
    gutter_px: int = DEFAULT_GUTTER_PX,
    min_column_width_px: int = DEFAULT_MIN_COLUMN_WIDTH_PX,
) -> int:
    cols = max(1, int(column_count))
    usable = int(container_width_px) - int(gutter_px) * (cols - 1)
    return max(int(min_column_width_px), usable // cols)


def resolve_geometry(
    appointment: Appointment,
    window_start: dt.datetime,
    column_assignment: Mapping[str, ColumnPlacement],
    container_width_px: Optional[int],
    pixels_per_minute: float = DEFAULT_PX_PER_MIN,
    gutter_px: int = DEFAULT_GUTTER_PX,
    *,
    min_height_px: int = DEFAULT_MIN_HEIGHT_PX,
    min_column_width_px: int = DEFAULT_MIN_COLUMN_WIDTH_PX,
) -> Geometry:
    """
    Position of one appointment on the day timeline.

    Vertical: minutes from window start (clamped at 0) and duration, with a
    minimum height. Horizontal: pixel columns separated by fixed gutters when
    the container width is known, else percentages of the container with the
    gutter subtracted at render time. Re-resolve on every width change.
    """
    placement = column_assignment.get(appointment.id) or _UNPLACED

    top = max(0, minutes_between(window_start, appointment.start_time) * pixels_per_minute)
    height = max(
        min_height_px,
        minutes_between(appointment.start_time, appointment.end_time) * pixels_per_minute,
    )

    cols = max(1, int(placement.column_count))
    col = int(placement.column)

    if container_width_px is not None and container_width_px > 0:
        width = column_width_px(container_width_px, cols, gutter_px, min_column_width_px)
        left = col * (width + int(gutter_px))
        return Geometry(top=top, height=height, left=left, width=width, unit="px", gutter_px=int(gutter_px))

    return Geometry(
        top=top,
        height=height,
        left=col / cols * 100,
        width=100 / cols,
        unit="%",
        gutter_px=int(gutter_px),
    )
