# apptgrid/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Doctor:
    id: str
    name: str
    specialty: str = ""


@dataclass(frozen=True)
class Patient:
    id: str
    name: str


@dataclass(frozen=True)
class Appointment:
    id: str
    start_time: dt.datetime
    end_time: dt.datetime
    type: str = "checkup"

    doctor_id: Optional[str] = None
    patient_id: Optional[str] = None


@dataclass(frozen=True)
class PopulatedAppointment:
    """Appointment enriched with display data by a lookup service."""

    appointment: Appointment
    patient: Optional[Patient] = None
    doctor: Optional[Doctor] = None

    @property
    def id(self) -> str:
        return self.appointment.id

    @property
    def start_time(self) -> dt.datetime:
        return self.appointment.start_time

    @property
    def end_time(self) -> dt.datetime:
        return self.appointment.end_time

    @property
    def type(self) -> str:
        return self.appointment.type


@dataclass(frozen=True)
class TimeSlot:
    start: dt.datetime
    end: dt.datetime
    label: str


@dataclass(frozen=True)
class ColumnPlacement:
    column: int
    column_count: int


@dataclass(frozen=True)
class ColumnAssignment(Mapping[str, ColumnPlacement]):
    """Column per appointment id; only valid for the set it was computed over."""

    placements: Dict[str, ColumnPlacement] = field(default_factory=dict)
    column_count: int = 0

    def __getitem__(self, key: str) -> ColumnPlacement:
        return self.placements[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.placements)

    def __len__(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class Geometry:
    top: float
    height: float
    left: float
    width: float
    unit: str = "px"       # "px" | "%" (horizontal pair only; top/height are always px)
    gutter_px: int = 0     # subtracted from width in the "%" fallback

    @property
    def measured(self) -> bool:
        return self.unit == "px"

    def css(self) -> Dict[str, str]:
        if self.unit == "%":
            return {
                "top": f"{_num(self.top)}px",
                "height": f"{_num(self.height)}px",
                "left": f"{_num(self.left)}%",
                "width": f"calc({_num(self.width)}% - {int(self.gutter_px)}px)",
            }
        return {
            "top": f"{_num(self.top)}px",
            "height": f"{_num(self.height)}px",
            "left": f"{_num(self.left)}px",
            "width": f"{_num(self.width)}px",
        }


def _num(v: float) -> str:
    if float(v).is_integer():
        return str(int(v))
    return f"{v:.4f}".rstrip("0").rstrip(".")


@dataclass(frozen=True)
class PositionedAppointment:
    item: PopulatedAppointment
    placement: ColumnPlacement
    geometry: Geometry


@dataclass(frozen=True)
class DayLayout:
    date: dt.date
    header: str
    doctor_line: Optional[str]
    window_start: dt.datetime
    window_end: dt.datetime
    slots: List[TimeSlot]
    items: List[PositionedAppointment]
    assignment: ColumnAssignment
    max_concurrent: int
    timeline_height_px: float
    container_width_px: Optional[int]
    skipped_ids: Tuple[str, ...] = ()

    @property
    def column_count(self) -> int:
        return self.assignment.column_count

    @property
    def is_empty(self) -> bool:
        # nothing intersects the window; unpopulated appointments still count
        return len(self.assignment) == 0


@dataclass(frozen=True)
class WeekLayout:
    week_start: dt.date
    header: str
    doctor_line: Optional[str]
    days: List[dt.date]
    slots: List[TimeSlot]
    # cells[slot_index][day_index] -> appointments starting in that cell
    cells: List[List[List[PopulatedAppointment]]]
    total: int
    skipped_ids: Tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.total == 0 and not self.skipped_ids


# Display category table; the layout engine never reads it.
APPOINTMENT_TYPE_CONFIG: Dict[str, Dict[str, str]] = {
    "checkup": {"label": "Checkup", "color": "#3b82f6"},
    "consultation": {"label": "Consultation", "color": "#10b981"},
    "follow-up": {"label": "Follow-up", "color": "#f59e0b"},
    "procedure": {"label": "Procedure", "color": "#8b5cf6"},
}
FALLBACK_TYPE_COLOR = "#6b7280"


__all__ = [
    "APPOINTMENT_TYPE_CONFIG",
    "FALLBACK_TYPE_COLOR",
    "Appointment",
    "ColumnAssignment",
    "ColumnPlacement",
    "DayLayout",
    "Doctor",
    "Geometry",
    "Patient",
    "PopulatedAppointment",
    "PositionedAppointment",
    "TimeSlot",
    "WeekLayout",
]
