"""apptgrid.api

Stable *library* entrypoint for apptgrid.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from apptgrid.columns import assign_columns, max_concurrent
from apptgrid.config import (
    DEFAULT_CALENDAR_CONFIG,
    CalendarConfig,
    LayoutParams,
    calendar_config_from_dict,
    calendar_config_from_env,
)
from apptgrid.enrich import AppointmentLookup, Directory
from apptgrid.geometry import resolve_geometry
from apptgrid.model import (
    APPOINTMENT_TYPE_CONFIG,
    Appointment,
    ColumnAssignment,
    ColumnPlacement,
    DayLayout,
    Doctor,
    Geometry,
    Patient,
    PopulatedAppointment,
    PositionedAppointment,
    TimeSlot,
    WeekLayout,
)
from apptgrid.payload import (
    Dataset,
    dataset_from_dict,
    day_layout_to_dict,
    load_dataset,
    week_layout_to_dict,
)
from apptgrid.render.inline import build_html
from apptgrid.slots import generate_time_slots
from apptgrid.validate import AppointmentValidationError, validate_appointment_record
from apptgrid.views import (
    compose_day_view,
    compose_week_view,
    relayout,
    week_range,
    week_start_for,
)
from apptgrid.window import appointments_for_day, appointments_in_window, day_window


__all__ = [
    # model
    "APPOINTMENT_TYPE_CONFIG",
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
    # config
    "CalendarConfig",
    "DEFAULT_CALENDAR_CONFIG",
    "LayoutParams",
    "calendar_config_from_dict",
    "calendar_config_from_env",
    # layout engine
    "generate_time_slots",
    "appointments_in_window",
    "appointments_for_day",
    "day_window",
    "assign_columns",
    "max_concurrent",
    "resolve_geometry",
    # views
    "compose_day_view",
    "compose_week_view",
    "relayout",
    "week_range",
    "week_start_for",
    # collaborators
    "AppointmentLookup",
    "Directory",
    "Dataset",
    "dataset_from_dict",
    "load_dataset",
    "AppointmentValidationError",
    "validate_appointment_record",
    # output
    "day_layout_to_dict",
    "week_layout_to_dict",
    "build_html",
]
