# apptgrid/payload.py
from __future__ import annotations

import datetime as dt
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

from .enrich import Directory
from .format import duration_minutes, slot_label, time_range_label, type_style
from .model import (
    Appointment,
    DayLayout,
    Doctor,
    Patient,
    PopulatedAppointment,
    PositionedAppointment,
    WeekLayout,
)
from .util.timeparse import minutes_between, parse_timestamp
from .util.tz import normalize_tz_name, resolve_tz
from .validate import AppointmentValidationError, validate_appointment_record
from .window import appointments_in_window

logger = logging.getLogger(__name__)

JsonPath = Union[str, Path]


@dataclass
class Dataset:
    doctors: List[Doctor] = field(default_factory=list)
    patients: List[Patient] = field(default_factory=list)
    appointments: List[Appointment] = field(default_factory=list)
    tz: str = "local"
    rejected: List[str] = field(default_factory=list)

    def directory(self) -> Directory:
        return Directory.from_records(self.doctors, self.patients)

    def doctor(self, doctor_id: str) -> Optional[Doctor]:
        for d in self.doctors:
            if d.id == doctor_id:
                return d
        return None

    def appointments_for(
        self,
        doctor_id: str,
        start: Optional[dt.datetime] = None,
        end: Optional[dt.datetime] = None,
    ) -> List[Appointment]:
        """A doctor's appointments intersecting [start, end) (all when unbounded)."""
        mine = [a for a in self.appointments if a.doctor_id == doctor_id]
        if start is None or end is None:
            return mine
        return appointments_in_window(mine, start, end)


def _str(v: Any) -> str:
    return str(v) if v is not None else ""


def _doctor_from_record(rec: Dict[str, Any]) -> Optional[Doctor]:
    uid = rec.get("id")
    if not isinstance(uid, str) or not uid:
        return None
    return Doctor(id=uid, name=_str(rec.get("name")), specialty=_str(rec.get("specialty")))


def _patient_from_record(rec: Dict[str, Any]) -> Optional[Patient]:
    uid = rec.get("id")
    if not isinstance(uid, str) or not uid:
        return None
    return Patient(id=uid, name=_str(rec.get("name")))


def appointment_from_record(rec: Dict[str, Any], tz: Optional[dt.tzinfo] = None) -> Appointment:
    """Build an Appointment from a validated camelCase record."""
    return Appointment(
        id=str(rec["id"]),
        start_time=parse_timestamp(rec["startTime"], tz),
        end_time=parse_timestamp(rec["endTime"], tz),
        type=str(rec.get("type") or "checkup"),
        doctor_id=rec.get("doctorId"),
        patient_id=rec.get("patientId"),
    )


def dataset_from_dict(data: Dict[str, Any], *, tz: Optional[str] = "local", strict: bool = False) -> Dataset:
    if not isinstance(data, dict):
        raise ValueError(f"dataset must be a JSON object; got {type(data).__name__}")

    tz_name = normalize_tz_name(tz)
    tzinfo = resolve_tz(tz_name)

    doctors = [d for d in (_doctor_from_record(r) for r in _list(data, "doctors")) if d]
    patients = [p for p in (_patient_from_record(r) for r in _list(data, "patients")) if p]

    appointments: List[Appointment] = []
    rejected: List[str] = []
    seen: set[str] = set()
    for i, rec in enumerate(_list(data, "appointments", keep_non_dict=True)):
        errs = validate_appointment_record(rec, label=f"appointments[{i}]", tz=tzinfo)
        if not errs and rec["id"] in seen:
            # ids are unique; the first record wins
            errs = [f"appointments[{i}].id duplicated: {rec['id']!r}"]
        if errs:
            if strict:
                raise AppointmentValidationError(errs[0])
            rejected.extend(errs)
            continue
        seen.add(rec["id"])
        appointments.append(appointment_from_record(rec, tzinfo))

    if rejected:
        logger.warning("dropped %d invalid appointment record(s); first: %s", len(rejected), rejected[0])

    return Dataset(
        doctors=doctors,
        patients=patients,
        appointments=appointments,
        tz=tz_name,
        rejected=rejected,
    )


def _list(data: Dict[str, Any], key: str, *, keep_non_dict: bool = False) -> list:
    v = data.get(key) or []
    if not isinstance(v, list):
        raise ValueError(f"dataset.{key} must be a list")
    if keep_non_dict:
        return v
    return [r for r in v if isinstance(r, dict)]


def load_dataset(path: JsonPath, *, tz: Optional[str] = "local", strict: bool = False) -> Dataset:
    """Load doctors/patients/appointments from a JSON file."""
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8"))
    return dataset_from_dict(obj, tz=tz, strict=strict)


# --- serialisation ------------------------------------------------------------


def _iso(t: dt.datetime) -> str:
    return t.isoformat()


def _card(p: PopulatedAppointment) -> Dict[str, Any]:
    label, color = type_style(p.type)
    return {
        "id": p.id,
        "type": p.type,
        "type_label": label,
        "color": color,
        "patient": p.patient.name if p.patient else None,
        "start": _iso(p.start_time),
        "end": _iso(p.end_time),
        "time_label": time_range_label(p.start_time, p.end_time),
        "duration_min": duration_minutes(p.appointment),
    }


def _positioned(it: PositionedAppointment) -> Dict[str, Any]:
    g = it.geometry
    out = _card(it.item)
    out["column"] = it.placement.column
    out["column_count"] = it.placement.column_count
    out["geometry"] = {
        "top": g.top,
        "height": g.height,
        "left": g.left,
        "width": g.width,
        "unit": g.unit,
        "css": g.css(),
    }
    return out


def _day_slots(layout: DayLayout) -> List[Dict[str, Any]]:
    # Row offsets follow each slot's own span; the last slot may be shorter.
    span = minutes_between(layout.window_start, layout.window_end)
    ppm = layout.timeline_height_px / span if span > 0 else 0.0
    out = []
    for s in layout.slots:
        out.append({
            "start": _iso(s.start),
            "end": _iso(s.end),
            "label": s.label,
            "top_px": minutes_between(layout.window_start, s.start) * ppm,
            "height_px": minutes_between(s.start, s.end) * ppm,
        })
    return out


def day_layout_to_dict(layout: DayLayout, *, gutter_px: int = 8, min_column_width_px: int = 20) -> Dict[str, Any]:
    return {
        "view": "day",
        "date": layout.date.isoformat(),
        "header": layout.header,
        "doctor_line": layout.doctor_line,
        "window": {"start": _iso(layout.window_start), "end": _iso(layout.window_end)},
        "timeline_height_px": layout.timeline_height_px,
        "container_width_px": layout.container_width_px,
        "gutter_px": int(gutter_px),
        "min_column_width_px": int(min_column_width_px),
        "column_count": layout.column_count,
        "max_concurrent": layout.max_concurrent,
        "slots": _day_slots(layout),
        "items": [_positioned(it) for it in layout.items],
        "empty": layout.is_empty,
        "skipped": list(layout.skipped_ids),
    }


def week_layout_to_dict(layout: WeekLayout) -> Dict[str, Any]:
    return {
        "view": "week",
        "week_start": layout.week_start.isoformat(),
        "header": layout.header,
        "doctor_line": layout.doctor_line,
        "days": [
            {"date": d.isoformat(), "weekday": d.strftime("%a"), "label": f"{d.strftime('%b')} {d.day}"}
            for d in layout.days
        ],
        "slots": [{"label": slot_label(s.start), "start": s.start.strftime("%H:%M")} for s in layout.slots],
        "cells": [[[_card(p) for p in cell] for cell in row] for row in layout.cells],
        "total": layout.total,
        "empty": layout.is_empty,
        "skipped": list(layout.skipped_ids),
    }


def dumps_json(obj: Any, *, pretty: bool = False) -> str:
    if orjson is not None:
        opt = orjson.OPT_INDENT_2 if pretty else 0
        return orjson.dumps(obj, option=opt).decode("utf-8")
    if pretty:
        return json.dumps(obj, ensure_ascii=False, indent=2)
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
