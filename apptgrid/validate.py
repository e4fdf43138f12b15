"""Ingestion validation for appointment records (dataset-facing)."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from apptgrid.util.timeparse import parse_timestamp


class AppointmentValidationError(ValueError):
    """Raised when an appointment record fails validation."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _ts(value: Any, tz: Optional[dt.tzinfo]) -> Optional[dt.datetime]:
    if isinstance(value, dt.datetime):
        return value
    if not isinstance(value, str):
        return None
    try:
        return parse_timestamp(value, tz)
    except ValueError:
        return None


def validate_appointment_record(
    rec: Dict[str, Any],
    *,
    label: str = "appointment",
    tz: Optional[dt.tzinfo] = None,
) -> List[str]:
    """Return a list of problems with one raw appointment record (empty == valid)."""
    if not isinstance(rec, dict):
        return [f"{label}: must be a dict/object"]

    errs: List[str] = []
    uid = rec.get("id")
    _require(isinstance(uid, str) and bool(uid.strip()), f"{label}.id must be non-empty string", errs)

    start = _ts(rec.get("startTime"), tz)
    end = _ts(rec.get("endTime"), tz)
    _require(start is not None, f"{label}.startTime must be an ISO-8601 timestamp", errs)
    _require(end is not None, f"{label}.endTime must be an ISO-8601 timestamp", errs)
    if start is not None and end is not None and (start.tzinfo is None) != (end.tzinfo is None):
        errs.append(f"{label}: startTime and endTime must both carry or both omit a UTC offset")
    elif start is not None and end is not None:
        _require(end > start, f"{label}: endTime must be after startTime ({rec.get('startTime')} >= {rec.get('endTime')})", errs)

    typ = rec.get("type")
    if typ is not None:
        _require(isinstance(typ, str) and bool(typ), f"{label}.type must be non-empty string", errs)
    return errs


def validate_appointment_records(records: Any, *, tz: Optional[dt.tzinfo] = None) -> List[str]:
    if not isinstance(records, list):
        return ["appointments must be a list"]
    errs: List[str] = []
    seen: set[str] = set()
    for i, rec in enumerate(records):
        errs.extend(validate_appointment_record(rec, label=f"appointments[{i}]", tz=tz))
        uid = rec.get("id") if isinstance(rec, dict) else None
        if isinstance(uid, str) and uid:
            if uid in seen:
                errs.append(f"appointments[{i}].id duplicated: {uid!r}")
            seen.add(uid)
    return errs


def assert_valid_appointment_record(rec: Dict[str, Any], *, tz: Optional[dt.tzinfo] = None) -> None:
    errs = validate_appointment_record(rec, tz=tz)
    if errs:
        raise AppointmentValidationError(errs[0])


__all__ = [
    "AppointmentValidationError",
    "assert_valid_appointment_record",
    "validate_appointment_record",
    "validate_appointment_records",
]
