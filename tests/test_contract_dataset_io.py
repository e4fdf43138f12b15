from __future__ import annotations

import datetime as dt
import json
import tempfile
import unittest
from pathlib import Path

from apptgrid.payload import dataset_from_dict, day_layout_to_dict, dumps_json, load_dataset, week_layout_to_dict
from apptgrid.validate import (
    AppointmentValidationError,
    assert_valid_appointment_record,
    validate_appointment_record,
    validate_appointment_records,
)
from apptgrid.views import compose_day_view, compose_week_view

DATA = {
    "doctors": [{"id": "d1", "name": "Sarah Chen", "specialty": "cardiology"}, {"id": "d2", "name": "Omar Haddad"}],
    "patients": [{"id": "p1", "name": "John Smith"}],
    "appointments": [
        {"id": "a1", "doctorId": "d1", "patientId": "p1", "type": "checkup",
         "startTime": "2024-10-15T09:00:00Z", "endTime": "2024-10-15T09:30:00Z"},
        {"id": "a2", "doctorId": "d1", "patientId": "p1", "type": "procedure",
         "startTime": "2024-10-15T09:15:00", "endTime": "2024-10-15T10:00:00"},
        {"id": "a3", "doctorId": "d2", "patientId": "p1",
         "startTime": "2024-10-15T11:00:00Z", "endTime": "2024-10-15T11:20:00Z"},
        {"id": "bad", "doctorId": "d1", "patientId": "p1",
         "startTime": "2024-10-15T12:00:00Z", "endTime": "2024-10-15T12:00:00Z"},
    ],
}


class TestValidateContract(unittest.TestCase):
    def test_rejects_non_positive_duration_and_bad_fields(self) -> None:
        errs = validate_appointment_record({"id": "x", "startTime": "2024-01-01T10:00", "endTime": "2024-01-01T09:00"})
        self.assertEqual(len(errs), 1)
        self.assertIn("endTime must be after startTime", errs[0])

        errs = validate_appointment_record({"id": "", "startTime": "nope"})
        self.assertEqual(len(errs), 3)

        self.assertEqual(validate_appointment_record("x"), ["appointment: must be a dict/object"])  # type: ignore[arg-type]

        with self.assertRaises(AppointmentValidationError):
            assert_valid_appointment_record({"id": "x", "startTime": "2024-01-01T10:00", "endTime": "2024-01-01T10:00"})

    def test_duplicate_ids_flagged(self) -> None:
        rec = {"id": "dup", "startTime": "2024-01-01T09:00", "endTime": "2024-01-01T10:00"}
        errs = validate_appointment_records([rec, dict(rec)])
        self.assertEqual(errs, ["appointments[1].id duplicated: 'dup'"])
        self.assertEqual(validate_appointment_records({}), ["appointments must be a list"])


class TestDatasetIoContract(unittest.TestCase):
    def test_load_drops_invalid_records_with_warning(self) -> None:
        with self.assertLogs("apptgrid.payload", level="WARNING"):
            ds = dataset_from_dict(DATA, tz="UTC")

        self.assertEqual([a.id for a in ds.appointments], ["a1", "a2", "a3"])
        self.assertEqual(len(ds.rejected), 1)
        a2 = ds.appointments[1]
        self.assertEqual(a2.start_time, dt.datetime(2024, 10, 15, 9, 15, tzinfo=dt.timezone.utc))
        self.assertEqual(ds.appointments[2].type, "checkup")

    def test_strict_load_raises(self) -> None:
        with self.assertRaises(AppointmentValidationError):
            dataset_from_dict(DATA, tz="UTC", strict=True)

    def test_appointments_for_doctor_and_range(self) -> None:
        with self.assertLogs("apptgrid.payload", level="WARNING"):
            ds = dataset_from_dict(DATA, tz="UTC")
        utc = dt.timezone.utc
        self.assertEqual([a.id for a in ds.appointments_for("d1")], ["a1", "a2"])
        got = ds.appointments_for("d1", dt.datetime(2024, 10, 15, 9, 30, tzinfo=utc), dt.datetime(2024, 10, 16, tzinfo=utc))
        self.assertEqual([a.id for a in got], ["a2"])
        self.assertEqual(ds.doctor("d2").name, "Omar Haddad")
        self.assertIsNone(ds.doctor("zz"))

    def test_load_dataset_from_file_and_serialise_views(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "data.json"
            p.write_text(json.dumps(DATA), encoding="utf-8")
            with self.assertLogs("apptgrid.payload", level="WARNING"):
                ds = load_dataset(p, tz="UTC")

        utc = dt.timezone.utc
        day = dt.date(2024, 10, 15)
        dl = compose_day_view(
            ds.appointments_for("d1"), day, doctor=ds.doctor("d1"), lookup=ds.directory(),
            container_width_px=320, tzinfo=utc,
        )
        out = day_layout_to_dict(dl)
        self.assertEqual(out["view"], "day")
        self.assertEqual(out["column_count"], 2)
        self.assertEqual([it["id"] for it in out["items"]], ["a1", "a2"])
        first = out["items"][0]
        self.assertEqual(first["patient"], "John Smith")
        self.assertEqual(first["geometry"]["css"]["left"], "0px")
        self.assertEqual(first["time_label"], "9:00 AM - 9:30 AM")
        self.assertEqual(out["items"][1]["geometry"]["left"], 164)
        self.assertEqual(json.loads(dumps_json(out)), json.loads(json.dumps(out)))

        wl = compose_week_view(ds.appointments_for("d1"), dt.date(2024, 10, 14), lookup=ds.directory(), tzinfo=utc)
        wout = week_layout_to_dict(wl)
        self.assertEqual(wout["total"], 2)
        self.assertEqual(wout["days"][1]["weekday"], "Tue")
        self.assertEqual([c["id"] for c in wout["cells"][2][1]], ["a1", "a2"])
        self.assertEqual(wout["cells"][2][1][1]["type_label"], "Procedure")

    def test_repeated_id_is_rejected_and_columns_stay_disjoint(self) -> None:
        data = {
            "appointments": [
                {"id": "dup", "startTime": "2024-10-15T09:00:00Z", "endTime": "2024-10-15T10:00:00Z"},
                {"id": "dup", "startTime": "2024-10-15T09:15:00Z", "endTime": "2024-10-15T09:45:00Z"},
                {"id": "other", "startTime": "2024-10-15T09:15:00Z", "endTime": "2024-10-15T09:45:00Z"},
            ],
        }
        with self.assertLogs("apptgrid.payload", level="WARNING") as cm:
            ds = dataset_from_dict(data, tz="UTC")

        self.assertEqual([a.id for a in ds.appointments], ["dup", "other"])
        self.assertEqual(ds.appointments[0].end_time, dt.datetime(2024, 10, 15, 10, tzinfo=dt.timezone.utc))
        self.assertEqual(ds.rejected, ["appointments[1].id duplicated: 'dup'"])
        self.assertTrue(any("duplicated" in line for line in cm.output))

        dl = compose_day_view(ds.appointments, dt.date(2024, 10, 15), container_width_px=320, tzinfo=dt.timezone.utc)
        self.assertEqual([it.placement.column for it in dl.items], [0, 1])
        self.assertEqual([it.geometry.left for it in dl.items], [0, 164])

        with self.assertRaises(AppointmentValidationError):
            dataset_from_dict(data, tz="UTC", strict=True)

    def test_dataset_must_be_object(self) -> None:
        with self.assertRaises(ValueError):
            dataset_from_dict([], tz="UTC")  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            dataset_from_dict({"appointments": {}}, tz="UTC")


if __name__ == "__main__":
    unittest.main(verbosity=2)
