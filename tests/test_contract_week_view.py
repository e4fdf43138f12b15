from __future__ import annotations

import datetime as dt
import unittest

from apptgrid.enrich import Directory
from apptgrid.model import Appointment, Doctor, Patient
from apptgrid.views import compose_week_view, week_days, week_range, week_start_for

MONDAY = dt.date(2024, 10, 14)


def _at(day: dt.date, h: int, m: int = 0) -> dt.datetime:
    return dt.datetime(day.year, day.month, day.day, h, m)


def _appt(uid: str, start: dt.datetime, minutes: int = 30, patient: str = "p1") -> Appointment:
    return Appointment(
        id=uid,
        start_time=start,
        end_time=start + dt.timedelta(minutes=minutes),
        doctor_id="d1",
        patient_id=patient,
    )


class TestWeekViewContract(unittest.TestCase):
    def test_week_starts_on_monday(self) -> None:
        self.assertEqual(week_start_for(dt.date(2024, 10, 16)), MONDAY)
        self.assertEqual(week_start_for(MONDAY), MONDAY)
        self.assertEqual(week_start_for(dt.date(2024, 10, 20)), MONDAY)  # Sunday
        days = week_days(MONDAY)
        self.assertEqual(len(days), 7)
        self.assertEqual(days[-1], dt.date(2024, 10, 20))

    def test_week_range_for_data_acquisition(self) -> None:
        start, end = week_range(dt.date(2024, 10, 17))
        self.assertEqual(start, dt.datetime(2024, 10, 14, 0, 0, 0))
        self.assertEqual(end, dt.datetime(2024, 10, 20, 23, 59, 59))

    def test_appointment_owned_by_start_slot_only(self) -> None:
        wed = MONDAY + dt.timedelta(days=2)
        week = compose_week_view([_appt("x", _at(wed, 10, 5), minutes=60)], MONDAY)

        labels = [s.label for s in week.slots]
        owner = labels.index("10:00 AM")
        for si in range(len(week.slots)):
            for di in range(7):
                ids = [p.id for p in week.cells[si][di]]
                if si == owner and di == 2:
                    self.assertEqual(ids, ["x"])
                else:
                    self.assertEqual(ids, [], f"slot {labels[si]} day {di}")
        self.assertEqual(week.total, 1)
        self.assertFalse(week.is_empty)

    def test_cell_keeps_source_order(self) -> None:
        tue = MONDAY + dt.timedelta(days=1)
        appts = [_appt("z", _at(tue, 9, 20)), _appt("a", _at(tue, 9, 0)), _appt("m", _at(tue, 9, 10))]
        week = compose_week_view(appts, MONDAY)
        row = [s.label for s in week.slots].index("9:00 AM")
        self.assertEqual([p.id for p in week.cells[row][1]], ["z", "a", "m"])

    def test_outside_operating_hours_and_week_not_shown(self) -> None:
        appts = [
            _appt("early", _at(MONDAY, 7, 30)),
            _appt("late", _at(MONDAY, 18, 0)),
            _appt("next-week", _at(MONDAY + dt.timedelta(days=7), 9)),
        ]
        week = compose_week_view(appts, MONDAY)
        self.assertEqual(week.total, 0)
        self.assertTrue(week.is_empty)

    def test_headers_and_enrichment_skip(self) -> None:
        doctor = Doctor(id="d1", name="Sarah Chen", specialty="cardiology")
        lookup = Directory.from_records([doctor], [Patient(id="p1", name="Ann Lee")])
        appts = [_appt("ok", _at(MONDAY, 9)), _appt("lost", _at(MONDAY, 9), patient="missing")]

        with self.assertLogs("apptgrid.views", level="WARNING"):
            week = compose_week_view(appts, MONDAY, doctor=doctor, lookup=lookup)

        self.assertEqual(week.header, "Oct 14 - Oct 20, 2024")
        self.assertEqual(week.doctor_line, "Sarah Chen - Cardiology")
        self.assertEqual(week.total, 1)
        self.assertEqual(week.skipped_ids, ("lost",))
        self.assertEqual(week.cells[2][0][0].patient.name, "Ann Lee")


if __name__ == "__main__":
    unittest.main(verbosity=2)
