from __future__ import annotations

import json
import os
import subprocess
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from apptgrid import cli

REPO_ROOT = Path(__file__).resolve().parents[1]

DATA = {
    "doctors": [{"id": "d1", "name": "Sarah Chen", "specialty": "family-medicine"}],
    "patients": [{"id": "p1", "name": "John Smith"}, {"id": "p2", "name": "Mary Jones"}],
    "appointments": [
        {"id": "a1", "doctorId": "d1", "patientId": "p1", "type": "checkup",
         "startTime": "2024-10-15T09:00:00", "endTime": "2024-10-15T09:30:00"},
        {"id": "a2", "doctorId": "d1", "patientId": "p2", "type": "consultation",
         "startTime": "2024-10-15T09:15:00", "endTime": "2024-10-15T09:45:00"},
        {"id": "a3", "doctorId": "d1", "patientId": "p1", "type": "follow-up",
         "startTime": "2024-10-15T09:30:00", "endTime": "2024-10-15T10:00:00"},
        {"id": "a4", "doctorId": "d1", "patientId": "p2", "type": "procedure",
         "startTime": "2024-10-17T10:05:00", "endTime": "2024-10-17T10:50:00"},
    ],
}


class TestCliContract(unittest.TestCase):
    def _write_data(self, td: Path) -> Path:
        p = td / "data.json"
        p.write_text(json.dumps(DATA), encoding="utf-8")
        return p

    def test_day_json_output(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tdp = Path(td)
            data = self._write_data(tdp)
            out = tdp / "day.json"
            rc = cli.main([
                "--in", str(data), "--doctor", "d1", "--date", "2024-10-15",
                "--format", "json", "--out", str(out), "--width", "320", "--tz", "UTC",
            ])
            self.assertEqual(rc, 0)
            view = json.loads(out.read_text(encoding="utf-8"))

        self.assertEqual(view["column_count"], 2)
        cols = {it["id"]: it["column"] for it in view["items"]}
        self.assertEqual(cols, {"a1": 0, "a2": 1, "a3": 0})
        self.assertEqual(view["doctor_line"], "Dr. Sarah Chen - Family Medicine")
        self.assertEqual(view["items"][1]["geometry"]["left"], 164)

    def test_week_html_default_out_is_build_relative_to_cwd(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = Path(td)
            data = self._write_data(tmp)
            old_cwd = Path.cwd()
            try:
                os.chdir(tmp)
                with patch("apptgrid.cli.webbrowser.open") as wb:
                    rc = cli.main(["--in", str(data), "--doctor", "d1", "--date", "2024-10-16", "--view", "week", "--tz", "UTC"])
            finally:
                os.chdir(old_cwd)

            self.assertEqual(rc, 0)
            out = tmp / "build" / "apptgrid_week.html"
            self.assertTrue(out.exists())
            self.assertTrue(wb.called)
            html = out.read_text(encoding="utf-8")
            self.assertIn("Oct 14 - Oct 20, 2024", html)
            self.assertNotIn("__DATA_JSON__", html)

    def test_user_errors_exit_2(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            data = self._write_data(Path(td))
            with patch("sys.stderr"):
                self.assertEqual(cli.main(["--in", str(data), "--doctor", "d1", "--tz", "No/Such_Zone", "--out", "-"]), 2)
                self.assertEqual(cli.main(["--in", str(data), "--doctor", "d1", "--workhours", "18:00-08:00", "--out", "-"]), 2)
                self.assertEqual(cli.main(["--in", str(data), "--doctor", "d1", "--slot", "0", "--out", "-"]), 2)
                self.assertEqual(cli.main(["--in", str(Path(td) / "missing.json"), "--doctor", "d1", "--out", "-"]), 2)

    def test_module_entrypoint_writes_stdout(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            data = self._write_data(Path(td))
            env = os.environ.copy()
            env["PYTHONPATH"] = str(REPO_ROOT)
            env["APPTGRID_SLOT_MIN"] = "60"
            cmd = [
                sys.executable, "-m", "apptgrid.cli",
                "--in", str(data), "--doctor", "d1", "--date", "2024-10-17",
                "--view", "week", "--format", "json", "--out", "-", "--tz", "UTC",
            ]
            p = subprocess.run(cmd, cwd=str(REPO_ROOT), env=env, capture_output=True, text=True)

        self.assertEqual(p.returncode, 0, p.stderr)
        view = json.loads(p.stdout)
        self.assertEqual(len(view["slots"]), 10)
        row = [s["label"] for s in view["slots"]].index("10:00 AM")
        self.assertEqual([c["id"] for c in view["cells"][row][3]], ["a4"])
        self.assertEqual(view["total"], 4)


if __name__ == "__main__":
    unittest.main(verbosity=2)
