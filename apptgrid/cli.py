from __future__ import annotations

import argparse
import logging
import os
import sys
import webbrowser
from pathlib import Path
from typing import List, Optional

from .config import (
    DEFAULT_GUTTER_PX,
    DEFAULT_PX_PER_MIN,
    CalendarConfig,
    LayoutParams,
    calendar_config_from_env,
)
from .payload import day_layout_to_dict, dumps_json, load_dataset, week_layout_to_dict
from .render.inline import build_html
from .util.timeparse import parse_date_yyyy_mm_dd, parse_workhours
from .util.tz import at_hour, normalize_tz_name, resolve_tz, today_date
from .validate import AppointmentValidationError
from .views import compose_day_view, compose_week_view, week_range, week_start_for

logger = logging.getLogger("apptgrid")


def _die(msg: str, rc: int = 2) -> int:
    print(f"[apptgrid] ERROR: {msg}", file=sys.stderr)
    return rc


def main(argv: Optional[List[str]] = None) -> int:
    try:
        env_cfg = calendar_config_from_env()
    except ValueError as e:
        return _die(f"Invalid environment configuration: {e}")

    ap = argparse.ArgumentParser(
        prog="apptgrid",
        description="Lay out a doctor's appointments as a day timeline or a week grid (JSON or HTML).",
    )
    ap.add_argument("--in", dest="in_json", required=True, help="Dataset JSON with doctors/patients/appointments")
    ap.add_argument("--doctor", required=True, help="Doctor id whose schedule is rendered")
    ap.add_argument("--date", default=None, help="Day to show, YYYY-MM-DD (default: today in --tz)")
    ap.add_argument("--view", choices=("day", "week"), default="day", help="Calendar view (default: day)")
    ap.add_argument("--format", choices=("html", "json"), default="html", help="Output format (default: html)")
    ap.add_argument("--out", default=None, help="Output path (default: ./build/apptgrid_<view>.<format>; '-' for stdout)")
    ap.add_argument(
        "--workhours",
        default=f"{env_cfg.start_hour:02d}:00-{env_cfg.end_hour:02d}:00",
        help="Operating window, e.g. 08:00-18:00 (default: env APPTGRID_WORKHOURS or 08:00-18:00)",
    )
    ap.add_argument(
        "--slot",
        type=int,
        default=env_cfg.slot_duration,
        help="Slot length in minutes (default: env APPTGRID_SLOT_MIN or 30)",
    )
    ap.add_argument("--width", type=int, default=None, help="Measured timeline width in px (default: percent layout)")
    ap.add_argument("--px-per-min", type=float, default=DEFAULT_PX_PER_MIN, help="Vertical scale (default: 1.0)")
    ap.add_argument("--gutter", type=int, default=DEFAULT_GUTTER_PX, help="Gap between columns in px (default: 8)")
    ap.add_argument("--tz", default=env_cfg.tz, help="Timezone for day boundaries (default: env APPTGRID_TZ or 'local')")
    ap.add_argument("--strict", action="store_true", help="Fail on invalid appointment records instead of dropping them")
    ap.add_argument("--no-open", action="store_true", help="Do not open generated HTML in a browser")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    tz_name = normalize_tz_name(args.tz)
    try:
        tzinfo = resolve_tz(tz_name)
    except ValueError as e:
        return _die(f"Invalid --tz value: {e}")

    try:
        start_hour, end_hour = parse_workhours(args.workhours)
        cfg = CalendarConfig(start_hour=start_hour, end_hour=end_hour, slot_duration=int(args.slot), tz=tz_name)
        day = parse_date_yyyy_mm_dd(args.date) if args.date else today_date(tzinfo)
    except ValueError as e:
        return _die(str(e))

    layout = LayoutParams(pixels_per_minute=float(args.px_per_min), gutter_px=int(args.gutter))

    in_path = Path(args.in_json)
    if not in_path.exists():
        return _die(f"Missing input JSON: {in_path}")
    try:
        ds = load_dataset(in_path, tz=tz_name, strict=bool(args.strict))
    except AppointmentValidationError as e:
        return _die(f"Invalid appointment: {e}")
    except ValueError as e:
        return _die(f"Failed to load dataset: {in_path} ({e})")

    doctor = ds.doctor(args.doctor)
    if doctor is None:
        logger.warning("unknown doctor id %r; rendering without header", args.doctor)
    lookup = ds.directory()

    if args.view == "day":
        appts = ds.appointments_for(args.doctor, at_hour(day, 0, tzinfo), at_hour(day, 24, tzinfo))
        dl = compose_day_view(
            appts,
            day,
            cfg,
            doctor=doctor,
            lookup=lookup,
            container_width_px=args.width,
            layout=layout,
            tzinfo=tzinfo,
        )
        view = day_layout_to_dict(dl, gutter_px=layout.gutter_px, min_column_width_px=layout.min_column_width_px)
        logger.info("day %s: %d appointment(s), %d column(s)", day.isoformat(), len(dl.items), dl.column_count)
    else:
        start, end = week_range(day, tzinfo)
        appts = ds.appointments_for(args.doctor, start, end)
        wl = compose_week_view(appts, week_start_for(day), cfg, doctor=doctor, lookup=lookup, tzinfo=tzinfo)
        view = week_layout_to_dict(wl)
        logger.info("week of %s: %d appointment(s)", wl.week_start.isoformat(), wl.total)

    text = build_html(view) if args.format == "html" else dumps_json(view, pretty=True)

    if args.out == "-":
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return 0

    out = args.out or os.path.join("build", f"apptgrid_{args.view}.{args.format}")
    out_path = Path(out).resolve()
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
    except OSError as e:
        return _die(f"Cannot write output '{out_path}': {e}")

    print(str(out_path))

    if args.format == "html" and not args.no_open:
        try:
            webbrowser.open("file://" + str(out_path))
        except Exception:
            pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
