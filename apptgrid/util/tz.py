# apptgrid/util/tz.py
from __future__ import annotations

import datetime as dt
import os
import re
from typing import Optional

try:
    from zoneinfo import ZoneInfo  # py3.9+
except Exception:  # pragma: no cover
    ZoneInfo = None  # type: ignore

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_LOCALTIME = "/etc/localtime"


def normalize_tz_name(name: Optional[str]) -> str:
    """Normalize a timezone identifier.

    Supported forms:
      - None/"" -> "local"
      - "local" / "system" -> "local" (resolve to the machine's local timezone)
      - "UTC" / "Z" / "GMT" -> "UTC"
      - IANA names, e.g. "America/New_York"
      - Fixed offsets: "+02:00", "+0200", "-05:00"
    """
    if name is None:
        return "local"
    s = str(name).strip()
    if not s:
        return "local"

    low = s.lower()
    if low in {"local", "system", "native"}:
        return "local"
    if low in {"utc", "z", "gmt", "utc0", "utc+0"}:
        return "UTC"

    return s


def system_tz() -> dt.tzinfo:
    """The machine's zone with its DST rules.

    Tries $TZ as an IANA key, then /etc/localtime. Falls back to the current
    fixed UTC offset when neither yields zone data.
    """
    if ZoneInfo is not None:
        key = os.environ.get("TZ", "").strip().lstrip(":")
        if key:
            try:
                return ZoneInfo(key)  # type: ignore[misc]
            except (KeyError, ValueError, OSError):
                pass
        else:
            try:
                with open(_LOCALTIME, "rb") as fh:
                    return ZoneInfo.from_file(fh, key="localtime")  # type: ignore[union-attr]
            except (OSError, ValueError):
                pass
    return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name into a tzinfo.

    Raises ValueError for invalid timezone identifiers.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        return system_tz()

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh = int(hh_s)
        mm = int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(sign * dt.timedelta(hours=hh, minutes=mm))

    if ZoneInfo is not None:
        try:
            return ZoneInfo(tz_name)  # type: ignore[misc]
        except Exception as ex:
            raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex

    raise ValueError(f"Invalid timezone identifier: {tz_name!r} (zoneinfo unavailable)")


def today_date(tz: dt.tzinfo) -> dt.date:
    return dt.datetime.now(tz=tz).date()


def at_hour(d: dt.date, hour: int, tz: Optional[dt.tzinfo] = None) -> dt.datetime:
    """`hour:00:00.000` on date `d`; hour 24 is the following midnight."""
    base = dt.datetime(d.year, d.month, d.day, 0, 0, 0, tzinfo=tz)
    return base + dt.timedelta(hours=int(hour))


def attach_tz(value: dt.datetime, tz: Optional[dt.tzinfo]) -> dt.datetime:
    # Naive -> tz; aware values are converted so all comparisons share one zone.
    if tz is None:
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)
