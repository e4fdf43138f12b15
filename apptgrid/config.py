# apptgrid/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .util.timeparse import parse_workhours

DEFAULT_START_HOUR = 8
DEFAULT_END_HOUR = 18
DEFAULT_SLOT_MIN = 30

DEFAULT_PX_PER_MIN = 1.0
DEFAULT_GUTTER_PX = 8
DEFAULT_MIN_HEIGHT_PX = 20
DEFAULT_MIN_COLUMN_WIDTH_PX = 20


@dataclass(frozen=True)
class CalendarConfig:
    """Operating window and slot size shared by the day and week views."""

    start_hour: int = DEFAULT_START_HOUR
    end_hour: int = DEFAULT_END_HOUR
    slot_duration: int = DEFAULT_SLOT_MIN  # minutes
    tz: Optional[str] = None  # None: naive wall-clock times

    def __post_init__(self) -> None:
        if not (0 <= int(self.start_hour) < int(self.end_hour) <= 24):
            raise ValueError(
                f"calendar hours must satisfy 0 <= start_hour < end_hour <= 24 "
                f"(got {self.start_hour}-{self.end_hour})"
            )
        if int(self.slot_duration) <= 0:
            raise ValueError(f"slot_duration must be > 0 (got {self.slot_duration})")

    @property
    def window_minutes(self) -> int:
        return (int(self.end_hour) - int(self.start_hour)) * 60


@dataclass(frozen=True)
class LayoutParams:
    pixels_per_minute: float = DEFAULT_PX_PER_MIN
    gutter_px: int = DEFAULT_GUTTER_PX
    min_height_px: int = DEFAULT_MIN_HEIGHT_PX
    min_column_width_px: int = DEFAULT_MIN_COLUMN_WIDTH_PX


DEFAULT_CALENDAR_CONFIG = CalendarConfig()


def _opt_str(v: Any) -> Optional[str]:
    s = str(v).strip() if v is not None else ""
    return s or None


def calendar_config_from_dict(cfg: Optional[Mapping[str, Any]]) -> CalendarConfig:
    """Build a CalendarConfig from a loose dict (camelCase keys accepted)."""
    cfg = cfg or {}

    def _pick(*keys: str, default: Any) -> Any:
        for k in keys:
            v = cfg.get(k)
            if v is not None:
                return v
        return default

    return CalendarConfig(
        start_hour=int(_pick("start_hour", "startHour", default=DEFAULT_START_HOUR)),
        end_hour=int(_pick("end_hour", "endHour", default=DEFAULT_END_HOUR)),
        slot_duration=int(_pick("slot_duration", "slotDuration", default=DEFAULT_SLOT_MIN)),
        tz=_opt_str(_pick("tz", default=None)),
    )


def calendar_config_from_env(
    base: CalendarConfig = DEFAULT_CALENDAR_CONFIG,
    environ: Optional[Mapping[str, str]] = None,
) -> CalendarConfig:
    """Overlay APPTGRID_WORKHOURS / APPTGRID_SLOT_MIN / APPTGRID_TZ on `base`."""
    env = os.environ if environ is None else environ
    out = base

    wh = (env.get("APPTGRID_WORKHOURS") or "").strip()
    if wh:
        sh, eh = parse_workhours(wh)
        out = replace(out, start_hour=sh, end_hour=eh)

    slot = (env.get("APPTGRID_SLOT_MIN") or "").strip()
    if slot:
        try:
            out = replace(out, slot_duration=int(slot))
        except ValueError as ex:
            raise ValueError(f"APPTGRID_SLOT_MIN must be a positive integer (got {slot!r})") from ex

    tz = (env.get("APPTGRID_TZ") or "").strip()
    if tz:
        out = replace(out, tz=tz)

    return out


__all__ = [
    "CalendarConfig",
    "LayoutParams",
    "DEFAULT_CALENDAR_CONFIG",
    "calendar_config_from_dict",
    "calendar_config_from_env",
]
