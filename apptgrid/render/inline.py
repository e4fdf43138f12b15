# apptgrid/render/inline.py
from __future__ import annotations

import html as _html

from ..payload import dumps_json
from .template import HTML_TEMPLATE

_DATA_MARKER = "__DATA_JSON__"
_DATA_MARKER_COUNT = HTML_TEMPLATE.count(_DATA_MARKER)
_TITLE_MARKER = "__TITLE__"


def build_html(view: dict) -> str:
    # Inject the composed view (day_layout_to_dict / week_layout_to_dict) into the template.
    # The template holds the __DATA_JSON__ placeholder exactly once. Markers are only
    # substituted in the template pieces, never inside the injected data.
    if not isinstance(view, dict):
        raise TypeError(f"view must be dict, got {type(view).__name__}")

    if _DATA_MARKER_COUNT != 1:
        raise RuntimeError(f"HTML_TEMPLATE must contain {_DATA_MARKER} exactly once (found {_DATA_MARKER_COUNT})")

    data_json = dumps_json(view).replace("</", r"<\/")  # script-safe injection
    title = _html.escape(str(view.get("header") or "Schedule"))

    head, tail = HTML_TEMPLATE.split(_DATA_MARKER)
    head = head.replace(_TITLE_MARKER, f"{title} • Doctor Schedule")
    return head + data_json + tail
