# apptgrid/render/inline_css.py
from __future__ import annotations

CSS_BLOCK = r"""
:root{
  --bg:#ffffff; --fg:#111827; --muted:#4b5563; --line:#e5e7eb; --head:#f9fafb;
  --label-w:6rem;
}
*{box-sizing:border-box}
body{margin:0;font:14px/1.4 system-ui,-apple-system,"Segoe UI",Roboto,sans-serif;color:var(--fg);background:#f3f4f6}
.schedule{max-width:1100px;margin:24px auto;background:var(--bg);border-radius:8px;box-shadow:0 2px 8px rgba(0,0,0,.08);padding:24px}
.schedule-h h2{margin:0 0 4px;font-size:22px}
.schedule-h h3{margin:12px 0 2px;font-size:17px}
.muted{color:var(--muted);margin:0 0 12px;font-size:13px}
.empty{margin-top:16px;text-align:center;color:#6b7280;font-size:13px}

.day{display:flex;border:1px solid var(--line);border-radius:8px;overflow:hidden}
.day .labels{width:var(--label-w);padding:8px;flex:none}
.day .labels div{font-size:13px;color:var(--muted);overflow:hidden}
.day .timeline{position:relative;flex:1;margin:8px}
.day .slot-line{position:absolute;left:0;right:0;border-top:1px dashed var(--line)}
.day .pos{position:absolute}
.day .pos .pad{height:100%;width:100%;padding:4px}

.card{border-radius:6px;color:#fff;font-size:13px;padding:6px;height:100%;overflow:hidden;
  display:flex;flex-direction:column;justify-content:space-between;box-shadow:0 1px 2px rgba(0,0,0,.1)}
.card .who{font-weight:600;white-space:nowrap;overflow:hidden;text-overflow:ellipsis}
.card .meta,.card .when{font-size:12px;opacity:.9;white-space:nowrap;overflow:hidden;text-overflow:ellipsis}
.card.compact{margin-bottom:4px;height:auto}

.week-wrap{border:1px solid var(--line);border-radius:8px;overflow-x:auto}
table.week{min-width:100%;table-layout:fixed;border-collapse:collapse}
table.week th{background:var(--head);font-size:12px;padding:8px;border-left:1px solid var(--line)}
table.week th:first-child{width:var(--label-w);border-left:0}
table.week td{vertical-align:top;padding:4px;border-left:1px solid var(--line);border-top:1px solid var(--line);min-height:48px}
table.week td.time{font-size:12px;color:var(--muted);border-left:0}
"""
