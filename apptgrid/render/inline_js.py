# apptgrid/render/inline_js.py
from __future__ import annotations

JS_BLOCK = r"""
(function(){
  "use strict";
  const DATA = JSON.parse(document.getElementById("ag-data").textContent || "{}");
  const root = document.getElementById("calendar");

  function el(tag, cls, text){
    const n = document.createElement(tag);
    if (cls) n.className = cls;
    if (text !== undefined && text !== null) n.textContent = String(text);
    return n;
  }

  function card(it, compact){
    const c = el("div", compact ? "card compact" : "card");
    c.style.backgroundColor = it.color;
    c.setAttribute("role", "article");
    c.title = [it.patient || it.id, it.type, it.duration_min + " min"].join(" • ");
    c.appendChild(el("div", "who", it.patient || it.id));
    if (!compact) c.appendChild(el("div", "meta", it.type_label + " • " + it.duration_min + " min"));
    c.appendChild(el("div", "when", it.time_label));
    return c;
  }

  // Same column math as apptgrid.geometry.resolve_geometry (measured branch).
  function placeColumns(timeline, nodes){
    const w = timeline.clientWidth || 0;
    if (w <= 0) return;
    const G = DATA.gutter_px;
    for (const [node, it] of nodes){
      const cols = Math.max(1, it.column_count);
      const colW = Math.max(DATA.min_column_width_px, Math.floor((w - G * (cols - 1)) / cols));
      node.style.left = (it.column * (colW + G)) + "px";
      node.style.width = colW + "px";
    }
  }

  function renderDay(){
    const wrap = el("div", "day");
    const labels = el("div", "labels");
    const timeline = el("div", "timeline");
    timeline.style.height = DATA.timeline_height_px + "px";
    for (const s of DATA.slots){
      const lab = el("div", "", s.label);
      lab.style.height = s.height_px + "px";
      labels.appendChild(lab);
      const line = el("div", "slot-line");
      line.style.top = s.top_px + "px";
      timeline.appendChild(line);
    }

    const nodes = [];
    for (const it of DATA.items){
      const pos = el("div", "pos");
      const css = it.geometry.css;
      pos.style.top = css.top;
      pos.style.height = css.height;
      pos.style.left = css.left;
      pos.style.width = css.width;
      const pad = el("div", "pad");
      pad.appendChild(card(it, false));
      pos.appendChild(pad);
      timeline.appendChild(pos);
      nodes.push([pos, it]);
    }

    wrap.appendChild(labels);
    wrap.appendChild(timeline);
    root.appendChild(wrap);

    const measure = () => placeColumns(timeline, nodes);
    measure();
    if (typeof ResizeObserver !== "undefined"){
      new ResizeObserver(measure).observe(timeline);
    } else {
      window.addEventListener("resize", measure);
    }
  }

  function renderWeek(){
    const wrap = el("div", "week-wrap");
    const table = el("table", "week");
    const thead = el("thead");
    const hr = el("tr");
    hr.appendChild(el("th", "", "Time"));
    for (const d of DATA.days){
      const th = el("th");
      th.appendChild(el("div", "", d.weekday));
      th.appendChild(el("div", "muted", d.label));
      hr.appendChild(th);
    }
    thead.appendChild(hr);
    table.appendChild(thead);

    const tbody = el("tbody");
    DATA.slots.forEach((s, si) => {
      const tr = el("tr");
      tr.appendChild(el("td", "time", s.label));
      DATA.days.forEach((_d, di) => {
        const td = el("td");
        for (const it of DATA.cells[si][di]) td.appendChild(card(it, true));
        tr.appendChild(td);
      });
      tbody.appendChild(tr);
    });
    table.appendChild(tbody);
    wrap.appendChild(table);
    root.appendChild(wrap);
  }

  document.getElementById("view-header").textContent = DATA.header || "";
  document.getElementById("doctor-line").textContent = DATA.doctor_line || "Select a doctor to view schedule";
  if (DATA.view === "week") renderWeek(); else renderDay();
  if (DATA.empty){
    const e = document.getElementById("empty");
    e.textContent = DATA.view === "week" ? "No appointments scheduled for this week" : "No appointments scheduled for this day";
    e.hidden = false;
  }
})();
"""
