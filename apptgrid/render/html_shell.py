# apptgrid/render/html_shell.py
from __future__ import annotations

HTML_SHELL = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>__TITLE__</title>
<style>
__CSS_BLOCK__
</style>
</head>
<body>
<main class="schedule">
  <header class="schedule-h">
    <h2>Doctor Schedule</h2>
    <h3 id="view-header"></h3>
    <p id="doctor-line" class="muted"></p>
  </header>
  <section id="calendar"></section>
  <p id="empty" class="empty" hidden></p>
</main>
<script id="ag-data" type="application/json">
__DATA_JSON__
</script>

<script>
__JS_BLOCK__
</script>
</body>
</html>
"""
