"""Operator dashboard route.

The page is static; it polls ``/api/stats`` and renders client-side.
"""

from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

REFRESH_INTERVAL_MS = 2000

DASHBOARD_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>BioSky Ingester</title>
  <style>
    body { font-family: monospace; padding: 1rem; }
    table { border-collapse: collapse; margin-bottom: 1rem; }
    td, th { text-align: left; padding: 0.25rem 1rem 0.25rem 0; }
    .connected { color: green; }
    .disconnected { color: red; }
    h2 { margin-top: 1rem; }
    .event { margin: 0.25rem 0; }
  </style>
</head>
<body>
  <h1>BioSky Ingester</h1>

  <table>
    <tr><td>Status</td><td id="status">Loading...</td></tr>
    <tr><td>Cursor</td><td id="cursor">-</td></tr>
    <tr><td>Uptime</td><td id="uptime">-</td></tr>
    <tr><td>Lag</td><td id="lag">-</td></tr>
  </table>

  <h2>Stats</h2>
  <table>
    <tr><td>Occurrences</td><td id="occurrences">0</td></tr>
    <tr><td>Identifications</td><td id="identifications">0</td></tr>
    <tr><td>Errors</td><td id="errors">0</td></tr>
  </table>

  <h2>Recent Events</h2>
  <div id="events">No events yet...</div>

  <script>
    const STATS_URL = '/api/stats';
    const REFRESH_MS = __REFRESH_MS__;
    const EMPTY_EVENTS = 'No events yet...';

    function formatDuration(seconds) {
      const h = Math.floor(seconds / 3600);
      const m = Math.floor((seconds % 3600) / 60);
      const s = seconds % 60;
      if (h > 0) return h + 'h ' + m + 'm ' + s + 's';
      if (m > 0) return m + 'm ' + s + 's';
      return s + 's';
    }

    function formatLag(lastProcessed) {
      if (!lastProcessed || !lastProcessed.time) return '-';
      const lagMs = Date.now() - new Date(lastProcessed.time).getTime();
      if (lagMs < 0) return '0s';
      return formatDuration(Math.floor(lagMs / 1000));
    }

    function formatCount(value) {
      return value === null || value === undefined ? '-' : value.toLocaleString();
    }

    function setText(id, text) {
      document.getElementById(id).textContent = text;
    }

    function renderEvents(events) {
      const eventsEl = document.getElementById('events');
      eventsEl.replaceChildren();
      if (!events || events.length === 0) {
        eventsEl.textContent = EMPTY_EVENTS;
        return;
      }
      for (const e of events) {
        const line = document.createElement('div');
        line.className = 'event';
        line.textContent = new Date(e.time).toLocaleTimeString() +
          ' [' + e.type + '] ' + e.action + ' ' + e.uri;
        eventsEl.appendChild(line);
      }
    }

    async function refresh() {
      const statusEl = document.getElementById('status');
      try {
        const res = await fetch(STATS_URL);
        if (!res.ok) throw new Error('HTTP ' + res.status);
        const data = await res.json();

        statusEl.textContent = data.connected ? 'Connected' : 'Disconnected';
        statusEl.className = data.connected ? 'connected' : 'disconnected';

        setText('cursor', formatCount(data.cursor));
        setText('uptime', formatDuration(data.uptime));
        setText('lag', formatLag(data.lastProcessed));
        setText('occurrences', formatCount(data.stats.occurrences));
        setText('identifications', formatCount(data.stats.identifications));
        setText('errors', formatCount(data.stats.errors));

        renderEvents(data.recentEvents);
      } catch (err) {
        statusEl.textContent = 'Error';
        statusEl.className = 'disconnected';
      }
    }

    refresh();
    setInterval(refresh, REFRESH_MS);
  </script>
</body>
</html>
""".replace("__REFRESH_MS__", str(REFRESH_INTERVAL_MS))


@router.get("/", response_class=HTMLResponse, summary="Status dashboard")
def dashboard() -> HTMLResponse:
    return HTMLResponse(content=DASHBOARD_HTML)


__all__ = ["router", "DASHBOARD_HTML", "REFRESH_INTERVAL_MS"]
