from __future__ import annotations

from html import escape

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ...core import system
from ...core.state import ServerState
from ..deps import GET_METHODS, get_server_state

router = APIRouter()

_MB = 1024 * 1024

ENDPOINTS = [
    ("GET", "/api/health", "Health check endpoint"),
    ("GET", "/api/info", "Instance information"),
    ("POST", "/admin/break-health", "Simulate failure"),
    ("POST", "/admin/restore-health", "Restore health"),
    ("GET", "/api/stress", "CPU stress test"),
]

FEATURES = [
    "Automatic health monitoring",
    "Instance recreation on failure",
    "Load balancer integration",
    "Zero-downtime recovery",
    "Configurable health thresholds",
]

STYLE = """
<style>
  body { font-family: Arial, sans-serif; max-width: 900px; margin: 50px auto;
         padding: 20px; background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
         color: white; }
  .container { background: rgba(255, 255, 255, 0.1); padding: 30px;
               border-radius: 15px; backdrop-filter: blur(10px); }
  .status { display: inline-block; padding: 10px 20px; border-radius: 20px;
            color: #000; font-weight: bold; font-size: 1.2em; }
  .status.ok { background: #00FF00; }
  .status.fail { background: #FF0000; }
  .info-box { background: rgba(255, 255, 255, 0.2); padding: 20px;
              border-radius: 10px; margin: 20px 0; }
  code { background: rgba(0, 0, 0, 0.3); padding: 3px 8px; border-radius: 4px; }
  .endpoint { margin: 8px 0; font-family: 'Courier New', monospace; }
</style>
"""


def render_status_page(state: ServerState) -> str:
    current = state.snapshot()
    memory = system.memory_stats()
    if current.healthy:
        badge = '<div class="status ok">&#9989; HEALTHY</div>'
    else:
        badge = '<div class="status fail">&#10060; UNHEALTHY</div>'

    endpoints = "\n".join(
        f'<div class="endpoint">{method} {path} - {escape(label)}</div>'
        for method, path, label in ENDPOINTS
    )
    features = "\n".join(f"<li>&#9989; {escape(item)}</li>" for item in FEATURES)

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>Auto-Healing MIG Demo</title>
  {STYLE}
</head>
<body>
  <div class="container">
    <h1>&#127973; Auto-Healing MIG Demo</h1>
    {badge}

    <div class="info-box">
      <h2>Instance Information</h2>
      <p><strong>Hostname:</strong> <code>{escape(system.hostname())}</code></p>
      <p><strong>Platform:</strong> <code>{escape(system.os_platform())} {escape(system.arch())}</code></p>
      <p><strong>Python:</strong> <code>{escape(system.python_version())}</code></p>
      <p><strong>Uptime:</strong> <code>{int(state.uptime_seconds())}s</code></p>
      <p><strong>Health Checks:</strong> <code>{current.checks}</code></p>
      <p><strong>Memory:</strong> <code>{round(memory.free / _MB)}MB free / {round(memory.total / _MB)}MB total</code></p>
    </div>

    <div class="info-box">
      <h2>API Endpoints</h2>
      {endpoints}
    </div>

    <div class="info-box">
      <h2>Auto-Healing Features</h2>
      <ul>
        {features}
      </ul>
    </div>
  </div>
</body>
</html>
"""


@router.api_route(
    "/",
    methods=GET_METHODS,
    tags=["root"],
    summary="Human-readable instance status page",
    response_class=HTMLResponse,
)
async def root(state: ServerState = Depends(get_server_state)) -> HTMLResponse:
    return HTMLResponse(content=render_status_page(state))
