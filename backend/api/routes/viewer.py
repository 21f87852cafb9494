"""Viewer shell - GET / serves the page that renders /api/graph."""

from fastapi import APIRouter
from fastapi.responses import FileResponse, HTMLResponse

import config

router = APIRouter()

FALLBACK_SHELL = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Pipeline Graph</title></head>
<body>
<pre id="graph">Loading...</pre>
<script>
fetch("/api/graph").then(r => r.json()).then(g => {
  document.getElementById("graph").textContent = JSON.stringify(g, null, 2);
});
</script>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
async def serve_index():
    index_path = config.FRONTEND_DIR / "index.html"
    if index_path.is_file():
        return FileResponse(index_path)
    return HTMLResponse(FALLBACK_SHELL)
