"""
Runtime defaults, overridable via GRAPHVIEW_* environment variables.
Command line flags take precedence over these.
"""

import os
from pathlib import Path


def _str_env(name: str, default: str) -> str:
    v = os.environ.get(name)
    return v if v else default


DEFAULT_GRAPH_FILE = _str_env("GRAPHVIEW_GRAPH_FILE", "pipeline-graph.json")
DEFAULT_HOST = _str_env("GRAPHVIEW_HOST", "127.0.0.1")
# Kept as text; the CLI validates it like a --port value
DEFAULT_PORT = _str_env("GRAPHVIEW_PORT", "8080")
LOG_LEVEL = _str_env("GRAPHVIEW_LOG_LEVEL", "INFO")

# Viewer shell served at /; an inline page is used when the directory is missing
FRONTEND_DIR = Path(_str_env("GRAPHVIEW_FRONTEND_DIR", str(Path(__file__).parent.parent / "frontend")))
