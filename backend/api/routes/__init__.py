"""API route modules."""

from fastapi import FastAPI

from shared.wire import WebGraph

from . import graph, health, viewer
from ..state import init_api_state


def register_routes(app: FastAPI, web_graph: WebGraph):
    """Register all routers. Call once after the app is created."""
    init_api_state(web_graph)

    app.include_router(graph.router, prefix="/api/graph", tags=["graph"])
    app.include_router(health.router, prefix="/api/health", tags=["health"])
    app.include_router(viewer.router, tags=["viewer"])
