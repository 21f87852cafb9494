"""
Graph viewer app - FastAPI + Socket.io.
One app per served graph; the graph snapshot is shared read-only by all requests.
"""

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from shared.wire import WebGraph, to_wire

from .routes import register_routes

# Viewer shell must always be refetched; graph data can change between runs
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        path = request.url.path
        if path == "/" or path.startswith("/api/graph"):
            for k, v in NO_CACHE_HEADERS.items():
                response.headers[k] = v
        return response


def create_app(web_graph: WebGraph) -> FastAPI:
    """Build the FastAPI app serving web_graph. Routes read from api.state."""
    app = FastAPI(title="Pipeline Graph Viewer")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(NoCacheMiddleware)

    register_routes(app, web_graph)
    return app


def create_asgi_app(web_graph: WebGraph) -> socketio.ASGIApp:
    """FastAPI app wrapped with Socket.io; pushes the graph to each viewer on connect."""
    sio = socketio.AsyncServer(async_mode="asgi", cors_allowed_origins="*")
    app = create_app(web_graph)

    @sio.event
    async def connect(sid, environ, auth=None):
        logger.info("Viewer connected: {}", sid)
        await sio.emit("graph-data", to_wire(web_graph), to=sid)

    @sio.event
    def disconnect(sid, *args):
        logger.info("Viewer disconnected: {}", sid)

    return socketio.ASGIApp(sio, app)
