"""
Serving - hands a laid-out WebGraph to viewers in exactly one of two modes.

ExportMode writes the wire JSON to a file and returns.
ServeMode binds a socket and runs the viewer app under uvicorn until the process
is terminated. A bind failure, or a server that exits without ever starting,
is fatal (NetworkError); there is no retry.
"""

import asyncio
import socket
from pathlib import Path
from typing import Optional, Union

import uvicorn
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

import config
from api import create_asgi_app
from shared.errors import NetworkError
from shared.wire import WebGraph
from store import write_web_graph


class ExportMode(BaseModel):
    model_config = ConfigDict(frozen=True)
    path: Path


class ServeMode(BaseModel):
    model_config = ConfigDict(frozen=True)
    port: int = Field(..., ge=1, le=65535)
    host: str = config.DEFAULT_HOST


Mode = Union[ExportMode, ServeMode]


async def export_web_graph(web_graph: WebGraph, mode: ExportMode) -> Path:
    return await write_web_graph(mode.path, web_graph)


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind (not yet listen) a TCP socket for uvicorn. Raises NetworkError."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError as e:
        sock.close()
        raise NetworkError(host, port, e) from e
    sock.set_inheritable(True)
    return sock


def serve_web_graph(web_graph: WebGraph, mode: ServeMode) -> None:
    """Serve until terminated. Raises NetworkError if uvicorn exits without having started."""
    sock = bind_socket(mode.host, mode.port)
    server = uvicorn.Server(
        uvicorn.Config(create_asgi_app(web_graph), log_level=config.LOG_LEVEL.lower())
    )
    logger.info("Serving graph on http://{}:{}/", mode.host, mode.port)
    try:
        server.run(sockets=[sock])
    finally:
        sock.close()
    if not server.started:
        raise NetworkError(mode.host, mode.port, reason="failed to start")
    logger.info("Graph server stopped")


def run_mode(web_graph: WebGraph, mode: Mode) -> Optional[Path]:
    """Dispatch to export or serve. Returns the written path in export mode."""
    if isinstance(mode, ExportMode):
        return asyncio.run(export_web_graph(web_graph, mode))
    if isinstance(mode, ServeMode):
        serve_web_graph(web_graph, mode)
        return None
    raise TypeError(f"Unknown serving mode: {type(mode).__name__}")


__all__ = [
    "ExportMode",
    "Mode",
    "ServeMode",
    "bind_socket",
    "export_web_graph",
    "run_mode",
    "serve_web_graph",
]
