"""Exceptions raised while loading, laying out, exporting and serving a graph."""

from typing import Optional


class GraphViewError(Exception):
    """Base exception for graph viewer operations."""
    pass


class MalformedGraphError(GraphViewError):
    """Raised when the raw graph cannot be decoded or references unknown node ids."""
    pass


class GraphIOError(GraphViewError, OSError):
    """Raised when a graph file cannot be read or written."""
    def __init__(self, path, message: str):
        self.path = str(path)
        super().__init__(f"{message}: {self.path}")


class SerializationError(GraphViewError):
    """Raised when a WebGraph cannot be encoded to, or decoded from, the wire format."""
    pass


class NetworkError(GraphViewError):
    """Raised when the graph server cannot bind its socket or fails to start."""
    def __init__(self, host: str, port: int, cause: Optional[BaseException] = None, reason: str = "cannot bind"):
        self.host = host
        self.port = port
        detail = f" ({cause})" if cause else ""
        super().__init__(f"Graph server on {host}:{port} {reason}{detail}")


class LayoutError(GraphViewError):
    """Raised when layout output breaks its own invariants (double placement, missing position)."""
    pass
