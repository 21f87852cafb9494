"""Shared graph model, wire format and errors for loader, layout and server."""

from .errors import (
    GraphIOError,
    GraphViewError,
    LayoutError,
    MalformedGraphError,
    NetworkError,
    SerializationError,
)
from .graph import Edge, Node, Position, RawGraph, build_model, parse_raw_graph
from .wire import WebGraph, build_web_graph, decode_web_graph, encode_web_graph, to_wire

__all__ = [
    "Edge",
    "GraphIOError",
    "GraphViewError",
    "LayoutError",
    "MalformedGraphError",
    "NetworkError",
    "Node",
    "Position",
    "RawGraph",
    "SerializationError",
    "WebGraph",
    "build_model",
    "build_web_graph",
    "decode_web_graph",
    "encode_web_graph",
    "parse_raw_graph",
    "to_wire",
]
