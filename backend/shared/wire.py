"""
WebGraph - the positioned graph handed to viewers.
Built once after layout; encoded with orjson for the export file and /api/graph.
"""

from typing import Any, Dict, List, Optional, Tuple, Union

import orjson
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import LayoutError, SerializationError
from .graph import Edge, Node


class WebNode(BaseModel):
    model_config = ConfigDict(frozen=True)
    id: str
    name: str
    kind: str = ""
    x: Union[int, float]
    y: Union[int, float]
    data: Optional[Dict[str, Any]] = None


class WebEdge(BaseModel):
    model_config = ConfigDict(frozen=True)
    source: str
    target: str


class WebGraph(BaseModel):
    model_config = ConfigDict(frozen=True)
    nodes: Tuple[WebNode, ...] = ()
    edges: Tuple[WebEdge, ...] = ()


def build_web_graph(nodes: Dict[str, Node], edges: List[Edge]) -> WebGraph:
    """Snapshot laid-out nodes and edges. Every node must already have a position."""
    web_nodes = []
    for node in nodes.values():
        if node.position is None:
            raise LayoutError(f"Node '{node.id}' has no position; run compute_layout first")
        web_nodes.append(
            WebNode(
                id=node.id,
                name=node.name,
                kind=node.kind,
                x=node.position.x,
                y=node.position.y,
                data=node.data,
            )
        )
    web_edges = [WebEdge(source=e.source, target=e.target) for e in edges]
    return WebGraph(nodes=tuple(web_nodes), edges=tuple(web_edges))


def to_wire(web_graph: WebGraph) -> Dict[str, Any]:
    """Plain dict in wire shape. data is omitted on nodes that carry none."""
    return {
        "nodes": [n.model_dump(mode="json", exclude_none=True) for n in web_graph.nodes],
        "edges": [e.model_dump(mode="json") for e in web_graph.edges],
    }


def encode_web_graph(web_graph: WebGraph, indent: bool = False) -> bytes:
    option = orjson.OPT_INDENT_2 if indent else 0
    try:
        return orjson.dumps(to_wire(web_graph), option=option)
    except (orjson.JSONEncodeError, TypeError) as e:
        raise SerializationError(f"Failed to encode graph: {e}") from e


def decode_web_graph(data: Union[bytes, str]) -> WebGraph:
    try:
        return WebGraph.model_validate(orjson.loads(data))
    except orjson.JSONDecodeError as e:
        raise SerializationError(f"Invalid graph JSON: {e}") from e
    except ValidationError as e:
        raise SerializationError(f"Graph JSON does not match the wire format: {e}") from e
