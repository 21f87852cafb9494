"""
Graph model for pipeline execution graphs.
Decodes the raw node/edge document, checks edge integrity and derives the ordered
children lists that the layout uses as its tie-break.
"""

from typing import Annotated, Any, Dict, Iterator, List, Optional, Tuple, Union

import networkx as nx
from loguru import logger
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator

from .errors import MalformedGraphError


def _coerce_id(value: Any) -> Any:
    """Node ids may arrive as JSON numbers; they are matched as strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return value


NodeId = Annotated[str, BeforeValidator(_coerce_id)]


class RawNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    id: Optional[NodeId] = None
    name: Optional[str] = None
    kind: str = Field(default="", alias="type")
    data: Optional[Dict[str, Any]] = None

    @field_validator("kind", mode="before")
    @classmethod
    def _kind_or_empty(cls, v):
        return "" if v is None else v


class RawEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    source: NodeId = Field(..., alias="from")
    target: NodeId = Field(..., alias="to")


class RawGraph(BaseModel):
    """Input document: nodes keyed by id (or a list carrying ids) and an ordered edge list."""
    model_config = ConfigDict(extra="ignore")
    nodes: Union[Dict[str, RawNode], List[RawNode]]
    edges: Union[List[RawEdge], Dict[str, RawEdge]] = Field(default_factory=list)

    def iter_nodes(self) -> Iterator[Tuple[str, RawNode]]:
        if isinstance(self.nodes, dict):
            yield from self.nodes.items()
            return
        for idx, node in enumerate(self.nodes):
            if not node.id:
                raise MalformedGraphError(f"Node at index {idx} has no id")
            yield node.id, node

    def iter_edges(self) -> Iterator[RawEdge]:
        if isinstance(self.edges, dict):
            yield from self.edges.values()
        else:
            yield from self.edges


class Position(BaseModel):
    """x = layer (discovery depth), y = order within the layer."""
    model_config = ConfigDict(frozen=True)
    x: int
    y: int


class Node(BaseModel):
    id: str = Field(..., frozen=True)
    name: str = Field(..., frozen=True)
    kind: str = Field(default="", frozen=True)
    data: Optional[Dict[str, Any]] = Field(default=None, frozen=True)
    children: Tuple[str, ...] = Field(default=(), frozen=True)
    position: Optional[Position] = None


class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)
    source: str
    target: str

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


def parse_raw_graph(raw: Any) -> RawGraph:
    """Validate a decoded JSON document into a RawGraph."""
    if isinstance(raw, RawGraph):
        return raw
    try:
        return RawGraph.model_validate(raw)
    except ValidationError as e:
        raise MalformedGraphError(f"Graph does not have the expected shape: {e}") from e


def build_model(raw_graph: Any) -> Tuple[Dict[str, Node], List[Edge]]:
    """
    Build (nodes, edges) from a raw graph.

    nodes keeps input order. edges keeps input order with duplicates dropped
    (first occurrence wins); self-loops are kept for rendering. Each node's
    children follow the order its outgoing edges appeared in the input.
    """
    raw = parse_raw_graph(raw_graph)

    G = nx.DiGraph()
    meta: Dict[str, RawNode] = {}
    for node_id, node in raw.iter_nodes():
        if node_id in meta:
            logger.warning("Node '{}' appears more than once; keeping the last entry", node_id)
        meta[node_id] = node
        G.add_node(node_id)

    edges: List[Edge] = []
    duplicates = 0
    for idx, raw_edge in enumerate(raw.iter_edges()):
        for end in (raw_edge.source, raw_edge.target):
            if end not in meta:
                raise MalformedGraphError(
                    f"Edge {idx} ({raw_edge.source} -> {raw_edge.target}) references unknown node '{end}'"
                )
        if G.has_edge(raw_edge.source, raw_edge.target):
            duplicates += 1
            continue
        G.add_edge(raw_edge.source, raw_edge.target)
        edges.append(Edge(source=raw_edge.source, target=raw_edge.target))

    if duplicates:
        logger.warning("Dropped {} duplicate edge(s)", duplicates)

    nodes: Dict[str, Node] = {}
    for node_id in G.nodes:
        node = meta[node_id]
        nodes[node_id] = Node(
            id=node_id,
            name=node.name if node.name is not None else node_id,
            kind=node.kind,
            data=node.data,
            children=tuple(G.successors(node_id)),
        )

    logger.debug("Built graph model with {} nodes and {} edges", len(nodes), len(edges))
    return nodes, edges
