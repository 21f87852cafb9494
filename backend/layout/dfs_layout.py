"""
Depth-first layout for pipeline execution graphs.

Positions are assigned in DFS discovery order:
1. Root selection (no incoming edge, input order; first node if the graph is fully cyclic)
2. Traversal from each root, children in input edge order
3. x = discovery depth (first discovery wins), y = per-layer counter
4. Sweep of nodes no root reached, each placed as its own root

This is deliberately not a longest-path layering: a node reached again from a
deeper parent keeps the layer it was first discovered at.
"""

from typing import Dict, List, Set

import networkx as nx
from loguru import logger

from shared.graph import Edge, Node, Position


def compute_layout(nodes: Dict[str, Node], edges: List[Edge]) -> None:
    """
    Assign a position to every node (in place). Total over any node/edge set
    produced by build_model, including cycles, self-loops and disconnected parts.
    Running it again on the same set yields the same positions.
    """
    if not nodes:
        return

    visited: Set[str] = set()
    layer_counts: Dict[int, int] = {}
    positions: Dict[str, Position] = {}

    roots = find_roots(nodes, edges)
    if not roots:
        first = next(iter(nodes))
        logger.debug("No root found (graph is cyclic); starting from '{}'", first)
        roots = [first]

    for root in roots:
        if root not in visited:
            _place_from(root, nodes, visited, layer_counts, positions)

    for node_id in nodes:
        if node_id not in visited:
            _place_from(node_id, nodes, visited, layer_counts, positions)

    for node_id, pos in positions.items():
        nodes[node_id].position = pos

    logger.debug("Laid out {} nodes in {} layers", len(positions), len(layer_counts))


# ---------------------------------------------------------------------------
# 1. Root selection
# ---------------------------------------------------------------------------

def find_roots(nodes: Dict[str, Node], edges: List[Edge]) -> List[str]:
    """Node ids with no incoming edge, in input order. Self-loops do not count."""
    G = nx.DiGraph()
    G.add_nodes_from(nodes)
    G.add_edges_from((e.source, e.target) for e in edges if not e.is_self_loop)
    return [nid for nid in nodes if G.in_degree(nid) == 0]


# ---------------------------------------------------------------------------
# 2. Traversal and coordinate assignment
# ---------------------------------------------------------------------------

def _place_from(
    root: str,
    nodes: Dict[str, Node],
    visited: Set[str],
    layer_counts: Dict[int, int],
    positions: Dict[str, Position],
) -> None:
    """
    Pre-order DFS from root with an explicit stack. Children are pushed in
    reverse so they pop in input order, and a node is only placed when popped
    unvisited, which matches the recursive visiting order exactly.
    """
    stack = [(root, 0)]
    while stack:
        node_id, depth = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)

        y = layer_counts.get(depth, 0)
        layer_counts[depth] = y + 1
        positions[node_id] = Position(x=depth, y=y)

        for child in reversed(nodes[node_id].children):
            if child != node_id and child not in visited:
                stack.append((child, depth + 1))


def layer_of(nodes: Dict[str, Node]) -> Dict[int, List[str]]:
    """Group laid-out node ids by x, each layer ordered by y."""
    layers: Dict[int, List[Node]] = {}
    for node in nodes.values():
        if node.position is None:
            continue
        layers.setdefault(node.position.x, []).append(node)
    return {
        x: [n.id for n in sorted(members, key=lambda n: n.position.y)]
        for x, members in sorted(layers.items())
    }
