"""Graph builders shared by the test modules."""

from layout import compute_layout
from shared.graph import build_model


def graph_doc(node_ids, edges):
    """Raw graph document with nodes keyed by id."""
    return {
        "nodes": {nid: {"name": f"step {nid}", "type": "transformer"} for nid in node_ids},
        "edges": [{"source": s, "target": t} for s, t in edges],
    }


def laid_out(node_ids, edges):
    nodes, edge_list = build_model(graph_doc(node_ids, edges))
    compute_layout(nodes, edge_list)
    return nodes, edge_list


def xy(nodes):
    return {nid: (n.position.x, n.position.y) for nid, n in nodes.items()}
