"""
Shared API state - the served graph snapshot.
Initialized by create_app before any request is handled; read-only afterwards.
"""

from typing import Optional

from shared.wire import WebGraph

# Set by create_app
web_graph: Optional[WebGraph] = None


def init_api_state(graph: WebGraph):
    global web_graph
    web_graph = graph
