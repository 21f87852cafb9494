"""
Pipeline Graph Viewer - command line entry point.
Loads the graph written by a pipeline run, lays it out, then either exports the
positioned graph as JSON (-o) or serves it with a web viewer.

Usage:
    graphview -f path/to/pipeline-graph.json            # serve on :8080
    graphview -f path/to/pipeline-graph.json -o out.json
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from loguru import logger

import config
from layout import compute_layout, layer_of
from serving import ExportMode, Mode, ServeMode, run_mode
from shared.errors import GraphViewError
from shared.graph import build_model
from shared.wire import WebGraph, build_web_graph
from store import load_raw_graph


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 1 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="graphview",
        description=(
            "View the graph generated by a pipeline run. Starts a server with a web UI "
            "(http://localhost:8080/ by default) unless --output is given."
        ),
    )
    parser.add_argument(
        "-f", "--graph", default=config.DEFAULT_GRAPH_FILE,
        help="Path to the graph file generated by the pipeline run",
    )
    parser.add_argument("-p", "--port", type=_port, default=config.DEFAULT_PORT, help="Port to start the server on")
    parser.add_argument("--host", default=config.DEFAULT_HOST, help="Host to bind the server to")
    parser.add_argument(
        "-o", "--output", default="",
        help="Write the processed graph JSON to this path instead of starting a server",
    )
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="Log level (DEBUG, INFO, WARNING, ...)")
    return parser


def configure_logging(level: str) -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())


def select_mode(args: argparse.Namespace) -> Mode:
    if args.output:
        return ExportMode(path=args.output)
    return ServeMode(port=args.port, host=args.host)


def prepare_web_graph(graph_path: str) -> WebGraph:
    """Load, decode and lay out the graph file. No partial result on failure."""
    raw = asyncio.run(load_raw_graph(graph_path))
    nodes, edges = build_model(raw)
    compute_layout(nodes, edges)
    logger.info("Layout complete: {} nodes in {} layers", len(nodes), len(layer_of(nodes)))
    return build_web_graph(nodes, edges)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        mode = select_mode(args)
        web_graph = prepare_web_graph(args.graph)
        run_mode(web_graph, mode)
    except GraphViewError as e:
        logger.error("{}", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
