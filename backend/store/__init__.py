"""
Store Module
File access for the graph viewer: reads the raw graph produced by the pipeline
run and writes the laid-out WebGraph snapshot.
Uses orjson for JSON and aiofiles for file I/O. Writes are atomic (.tmp then rename).
"""

import contextlib
from pathlib import Path
from typing import Union

import aiofiles
import orjson
from loguru import logger

from shared.errors import GraphIOError, MalformedGraphError
from shared.graph import RawGraph, parse_raw_graph
from shared.wire import WebGraph, encode_web_graph

PathLike = Union[str, Path]


async def load_raw_graph(path: PathLike) -> RawGraph:
    """Read and decode the graph file. Raises GraphIOError or MalformedGraphError."""
    file_path = Path(path)
    try:
        async with aiofiles.open(file_path, "rb") as f:
            data = await f.read()
    except FileNotFoundError as e:
        raise GraphIOError(file_path, "Graph file not found") from e
    except OSError as e:
        raise GraphIOError(file_path, f"Failed to read graph file ({e.strerror or e})") from e

    try:
        raw = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise MalformedGraphError(f"Invalid JSON in {file_path}: {e}") from e

    graph = parse_raw_graph(raw)
    logger.info("Loaded graph from {} ({} nodes, {} edges)", file_path, len(graph.nodes), len(graph.edges))
    return graph


async def write_web_graph(path: PathLike, web_graph: WebGraph) -> Path:
    """
    Write the WebGraph to path atomically. Nothing is left on disk on failure.
    Raises SerializationError before touching the filesystem if encoding fails.
    """
    file_path = Path(path)
    content = encode_web_graph(web_graph, indent=True)

    if not file_path.parent.is_dir():
        raise GraphIOError(file_path, "Parent directory does not exist")
    if file_path.is_dir():
        raise GraphIOError(file_path, "Output path is a directory")

    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    try:
        async with aiofiles.open(tmp_path, "wb") as f:
            await f.write(content)
        tmp_path.replace(file_path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise GraphIOError(file_path, f"Failed to write graph ({e.strerror or e})") from e

    logger.info("Wrote graph with {} nodes to {}", len(web_graph.nodes), file_path)
    return file_path
