from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import networkx as nx

from histo_graph.codec import MAX_VERTEX_ID
from histo_graph.config import StoreConfig
from histo_graph.file import validate_name
from histo_graph.storage import list_snapshots, load_graph, save_graph_as
from models import GraphView, SnapshotList

LOG = logging.getLogger("graph_tool")


def _resolve(storeDir: Optional[str], name: Optional[str]) -> tuple[Path, str, bool]:
    config = StoreConfig.from_env()
    if storeDir is None:
        storeDir = config.store_dir
    elif not storeDir.strip():
        raise ValueError("storeDir must not be empty")
    if name is None:
        name = config.snapshot_name
    else:
        validate_name(name)
    return Path(storeDir), name, config.verify_reads


def parse_vertex_id(value: Union[int, str]) -> int:
    """Parse a vertex id given as an int or a decimal string."""
    if isinstance(value, bool):
        raise ValueError("Vertex id must be an integer")
    if isinstance(value, str):
        try:
            value = int(value.strip(), 10)
        except ValueError as exc:
            raise ValueError(f"Vertex id must be a decimal integer: {value!r}") from exc
    if not isinstance(value, int):
        raise ValueError(f"Vertex id must be an integer, got {type(value).__name__}")
    if not 0 <= value <= MAX_VERTEX_ID:
        raise ValueError(f"Vertex id out of range 0..{MAX_VERTEX_ID}: {value}")
    return value


async def init_graph(storeDir: Optional[str] = None, name: Optional[str] = None) -> GraphView:
    """Save an empty graph under the snapshot name, replacing any previous one."""
    store_dir, name, _ = _resolve(storeDir, name)
    graph = nx.DiGraph()
    await save_graph_as(store_dir, name, graph)
    LOG.info("Initialized snapshot %r in %s", name, store_dir)
    return GraphView.from_graph(graph)


async def show_graph(storeDir: Optional[str] = None, name: Optional[str] = None) -> GraphView:
    store_dir, name, verify = _resolve(storeDir, name)
    graph = await load_graph(store_dir, name, verify=verify)
    return GraphView.from_graph(graph)


async def add_vertex(
    vertexId: Union[int, str], storeDir: Optional[str] = None, name: Optional[str] = None
) -> GraphView:
    """Load the snapshot, add a vertex and save it back under the same name."""
    vertex_id = parse_vertex_id(vertexId)
    store_dir, name, verify = _resolve(storeDir, name)
    graph = await load_graph(store_dir, name, verify=verify)
    graph.add_node(vertex_id)
    await save_graph_as(store_dir, name, graph)
    LOG.info("Added vertex %d to snapshot %r", vertex_id, name)
    return GraphView.from_graph(graph)


async def add_edge(
    fromId: Union[int, str],
    toId: Union[int, str],
    storeDir: Optional[str] = None,
    name: Optional[str] = None,
) -> GraphView:
    """Load the snapshot, add an edge and save it back under the same name."""
    from_id = parse_vertex_id(fromId)
    to_id = parse_vertex_id(toId)
    store_dir, name, verify = _resolve(storeDir, name)
    graph = await load_graph(store_dir, name, verify=verify)
    graph.add_edge(from_id, to_id)
    await save_graph_as(store_dir, name, graph)
    LOG.info("Added edge %d -> %d to snapshot %r", from_id, to_id, name)
    return GraphView.from_graph(graph)


async def list_snapshot_names(storeDir: Optional[str] = None) -> SnapshotList:
    store_dir, _, _ = _resolve(storeDir, None)
    names = await list_snapshots(store_dir)
    return SnapshotList(storeDir=str(store_dir), snapshots=names)
