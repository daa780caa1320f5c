"""
Persistent storage layer for histo-graph.

Provides:
- save_graph_as / load_graph: named graph snapshots
- write_object / read_object / read_edge: single hash-addressed objects
- write_graph / read_graph: whole graphs without a name
"""

from histo_graph.storage.file_storage import (
    list_snapshots,
    load_graph,
    read_edge,
    read_graph,
    read_graph_hash,
    read_object,
    save_graph_as,
    snapshot_exists,
    write_graph,
    write_object,
)

__all__ = [
    "list_snapshots",
    "load_graph",
    "read_edge",
    "read_graph",
    "read_graph_hash",
    "read_object",
    "save_graph_as",
    "snapshot_exists",
    "write_graph",
    "write_object",
]
