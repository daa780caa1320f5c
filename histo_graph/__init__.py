"""
histo-graph: directed graphs stored as content-addressed objects.

Usage:
    import asyncio
    from histo_graph import load_graph, new_graph, save_graph_as

    graph = new_graph(vertices=[14, 17], edges=[(14, 17)])
    asyncio.run(save_graph_as(".store", "current", graph))
    loaded = asyncio.run(load_graph(".store", "current"))
"""

from .errors import ObjectNotFoundError, SerializationError, StorageError, StorageIOError
from .file import StoredFile
from .graph import Edge, VertexId, new_graph, same_graph
from .hash import Hash
from .objects import GraphHash, HashEdge, HashVec, ObjectKind
from .storage import load_graph, save_graph_as

__all__ = [
    # Storage
    "save_graph_as",
    "load_graph",
    # Objects
    "Hash",
    "ObjectKind",
    "HashEdge",
    "HashVec",
    "GraphHash",
    "StoredFile",
    # Graph
    "VertexId",
    "Edge",
    "new_graph",
    "same_graph",
    # Errors
    "StorageError",
    "StorageIOError",
    "ObjectNotFoundError",
    "SerializationError",
]
