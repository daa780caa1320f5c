"""
Filesystem-backed storage of graph snapshots as content-addressed objects.

A graph is written as a tree of hash-linked objects:

    graph/<name>  ->  GraphHash
                        ├── vertexvec/<hex>  ->  [vertex/<hex>, ...]
                        └── edgevec/<hex>    ->  [edge/<hex>, ...]
                                                    └── (from hash, to hash)

Hash-addressed objects are immutable; rewriting one replaces it with
identical bytes. The only mutable file is the named GraphHash pointer,
which the last writer wins. Every write goes to a temporary file in the
target directory and is renamed into place, so a concurrent reader sees
either the old content or the new, never a partial file.

All functions are coroutines. Filesystem calls run via ``asyncio.to_thread``
and fan-out stages are joined with ``asyncio.gather``: a batch fails with
its first error, and siblings already in flight are left to finish.
Nothing is cached between calls; the base path is passed explicitly every
time.
"""

from __future__ import annotations

import asyncio
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import networkx as nx

from histo_graph.errors import ObjectNotFoundError, StorageIOError
from histo_graph.file import TEMP_PREFIX, StoredFile, hash_path, kind_dir, named_path, validate_name
from histo_graph.graph import Edge, VertexId
from histo_graph.hash import Hash
from histo_graph.objects import GraphHash, HashEdge, HashVec, ObjectKind

LOG = logging.getLogger("storage.file_storage")

PathLike = str | os.PathLike


# ── Raw I/O ─────────────────────────────────────────────────────────────


def _wrap_os_error(exc: OSError, path: Path, action: str) -> StorageIOError:
    if isinstance(exc, FileNotFoundError):
        return ObjectNotFoundError(f"No object at {path}", path=path)
    return StorageIOError(f"Failed to {action} {path}: {exc}", path=path)


async def _read_bytes(path: Path) -> bytes:
    try:
        return await asyncio.to_thread(path.read_bytes)
    except OSError as exc:
        raise _wrap_os_error(exc, path, "read") from exc


def _replace_bytes(path: Path, content: bytes) -> None:
    tmp = tempfile.NamedTemporaryFile(dir=path.parent, prefix=TEMP_PREFIX, delete=False)
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(content)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


async def _write_bytes(path: Path, content: bytes) -> None:
    """Write ``content`` to ``path`` atomically: readers see the old bytes or the new ones."""
    try:
        await asyncio.to_thread(_replace_bytes, path, content)
    except OSError as exc:
        raise _wrap_os_error(exc, path, "write") from exc


async def ensure_kind_dir(base_path: PathLike, kind: ObjectKind) -> Path:
    """Create the directory for ``kind`` if needed. Safe to race."""
    directory = kind_dir(base_path, kind)
    try:
        await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        raise _wrap_os_error(exc, directory, "create directory") from exc
    return directory


# ── Single files ────────────────────────────────────────────────────────


async def write_file(base_path: PathLike, file: StoredFile, name: str | None = None) -> Hash:
    """
    Write ``file`` under ``base_path`` and return its hash.

    Without ``name`` the file is stored at its hash-addressed path. With
    ``name`` (named kinds only) it is stored at, and overwrites, the named
    path. The kind directory must already exist.
    """
    if name is None:
        path = hash_path(base_path, file.kind, file.hash)
    else:
        path = named_path(base_path, file.kind, name)
    await _write_bytes(path, file.content)
    LOG.debug("Wrote %s object %s", file.kind.value, path.name)
    return file.hash


async def read_file(
    base_path: PathLike,
    kind: ObjectKind,
    hash_: Hash | None = None,
    name: str | None = None,
    verify: bool = False,
) -> StoredFile:
    """
    Read the object of ``kind`` addressed by ``hash_`` or by ``name``.

    Exactly one of ``hash_`` and ``name`` must be given. With ``verify``,
    hash-addressed content is checked against ``hash_``.
    """
    if (hash_ is None) == (name is None):
        raise ValueError("Exactly one of hash_ and name must be given")
    if hash_ is not None:
        path = hash_path(base_path, kind, hash_)
    else:
        path = named_path(base_path, kind, name)
    content = await _read_bytes(path)
    LOG.debug("Read %s object %s", kind.value, path.name)
    return StoredFile.from_disk(kind, content, hash_=hash_, verify=verify)


# ── Objects ─────────────────────────────────────────────────────────────


async def write_object(base_path: PathLike, kind: ObjectKind, value: Any) -> Hash:
    """Serialize ``value`` and store it by hash, creating its directory."""
    file = StoredFile.from_value(kind, value)
    await ensure_kind_dir(base_path, kind)
    return await write_file(base_path, file)


async def read_object(base_path: PathLike, kind: ObjectKind, hash_: Hash, verify: bool = False) -> Any:
    """Read and deserialize the hash-addressed object ``hash_``."""
    file = await read_file(base_path, kind, hash_=hash_, verify=verify)
    return file.to_value()


async def read_vertex(base_path: PathLike, hash_: Hash, verify: bool = False) -> VertexId:
    return await read_object(base_path, ObjectKind.VERTEX, hash_, verify=verify)


async def read_edge(base_path: PathLike, hash_: Hash, verify: bool = False) -> Edge:
    """Read a HashEdge and resolve both endpoints to vertex ids."""
    hash_edge: HashEdge = await read_object(base_path, ObjectKind.EDGE, hash_, verify=verify)
    from_id, to_id = await asyncio.gather(
        read_vertex(base_path, hash_edge.from_hash, verify=verify),
        read_vertex(base_path, hash_edge.to_hash, verify=verify),
    )
    return (from_id, to_id)


# ── Collections ─────────────────────────────────────────────────────────


async def write_all_files(base_path: PathLike, kind: ObjectKind, files: Iterable[StoredFile]) -> HashVec:
    """
    Write ``files`` of ``kind`` concurrently and return their hashes in order.

    Fails with the first error; files already written stay on disk.
    """
    files = list(files)
    await ensure_kind_dir(base_path, kind)
    hashes = await asyncio.gather(*(write_file(base_path, file) for file in files))
    return HashVec(tuple(hashes))


async def write_hash_vec(base_path: PathLike, kind: ObjectKind, hash_vec: HashVec) -> Hash:
    """Store the HashVec listing objects of ``kind``."""
    return await write_object(base_path, kind.vec_kind, hash_vec)


async def read_all_vertices(base_path: PathLike, hashes: Iterable[Hash], verify: bool = False) -> list[VertexId]:
    return list(await asyncio.gather(*(read_vertex(base_path, h, verify=verify) for h in hashes)))


async def read_all_edges(base_path: PathLike, hashes: Iterable[Hash], verify: bool = False) -> list[Edge]:
    return list(await asyncio.gather(*(read_edge(base_path, h, verify=verify) for h in hashes)))


# ── Graphs ──────────────────────────────────────────────────────────────


async def write_graph_vertices(base_path: PathLike, graph: nx.DiGraph) -> Hash:
    """Write every vertex of ``graph`` and the HashVec listing them."""
    files = [StoredFile.from_value(ObjectKind.VERTEX, vertex_id) for vertex_id in graph.nodes]
    hash_vec = await write_all_files(base_path, ObjectKind.VERTEX, files)
    return await write_hash_vec(base_path, ObjectKind.VERTEX, hash_vec)


async def write_graph_edges(base_path: PathLike, graph: nx.DiGraph) -> Hash:
    """Write every edge of ``graph`` as a HashEdge and the HashVec listing them."""
    files = [StoredFile.for_edge(from_id, to_id) for from_id, to_id in graph.edges]
    hash_vec = await write_all_files(base_path, ObjectKind.EDGE, files)
    return await write_hash_vec(base_path, ObjectKind.EDGE, hash_vec)


async def write_graph(base_path: PathLike, graph: nx.DiGraph) -> GraphHash:
    """Write all objects of ``graph`` and return its root, without naming it."""
    vertex_vec_hash, edge_vec_hash = await asyncio.gather(
        write_graph_vertices(base_path, graph),
        write_graph_edges(base_path, graph),
    )
    return GraphHash(vertex_vec_hash=vertex_vec_hash, edge_vec_hash=edge_vec_hash)


async def save_graph_as(base_path: PathLike, name: str, graph: nx.DiGraph) -> None:
    """
    Save ``graph`` and point the snapshot ``name`` at it.

    Any previous snapshot under ``name`` is replaced. Re-running a failed
    save is safe: hash-addressed objects are rewritten with identical bytes.
    """
    validate_name(name)
    graph_hash = await write_graph(base_path, graph)
    file = StoredFile.from_value(ObjectKind.GRAPH, graph_hash)
    await ensure_kind_dir(base_path, ObjectKind.GRAPH)
    await write_file(base_path, file, name=name)
    LOG.info(
        "Saved graph %r: %d vertices, %d edges",
        name,
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )


async def read_graph_hash(base_path: PathLike, name: str) -> GraphHash:
    """Read the GraphHash the snapshot ``name`` points at."""
    file = await read_file(base_path, ObjectKind.GRAPH, name=name)
    return file.to_value()


async def read_graph_vertices(base_path: PathLike, vertex_vec_hash: Hash, verify: bool = False) -> list[VertexId]:
    hash_vec: HashVec = await read_object(base_path, ObjectKind.VERTEX_VEC, vertex_vec_hash, verify=verify)
    return await read_all_vertices(base_path, hash_vec, verify=verify)


async def read_graph_edges(base_path: PathLike, edge_vec_hash: Hash, verify: bool = False) -> list[Edge]:
    hash_vec: HashVec = await read_object(base_path, ObjectKind.EDGE_VEC, edge_vec_hash, verify=verify)
    return await read_all_edges(base_path, hash_vec, verify=verify)


async def read_graph(base_path: PathLike, graph_hash: GraphHash, verify: bool = False) -> nx.DiGraph:
    """
    Rebuild the graph rooted at ``graph_hash``.

    All objects are read before the graph is populated, so any missing or
    corrupt object fails the whole read.
    """
    vertices, edges = await asyncio.gather(
        read_graph_vertices(base_path, graph_hash.vertex_vec_hash, verify=verify),
        read_graph_edges(base_path, graph_hash.edge_vec_hash, verify=verify),
    )
    graph = nx.DiGraph()
    graph.add_nodes_from(vertices)
    graph.add_edges_from(edges)
    return graph


async def load_graph(base_path: PathLike, name: str, verify: bool = False) -> nx.DiGraph:
    """Load the graph saved under ``name``."""
    graph_hash = await read_graph_hash(base_path, name)
    graph = await read_graph(base_path, graph_hash, verify=verify)
    LOG.info(
        "Loaded graph %r: %d vertices, %d edges",
        name,
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


async def snapshot_exists(base_path: PathLike, name: str) -> bool:
    path = named_path(base_path, ObjectKind.GRAPH, name)
    return await asyncio.to_thread(path.is_file)


async def list_snapshots(base_path: PathLike) -> list[str]:
    """Names of all snapshots under ``base_path``, sorted."""
    directory = kind_dir(base_path, ObjectKind.GRAPH)

    def _scan() -> list[str]:
        if not directory.is_dir():
            return []
        return sorted(
            entry.name
            for entry in directory.iterdir()
            if entry.is_file() and not entry.name.startswith(TEMP_PREFIX)
        )

    try:
        return await asyncio.to_thread(_scan)
    except OSError as exc:
        raise _wrap_os_error(exc, directory, "list") from exc
