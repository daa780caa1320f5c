"""
Object kinds and the hash-linked object model.

Every object written to the store has an ObjectKind. The kind's value is the
subdirectory the object lives in:

    <base>/vertex/<hex>      a vertex id
    <base>/edge/<hex>        a HashEdge
    <base>/vertexvec/<hex>   a HashVec of vertex hashes
    <base>/edgevec/<hex>     a HashVec of edge hashes
    <base>/graph/<name>      a GraphHash, stored under a caller-chosen name

Only GRAPH is stored by name; all other kinds are stored by the hex of
their own content hash.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .hash import Hash


class ObjectKind(str, Enum):
    """Kind of a stored object. The value is its subdirectory name."""

    VERTEX = "vertex"
    EDGE = "edge"
    VERTEX_VEC = "vertexvec"
    EDGE_VEC = "edgevec"
    GRAPH = "graph"

    @property
    def subdir(self) -> str:
        return self.value

    @property
    def is_named(self) -> bool:
        """Whether objects of this kind are stored under a name instead of a hash."""
        return self is ObjectKind.GRAPH

    @property
    def vec_kind(self) -> ObjectKind:
        """Kind of the HashVec that lists objects of this kind."""
        try:
            return _VEC_KINDS[self]
        except KeyError:
            raise ValueError(f"Objects of kind {self.value!r} are not collected in a HashVec") from None


_VEC_KINDS = {
    ObjectKind.VERTEX: ObjectKind.VERTEX_VEC,
    ObjectKind.EDGE: ObjectKind.EDGE_VEC,
}


@dataclass(frozen=True)
class HashEdge:
    """An edge represented by the hashes of its two endpoint vertices."""

    from_hash: Hash
    to_hash: Hash


@dataclass(frozen=True)
class HashVec:
    """
    Ordered list of hashes of stored objects (vertices or HashEdges).

    Order is the enumeration order of the source collection at write time.
    """

    hashes: tuple[Hash, ...] = ()

    def __len__(self) -> int:
        return len(self.hashes)

    def __iter__(self):
        return iter(self.hashes)


@dataclass(frozen=True)
class GraphHash:
    """Root object of a stored graph snapshot."""

    vertex_vec_hash: Hash
    edge_vec_hash: Hash
