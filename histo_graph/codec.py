"""
Binary encoding of stored objects.

Fixed layout, little-endian, no padding:

    vertex     u64 vertex id                           (8 bytes)
    edge       from hash, to hash                      (64 bytes)
    vertexvec  u64 count, then count * 32-byte hashes
    edgevec    same as vertexvec
    graph      vertex_vec_hash, edge_vec_hash          (64 bytes)

The hash of an object is taken over exactly these bytes, so the layout
must never change for existing stores.
"""

from __future__ import annotations

import struct
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .errors import SerializationError
from .hash import HASH_SIZE, Hash
from .objects import GraphHash, HashEdge, HashVec, ObjectKind

_U64 = struct.Struct("<Q")
_HASH_PAIR = struct.Struct(f"<{HASH_SIZE}s{HASH_SIZE}s")

MAX_VERTEX_ID = 2**64 - 1


@dataclass(frozen=True)
class Codec:
    """Encoder/decoder pair for one object kind."""

    encode: Callable[[Any], bytes]
    decode: Callable[[bytes], Any]


def _encode_vertex(vertex_id: int) -> bytes:
    if isinstance(vertex_id, bool) or not isinstance(vertex_id, int):
        raise SerializationError(f"Vertex id must be an int, got {type(vertex_id).__name__}")
    if not 0 <= vertex_id <= MAX_VERTEX_ID:
        raise SerializationError(f"Vertex id out of u64 range: {vertex_id}")
    return _U64.pack(vertex_id)


def _decode_vertex(content: bytes) -> int:
    _expect_size(content, _U64.size, ObjectKind.VERTEX)
    return _U64.unpack(content)[0]


def _encode_hash_edge(edge: HashEdge) -> bytes:
    return _HASH_PAIR.pack(edge.from_hash.digest, edge.to_hash.digest)


def _decode_hash_edge(content: bytes) -> HashEdge:
    _expect_size(content, _HASH_PAIR.size, ObjectKind.EDGE)
    from_digest, to_digest = _HASH_PAIR.unpack(content)
    return HashEdge(from_hash=Hash(from_digest), to_hash=Hash(to_digest))


def _encode_hash_vec(hash_vec: HashVec) -> bytes:
    return _U64.pack(len(hash_vec.hashes)) + b"".join(h.digest for h in hash_vec.hashes)


def _decode_hash_vec(content: bytes) -> HashVec:
    if len(content) < _U64.size:
        raise SerializationError(f"Truncated hash list: {len(content)} bytes")
    (count,) = _U64.unpack_from(content)
    expected = _U64.size + count * HASH_SIZE
    if len(content) != expected:
        raise SerializationError(
            f"Hash list declares {count} entries ({expected} bytes) but has {len(content)} bytes"
        )
    hashes = tuple(
        Hash(content[offset : offset + HASH_SIZE]) for offset in range(_U64.size, expected, HASH_SIZE)
    )
    return HashVec(hashes)


def _encode_graph_hash(graph_hash: GraphHash) -> bytes:
    return _HASH_PAIR.pack(graph_hash.vertex_vec_hash.digest, graph_hash.edge_vec_hash.digest)


def _decode_graph_hash(content: bytes) -> GraphHash:
    _expect_size(content, _HASH_PAIR.size, ObjectKind.GRAPH)
    vertex_digest, edge_digest = _HASH_PAIR.unpack(content)
    return GraphHash(vertex_vec_hash=Hash(vertex_digest), edge_vec_hash=Hash(edge_digest))


def _expect_size(content: bytes, size: int, kind: ObjectKind) -> None:
    if len(content) != size:
        raise SerializationError(f"Expected {size} bytes for {kind.value} object, got {len(content)}")


_HASH_VEC_CODEC = Codec(encode=_encode_hash_vec, decode=_decode_hash_vec)

CODECS: dict[ObjectKind, Codec] = {
    ObjectKind.VERTEX: Codec(encode=_encode_vertex, decode=_decode_vertex),
    ObjectKind.EDGE: Codec(encode=_encode_hash_edge, decode=_decode_hash_edge),
    ObjectKind.VERTEX_VEC: _HASH_VEC_CODEC,
    ObjectKind.EDGE_VEC: _HASH_VEC_CODEC,
    ObjectKind.GRAPH: Codec(encode=_encode_graph_hash, decode=_decode_graph_hash),
}


def encode(kind: ObjectKind, value: Any) -> bytes:
    """Serialize a value of the given kind."""
    try:
        return CODECS[kind].encode(value)
    except (struct.error, AttributeError, TypeError) as exc:
        raise SerializationError(f"Cannot encode {kind.value} object: {exc}") from exc


def decode(kind: ObjectKind, content: bytes) -> Any:
    """Deserialize content of the given kind."""
    try:
        return CODECS[kind].decode(content)
    except struct.error as exc:
        raise SerializationError(f"Cannot decode {kind.value} object: {exc}") from exc
