"""
Helpers around the in-memory directed graph.

Graphs are ``networkx.DiGraph`` instances whose nodes are integer vertex ids
(u64) and whose edges are ``(from_id, to_id)`` pairs. Node and edge
attributes are not persisted.
"""

from __future__ import annotations

from collections.abc import Iterable

import networkx as nx

VertexId = int
Edge = tuple[int, int]


def new_graph(vertices: Iterable[VertexId] = (), edges: Iterable[Edge] = ()) -> nx.DiGraph:
    """Create a DiGraph from vertex ids and edges."""
    graph = nx.DiGraph()
    graph.add_nodes_from(vertices)
    graph.add_edges_from(edges)
    return graph


def vertex_set(graph: nx.DiGraph) -> set[VertexId]:
    return set(graph.nodes)


def edge_set(graph: nx.DiGraph) -> set[Edge]:
    return set(graph.edges)


def same_graph(a: nx.DiGraph, b: nx.DiGraph) -> bool:
    """Whether two graphs have the same vertex set and edge set."""
    return vertex_set(a) == vertex_set(b) and edge_set(a) == edge_set(b)
