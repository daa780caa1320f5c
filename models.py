from __future__ import annotations

from typing import List

import networkx as nx
from pydantic import BaseModel


class VertexView(BaseModel):
    id: str
    label: str


class EdgeView(BaseModel):
    source: str
    target: str
    label: str = "edge"


class GraphView(BaseModel):
    """Display projection of a graph: nodes and edges keyed by decimal ids."""

    nodes: List[VertexView]
    edges: List[EdgeView]

    @classmethod
    def from_graph(cls, graph: nx.DiGraph) -> "GraphView":
        return cls(
            nodes=[VertexView(id=str(v), label=str(v)) for v in graph.nodes],
            edges=[EdgeView(source=str(a), target=str(b)) for a, b in graph.edges],
        )


class SnapshotList(BaseModel):
    storeDir: str
    snapshots: List[str]
