"""
Shared test fixtures.

Storage tests write into pytest's ``tmp_path``; nothing touches the working
directory.
"""

from pathlib import Path

import networkx as nx
import pytest

from histo_graph.graph import new_graph


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Base directory of an empty object store."""
    return tmp_path / "store"


@pytest.fixture
def sample_graph() -> nx.DiGraph:
    """Small graph with a cycle and an isolated vertex."""
    return new_graph(
        vertices=[1, 2, 3, 4, 99],
        edges=[(1, 2), (2, 3), (3, 1), (3, 4)],
    )


@pytest.fixture(autouse=True)
def _clear_store_env(monkeypatch):
    for var in (
        "HISTO_GRAPH_STORE_DIR",
        "HISTO_GRAPH_SNAPSHOT",
        "HISTO_GRAPH_VERIFY_READS",
        "HISTO_GRAPH_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
