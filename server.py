from __future__ import annotations

import logging
from typing import Optional, Union

from histo_graph.config import AppConfig
from tools import (
    add_edge,
    add_vertex,
    init_graph,
    list_snapshot_names,
    show_graph,
)

try:
    from mcp.server.fastmcp import FastMCP
except ImportError as exc:  # pragma: no cover - dependency is optional at import time
    FastMCP = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


def _require_server() -> "FastMCP":
    if FastMCP is None:
        raise SystemExit(
            "The mcp package is required to run the server. "
            "Install it with `pip install mcp`."
        ) from _IMPORT_ERROR
    return FastMCP("histo-graph-server")


def _validate_required(name: str, value) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {name}")


def _json_payload(model) -> dict:
    return model.model_dump(mode="json")


def build_server() -> "FastMCP":
    server = _require_server()

    @server.tool(
            description="Create an empty graph snapshot, replacing any snapshot with the same name."
    )
    async def init_graph_tool(storeDir: Optional[str] = None, name: Optional[str] = None) -> dict:
        view = await init_graph(storeDir=storeDir, name=name)
        return _json_payload(view)

    @server.tool(
            description="Load a graph snapshot and return its nodes and edges."
    )
    async def show_graph_tool(storeDir: Optional[str] = None, name: Optional[str] = None) -> dict:
        view = await show_graph(storeDir=storeDir, name=name)
        return _json_payload(view)

    @server.tool(
            description="Add a vertex to a graph snapshot and save it under the same name."
    )
    async def add_vertex_tool(
        vertexId: Union[int, str], storeDir: Optional[str] = None, name: Optional[str] = None
    ) -> dict:
        _validate_required("vertexId", vertexId)
        view = await add_vertex(vertexId=vertexId, storeDir=storeDir, name=name)
        return _json_payload(view)

    @server.tool(
            description="Add a directed edge to a graph snapshot and save it under the same name."
    )
    async def add_edge_tool(
        fromId: Union[int, str],
        toId: Union[int, str],
        storeDir: Optional[str] = None,
        name: Optional[str] = None,
    ) -> dict:
        _validate_required("fromId", fromId)
        _validate_required("toId", toId)
        view = await add_edge(fromId=fromId, toId=toId, storeDir=storeDir, name=name)
        return _json_payload(view)

    @server.tool(
            description="List the names of all graph snapshots in a store directory."
    )
    async def list_snapshots_tool(storeDir: Optional[str] = None) -> dict:
        snapshots = await list_snapshot_names(storeDir=storeDir)
        return _json_payload(snapshots)

    return server


def main() -> None:
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    server = build_server()
    server.run()


if __name__ == "__main__":
    main()
