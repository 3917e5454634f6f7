"""
Visualencer Compiler — JSON Deserialiser
=========================================
Converts a serialised graph (file or dict) into a Graph the builder can walk.

    graph.json  →  [schema.validate]            →  dict
    dict        →  [deserialiser.json_to_graph]  →  Graph
    Graph       →  [builder.GraphCompiler]       →  script str

See schema.py for the format. Nodes are added in list order first and the
parent links resolved afterwards, so a child may be listed before its root.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

from ..core.GraphPrimitives import Graph, GraphNode
from .schema import SchemaError, validate

if TYPE_CHECKING:
    from ..noderegistry.NodeRegistry import NodeTypeRegistry


def json_to_graph(
    data: Dict[str, Any],
    *,
    validate_schema: bool = True,
    strict: bool = False,
    registry: Optional['NodeTypeRegistry'] = None,
) -> Graph:
    """
    Build a Graph from a parsed graph JSON dict.

    Args:
        data:             Parsed graph JSON.
        validate_schema:  Run schema.validate first (default True).
        strict:           Forwarded to schema.validate.
        registry:         Forwarded to schema.validate.

    Raises:
        SchemaError: If validation is enabled and fails.
    """
    if validate_schema:
        validate(data, strict=strict, registry=registry)

    graph = Graph(name=data.get("graph_name") or "graph")

    for raw in data["nodes"]:
        config = dict(raw.get("config") or {})
        graph.add_node(GraphNode(raw["id"], raw["type"], config, label=raw.get("label")))

    for raw in data["nodes"]:
        parent = raw.get("parent")
        if parent is None:
            continue
        try:
            graph.attach(raw["id"], parent)
        except ValueError as exc:
            raise SchemaError(f"node '{raw['id']}': {exc}") from exc

    return graph


__all__ = ["json_to_graph"]
