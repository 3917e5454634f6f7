"""
Live-preview REST routes.

All routes are mounted under /api by main.py.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from visualencer.compiler.deserialiser import json_to_graph
from visualencer.compiler.schema import SchemaError
from visualencer.server.state import preview_state

logger = logging.getLogger(__name__)

router = APIRouter()


# ── GET /node-types ───────────────────────────────────────────────────────────

@router.get("/node-types")
async def list_node_types() -> List[Dict[str, Any]]:
    registry = preview_state.registry
    return [registry.describe(type_id) for type_id in registry.type_ids()]


# ── GET /node-types/:type_id ──────────────────────────────────────────────────

@router.get("/node-types/{type_id}")
async def get_node_type(type_id: str) -> Dict[str, Any]:
    info = preview_state.registry.describe(type_id)
    if info is None:
        raise HTTPException(status_code=404, detail=f"Unknown node type '{type_id}'")
    return info


# ── POST /compile ─────────────────────────────────────────────────────────────

class NodeBody(BaseModel):
    id: str
    type: str
    config: Dict[str, Any] = Field(default_factory=dict)
    parent: Optional[str] = None
    label: Optional[str] = None


class CompileBody(BaseModel):
    graph_name: str = "preview"
    nodes: List[NodeBody] = Field(default_factory=list)
    wrap: Optional[bool] = None
    separate_entries: Optional[bool] = None


def _node_dict(node: NodeBody) -> Dict[str, Any]:
    data = {"id": node.id, "type": node.type, "config": node.config}
    if node.parent is not None:
        data["parent"] = node.parent
    if node.label is not None:
        data["label"] = node.label
    return data


@router.post("/compile")
async def compile_graph(body: CompileBody) -> Dict[str, Any]:
    data = {
        "graph_name": body.graph_name,
        "nodes": [_node_dict(node) for node in body.nodes],
    }
    try:
        graph = json_to_graph(data, registry=preview_state.registry)
    except SchemaError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    options = preview_state.options
    overrides = {key: value for key, value in (("wrap", body.wrap),
                                                ("separate_entries", body.separate_entries))
                 if value is not None}
    if overrides:
        options = dataclasses.replace(options, **overrides)

    result = preview_state.compiler(options).compile(graph)
    logger.info(f"Compiled '{graph.name}': {len(graph)} nodes, "
                f"{len(result.diagnostics)} diagnostics")
    return {
        "script": result.text,
        "diagnostics": [d.to_dict() for d in result.diagnostics],
    }
