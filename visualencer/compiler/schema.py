"""
Visualencer Compiler — Graph JSON Schema + Validator
=====================================================
Defines the serialisation format the editor hands to the compiler and a
lightweight validator for it.

Canonical JSON format
---------------------

    {
      "graph_name": "fireball",                  // human label (str, required)
      "nodes": [
        {
          "id":     "n1",                         // unique within this graph (str, required)
          "type":   "effect",                     // registered node type id (str, required)
          "config": { "file": "jb2a/fire.webm" }, // flat option mapping (object, optional)
          "label":  "Fireball",                   // display name (str, optional)
          "parent": "n0"                          // root this child is chained onto (str, optional)
        }
      ]
    }

Node order is significant: it is the top-to-bottom order of the generated
script, and the order of children listed under the same parent is their
chaining order. A parent may appear after its children in the list.

Config values must be primitives (string, number, boolean or null); the
compiler never looks inside nested structures.
"""

from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..noderegistry.NodeRegistry import NodeTypeRegistry


_PRIMITIVES = (str, int, float, bool, type(None))


# ── Validation helpers ────────────────────────────────────────────────────────

class SchemaError(ValueError):
    """Raised when graph JSON fails structural validation."""


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise SchemaError(message)


def _require_keys(obj: Dict, keys: List[str], context: str) -> None:
    for key in keys:
        _require(key in obj, f"{context}: missing required field '{key}'")


def _known_types(registry: Optional['NodeTypeRegistry']) -> Set[str]:
    if registry is None:
        from ..nodes import default_registry
        registry = default_registry()
    return set(registry.type_ids())


# ── Public validator ─────────────────────────────────────────────────────────

def validate(data: Dict[str, Any], *, strict: bool = False,
             registry: Optional['NodeTypeRegistry'] = None) -> None:
    """
    Validate a parsed graph JSON dict.

    Args:
        data:      A pre-parsed dict (result of json.load / json.loads).
        strict:    When True, raise SchemaError for unknown node types.
                   When False (default), unknown types produce a warning and
                   are later skipped by the compiler.
        registry:  Catalog that defines the known types; built-ins when omitted.

    Raises:
        SchemaError: On any structural violation.
    """
    _require(isinstance(data, dict), "graph JSON must be a JSON object at the top level")
    _require_keys(data, ["graph_name", "nodes"], "graph root")

    _require(isinstance(data["graph_name"], str), "graph_name must be a string")
    _require(isinstance(data["nodes"], list), "nodes must be a list")

    known = _known_types(registry)
    node_ids: Set[str] = set()

    for i, node in enumerate(data["nodes"]):
        ctx = f"nodes[{i}]"
        _require(isinstance(node, dict), f"{ctx}: each node must be a JSON object")
        _require_keys(node, ["id", "type"], ctx)
        _require(isinstance(node["id"], str) and node["id"], f"{ctx}.id must be a non-empty string")
        _require(isinstance(node["type"], str), f"{ctx}.type must be a string")
        _require(node["id"] not in node_ids, f"{ctx}: duplicate node id '{node['id']}'")
        node_ids.add(node["id"])

        config = node.get("config")
        if config is not None:
            _require(isinstance(config, dict), f"{ctx}.config must be an object")
            for key, value in config.items():
                _require(isinstance(value, _PRIMITIVES),
                         f"{ctx}.config.{key} must be a string, number, boolean or null")
        if node.get("label") is not None:
            _require(isinstance(node["label"], str), f"{ctx}.label must be a string")
        if node.get("parent") is not None:
            _require(isinstance(node["parent"], str), f"{ctx}.parent must be a string")

        type_name = node["type"]
        if type_name not in known:
            msg = f"{ctx}: unknown node type '{type_name}'"
            if strict:
                raise SchemaError(msg)
            warnings.warn(msg + " (the node will be skipped)", stacklevel=2)

    # ── Validate parent links ───────────────────────────────────────────────

    for i, node in enumerate(data["nodes"]):
        parent = node.get("parent")
        if parent is None:
            continue
        ctx = f"nodes[{i}]"
        _require(parent in node_ids, f"{ctx}: parent '{parent}' not found in nodes")
        _require(parent != node["id"], f"{ctx}: a node cannot be its own parent")


def validate_file(path: Union[str, Path], *, strict: bool = False,
                  registry: Optional['NodeTypeRegistry'] = None) -> Dict[str, Any]:
    """
    Load and validate a graph JSON file.

    Returns:
        The parsed dict on success.

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaError: If the file is not valid JSON or the graph structure is invalid.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise SchemaError(f"{path}: invalid JSON ({exc})") from exc
    validate(data, strict=strict, registry=registry)
    return data


__all__ = ["SchemaError", "validate", "validate_file"]
