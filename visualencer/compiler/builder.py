"""
Visualencer Compiler — Block Builder
=====================================
Walks a Graph in node insertion order and turns every node into output lines
by dispatching to its registered descriptor:

    root     →  fresh Block, descriptor.compile_root, then each attached
                child in sibling order through descriptor.compile_child
    utility  →  descriptor.compile against the context's instruction list;
                whatever it appended becomes one Statement at this position
    child    →  only reached through its root; a child with no usable root
                is reported and skipped

Nothing in here raises for node input. Unknown types, family or role
mismatches, orphaned children and roots that produced no opener are recorded
as Diagnostics on the result and logged.
"""

from __future__ import annotations

import logging
from typing import List, Optional, TYPE_CHECKING

from ..config import CompilerOptions
from ..core.Types import DiagnosticKind, NodeRole
from .emitter import emit
from .ir import Block, CompilationContext, CompiledScript, Entry, Statement

if TYPE_CHECKING:
    from ..core.GraphPrimitives import Graph, GraphNode
    from ..noderegistry.NodeRegistry import NodeTypeRegistry


logger = logging.getLogger(__name__)


class GraphCompiler:
    """Compiles graphs against one registry. Holds no per-pass state."""

    def __init__(self,
                 registry: Optional['NodeTypeRegistry'] = None,
                 options: Optional[CompilerOptions] = None):
        if registry is None:
            from ..nodes import default_registry
            registry = default_registry()
        self.registry = registry
        self.options = options or CompilerOptions()

    def compile(self, graph: 'Graph') -> CompiledScript:
        ctx = CompilationContext()
        entries: List[Entry] = []

        for node in graph:
            descriptor = self.registry.get(node.type_id)
            if descriptor is None:
                ctx.report(node.id, node.type_id, DiagnosticKind.UNKNOWN_TYPE,
                           f"Unknown node type '{node.type_id}'")
                logger.warning(f"Skipping node '{node.id}': unknown type '{node.type_id}'")
                continue

            if descriptor.role == NodeRole.ROOT:
                entry = self._compile_root(graph, node, descriptor, ctx)
            elif descriptor.role == NodeRole.UTILITY:
                entry = self._compile_utility(node, descriptor, ctx)
            else:
                self._check_orphan(graph, node, ctx)
                entry = None

            # declarations raised by a node that produced nothing are dropped with it
            declarations = ctx.take_declarations()
            if entry is not None:
                entry.declarations = declarations
                entries.append(entry)

        text = emit(entries, self.options)
        logger.debug(f"Compiled graph '{graph.name}': {len(entries)} entries, "
                     f"{len(ctx.diagnostics)} diagnostics")
        return CompiledScript(text=text,
                              entries=entries,
                              declarations=[d for e in entries for d in e.declarations],
                              diagnostics=list(ctx.diagnostics))

    # ── Roots ─────────────────────────────────────────────────────────────────

    def _compile_root(self, graph, node, descriptor, ctx) -> Optional[Block]:
        block = Block(node_id=node.id, family=descriptor.family)
        descriptor.compile_root(node, block, ctx)

        if block.is_empty:
            ctx.report(node.id, node.type_id, DiagnosticKind.ROOT_OMITTED,
                       f"Root '{node.id}' produced no opener; its children are skipped")
            logger.debug(f"Omitting root '{node.id}' ({node.type_id}) and its children")
            return None

        for child in graph.children_of(node.id):
            self._compile_child(child, block, ctx)
        return block

    def _compile_child(self, child: 'GraphNode', block: Block, ctx: CompilationContext) -> None:
        descriptor = self.registry.get(child.type_id)
        if descriptor is None:
            # reported when the main loop reaches it
            return

        if descriptor.role != NodeRole.CHILD:
            ctx.report(child.id, child.type_id, DiagnosticKind.ROLE_MISMATCH,
                       f"'{child.type_id}' is a {descriptor.role.value} node and cannot be chained")
            logger.warning(f"Node '{child.id}' ({child.type_id}) attached to '{block.node_id}' "
                           f"is not a child node")
            return

        if not descriptor.accepts(block.family):
            ctx.report(child.id, child.type_id, DiagnosticKind.FAMILY_MISMATCH,
                       f"'{child.type_id}' does not apply to '{block.family}' sections")
            logger.warning(f"Skipping '{child.id}' ({child.type_id}): family '{block.family}' "
                           f"not in {sorted(descriptor.families)}")
            return

        descriptor.compile_child(child, block, ctx)

    def _check_orphan(self, graph, node, ctx) -> None:
        parent = graph.get_node(node.parent_id) if node.parent_id is not None else None
        if parent is not None:
            parent_descriptor = self.registry.get(parent.type_id)
            if parent_descriptor is not None and parent_descriptor.role == NodeRole.ROOT:
                return

        ctx.report(node.id, node.type_id, DiagnosticKind.ORPHAN_CHILD,
                   f"'{node.type_id}' node '{node.id}' is not attached to a section")
        logger.debug(f"Skipping orphaned child '{node.id}' ({node.type_id})")

    # ── Utilities ─────────────────────────────────────────────────────────────

    def _compile_utility(self, node, descriptor, ctx) -> Optional[Statement]:
        start = len(ctx.lines)
        descriptor.compile(node, ctx)
        lines = ctx.lines[start:]
        if not lines:
            return None
        return Statement(node_id=node.id, lines=list(lines))
