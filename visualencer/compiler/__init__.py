"""
Visualencer Compiler
====================
Compiles a node Graph into Sequencer script text.

Pipeline:
    Graph      →  [builder.GraphCompiler]  →  List[Block | Statement]
    entries    →  [emitter.emit]           →  script str

Public API
----------
    from visualencer.compiler import compile_graph

    script = compile_graph(graph)
    print(script)

For diagnostics and the intermediate blocks use GraphCompiler directly:

    result = GraphCompiler(registry).compile(graph)
    result.text, result.diagnostics
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from ..config import CompilerOptions
from .builder import GraphCompiler
from .emitter import emit
from .ir import Block, CompilationContext, CompiledScript, Diagnostic, Statement

if TYPE_CHECKING:
    from ..core.GraphPrimitives import Graph
    from ..noderegistry.NodeRegistry import NodeTypeRegistry


def compile_graph(
    graph: "Graph",
    registry: Optional["NodeTypeRegistry"] = None,
    options: Optional[CompilerOptions] = None,
) -> str:
    """
    Compile *graph* and return the script text.

    Args:
        graph:     The Graph to compile.
        registry:  Node type catalog; the built-in catalog when omitted.
        options:   Output wrapping and spacing; defaults when omitted.
    """
    return GraphCompiler(registry, options).compile(graph).text


__all__ = [
    "Block",
    "CompilationContext",
    "CompiledScript",
    "CompilerOptions",
    "Diagnostic",
    "GraphCompiler",
    "Statement",
    "compile_graph",
    "emit",
]
