"""
Visualencer — node-graph to Sequencer script compiler.

    from visualencer import Graph, compile_graph, default_registry

    registry = default_registry()
    graph = Graph("boom")
    graph.create_node("sound", "s1", {"file": "audio/boom.ogg"})
    print(compile_graph(graph, registry))
"""

from .compiler import CompiledScript, GraphCompiler, compile_graph
from .config import CompilerOptions, load_options
from .core.GraphPrimitives import Graph, GraphNode
from .noderegistry.NodeRegistry import NodeTypeRegistry
from .nodes import default_registry, register_builtin_node_types

__all__ = [
    "CompiledScript",
    "CompilerOptions",
    "Graph",
    "GraphCompiler",
    "GraphNode",
    "NodeTypeRegistry",
    "compile_graph",
    "default_registry",
    "load_options",
    "register_builtin_node_types",
]
