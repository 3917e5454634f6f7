"""
Built-in node types.

Importing this package registers every built-in descriptor class with
NodeTypeRegistry.builtin; default_registry() turns that catalog into a fresh
registry instance.
"""

from ..noderegistry.NodeRegistry import NodeTypeRegistry

from . import flow, sections, common, animation, effect, sound, canvas  # noqa: F401  (registration)


def register_builtin_node_types(registry: NodeTypeRegistry) -> NodeTypeRegistry:
    """Load the built-in catalog into an existing registry, replacing same-id entries."""
    for type_id, descriptor_cls in NodeTypeRegistry.builtin_types().items():
        registry.register(type_id, descriptor_cls())
    return registry


def default_registry() -> NodeTypeRegistry:
    return NodeTypeRegistry.with_builtins()


__all__ = ["default_registry", "register_builtin_node_types"]
