

import copy
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple, Type, TYPE_CHECKING

from ..core.Types import NodeRole

if TYPE_CHECKING:
    from ..core.GraphPrimitives import GraphNode
    from ..compiler.ir import Block, CompilationContext


logger = logging.getLogger(__name__)

# =========================================================================================
# NODE TYPE DESCRIPTORS
#
# A descriptor is the registered behaviour of one node type: presentation metadata,
# structural role, family constraints, a default-config seed for the editor and exactly
# one compile entry point matching its role:
#
#   ROOT    -> compile_root(node, block, ctx)    opens a chain in a fresh Block
#   CHILD   -> compile_child(node, block, ctx)   appends continuation lines to its root
#   UTILITY -> compile(node, ctx)                emits standalone statements
#
# Compile functions read node.config with inline fallbacks. They never read the
# create_config() seed at compile time and never raise for bad input.
# =========================================================================================

class NodeType(ABC):
    label: str = ""
    category: str = ""
    role: NodeRole

    def create_config(self) -> Dict[str, Any]:
        return {}

    def describe(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "category": self.category,
            "role": self.role.value,
        }


class RootNodeType(NodeType):
    role = NodeRole.ROOT
    family: str = ""

    @abstractmethod
    def compile_root(self, node: 'GraphNode', block: 'Block', ctx: 'CompilationContext') -> None:
        ...

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["family"] = self.family
        return info


class ChildNodeType(NodeType):
    role = NodeRole.CHILD
    families: FrozenSet[str] = frozenset()

    @abstractmethod
    def compile_child(self, node: 'GraphNode', block: 'Block', ctx: 'CompilationContext') -> None:
        ...

    def accepts(self, family: str) -> bool:
        return family in self.families

    def describe(self) -> Dict[str, Any]:
        info = super().describe()
        info["families"] = sorted(self.families)
        return info


class UtilityNodeType(NodeType):
    role = NodeRole.UTILITY

    @abstractmethod
    def compile(self, node: 'GraphNode', ctx: 'CompilationContext') -> None:
        ...


_ROLE_BASES: Dict[NodeRole, type] = {
    NodeRole.ROOT: RootNodeType,
    NodeRole.CHILD: ChildNodeType,
    NodeRole.UTILITY: UtilityNodeType,
}


class NodeTypeRegistry:
    """
    Catalog mapping a node-type id to its descriptor.

    Instances are independent: a compiler owns the registry it was given, so tests
    and extensions can build catalogs side by side. Registration is expected to
    happen before any compile pass; compilation only reads.
    """

    # Built-in catalog collected by the @NodeTypeRegistry.builtin decorator
    _builtin_types: Dict[str, Type[NodeType]] = {}

    def __init__(self):
        self._types: Dict[str, NodeType] = {}

    @classmethod
    def builtin(cls, type_id: str) -> Callable[[Type[NodeType]], Type[NodeType]]:
        """Decorator to add a descriptor class to the built-in catalog."""
        def decorator(subclass: Type[NodeType]) -> Type[NodeType]:
            if cls._builtin_types.get(type_id):
                raise ValueError(f"Node type '{type_id}' is already registered.")
            cls._builtin_types[type_id] = subclass
            return subclass
        return decorator

    @classmethod
    def builtin_types(cls) -> Dict[str, Type[NodeType]]:
        return dict(cls._builtin_types)

    @classmethod
    def with_builtins(cls) -> 'NodeTypeRegistry':
        registry = cls()
        for type_id, descriptor_cls in cls._builtin_types.items():
            registry.register(type_id, descriptor_cls())
        return registry

    # -- mutation ---------------------------------------------------------------------

    def register(self, type_id: str, descriptor: NodeType) -> None:
        """Insert or replace the descriptor for type_id. Last registration wins."""
        if not isinstance(type_id, str) or not type_id:
            raise ValueError(f"Node type id must be a non-empty string, got {type_id!r}")
        if not isinstance(descriptor, NodeType):
            raise TypeError(f"Descriptor for '{type_id}' must be a NodeType, got {type(descriptor).__name__}")

        role = NodeRole.parse(getattr(descriptor, "role", None))
        base = _ROLE_BASES[role]
        if not isinstance(descriptor, base):
            raise ValueError(f"Descriptor for '{type_id}' declares role '{role.value}' "
                             f"but does not implement {base.__name__}")
        if role == NodeRole.ROOT and not descriptor.family:
            raise ValueError(f"Root node type '{type_id}' must declare a family")
        if role == NodeRole.CHILD and not descriptor.families:
            raise ValueError(f"Child node type '{type_id}' must declare at least one family")

        if type_id in self._types:
            logger.debug(f"Replacing node type '{type_id}' "
                         f"({type(self._types[type_id]).__name__} -> {type(descriptor).__name__})")
        self._types[type_id] = descriptor

    def unregister(self, type_id: str) -> None:
        self._types.pop(type_id, None)

    # -- lookup -----------------------------------------------------------------------

    def get(self, type_id: str) -> Optional[NodeType]:
        return self._types.get(type_id)

    def __contains__(self, type_id: str) -> bool:
        return type_id in self._types

    def __len__(self) -> int:
        return len(self._types)

    def type_ids(self) -> List[str]:
        return list(self._types.keys())

    def items(self) -> Iterable[Tuple[str, NodeType]]:
        return list(self._types.items())

    def create_default_config(self, type_id: str) -> Dict[str, Any]:
        """Fresh default config for a new node of this type; {} when none is defined."""
        descriptor = self._types.get(type_id)
        if descriptor is None:
            return {}
        config = descriptor.create_config()
        return copy.deepcopy(dict(config)) if config else {}

    def describe(self, type_id: str) -> Optional[Dict[str, Any]]:
        descriptor = self._types.get(type_id)
        if descriptor is None:
            return None
        info = descriptor.describe()
        info["type"] = type_id
        info["defaultConfig"] = self.create_default_config(type_id)
        return info
