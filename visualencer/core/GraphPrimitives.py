from typing import Any, Dict, Iterator, List, Mapping, Optional, TYPE_CHECKING
from collections import defaultdict

import logging
import uuid

if TYPE_CHECKING:
    from ..noderegistry.NodeRegistry import NodeTypeRegistry


logger = logging.getLogger(__name__)


# A node as supplied by the editor. The compiler only ever reads it.
class GraphNode:
    def __init__(self,
                 id: str,
                 type_id: str,
                 config: Optional[Mapping[str, Any]] = None,
                 parent_id: Optional[str] = None,
                 label: Optional[str] = None):
        self.id = id
        self.type_id = type_id
        self.config: Mapping[str, Any] = config if config is not None else {}
        self.parent_id = parent_id
        self.label = label if label is not None else id

    def __repr__(self):
        return f"GraphNode({self.id}:{self.type_id})"


class Graph:
    """
    Ordered collection of nodes plus root → children attachments.

    Node insertion order is the top-to-bottom order used by the compiler.
    Children of a root are kept in attachment order; that order is
    significant because later children can rewrite lines of earlier ones.
    """

    def __init__(self, name: str = "graph"):
        self.name = name
        self.nodes: Dict[str, GraphNode] = {}
        self.children: Dict[str, List[str]] = defaultdict(list)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(list(self.nodes.values()))

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self.nodes

    def add_node(self, node: GraphNode) -> GraphNode:
        if node.id in self.nodes:
            raise ValueError(f"Node with id '{node.id}' already exists in the graph")
        self.nodes[node.id] = node
        if node.parent_id is not None:
            if node.parent_id not in self.nodes:
                del self.nodes[node.id]
                raise ValueError(f"Cannot attach '{node.id}': parent '{node.parent_id}' not found")
            self.children[node.parent_id].append(node.id)
        return node

    def create_node(self,
                    type_id: str,
                    node_id: Optional[str] = None,
                    config: Optional[Mapping[str, Any]] = None,
                    parent: Optional[str] = None,
                    registry: Optional['NodeTypeRegistry'] = None) -> GraphNode:
        """Create and add a node. Without an explicit config the registry default is used."""
        if config is None:
            config = registry.create_default_config(type_id) if registry is not None else {}
        node = GraphNode(node_id or uuid.uuid4().hex, type_id, config, parent_id=parent)
        return self.add_node(node)

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        return self.nodes.get(node_id)

    def attach(self, child_id: str, root_id: str, index: Optional[int] = None) -> None:
        child = self.nodes.get(child_id)
        if child is None:
            raise ValueError(f"Node '{child_id}' not found")
        if root_id not in self.nodes:
            raise ValueError(f"Node '{root_id}' not found")
        if child_id == root_id:
            raise ValueError(f"Node '{child_id}' cannot be attached to itself")

        self.detach(child_id)
        siblings = self.children[root_id]
        if index is None or index >= len(siblings):
            siblings.append(child_id)
        else:
            siblings.insert(max(0, index), child_id)
        child.parent_id = root_id
        logger.debug(f"Attached '{child_id}' to '{root_id}' at {siblings.index(child_id)}")

    def detach(self, child_id: str) -> None:
        child = self.nodes.get(child_id)
        if child is None or child.parent_id is None:
            return
        siblings = self.children.get(child.parent_id, [])
        if child_id in siblings:
            siblings.remove(child_id)
        child.parent_id = None

    def remove_node(self, node_id: str) -> None:
        node = self.nodes.get(node_id)
        if node is None:
            return
        self.detach(node_id)
        # Orphan anything that hung off this node
        for child_id in list(self.children.get(node_id, [])):
            self.detach(child_id)
        self.children.pop(node_id, None)
        del self.nodes[node_id]

    def children_of(self, root_id: str) -> List[GraphNode]:
        return [self.nodes[cid] for cid in self.children.get(root_id, []) if cid in self.nodes]
