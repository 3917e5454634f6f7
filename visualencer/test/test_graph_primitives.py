import pytest

from visualencer.core.GraphPrimitives import Graph, GraphNode
from visualencer.nodes import default_registry


class TestGraph:

    @pytest.fixture
    def graph(self):
        """An effect root with two attached children and one standalone wait."""
        g = Graph("test")
        g.add_node(GraphNode("fx", "effect", {"file": "a.webm"}))
        g.add_node(GraphNode("d1", "delay", {"delayMin": 100}, parent_id="fx"))
        g.add_node(GraphNode("d2", "fade", {}, parent_id="fx"))
        g.add_node(GraphNode("w", "wait", {"ms": 500}))
        return g

    def test_insertion_order(self, graph):
        assert [n.id for n in graph] == ["fx", "d1", "d2", "w"]
        assert len(graph) == 4
        assert "w" in graph

    def test_children_in_attachment_order(self, graph):
        assert [n.id for n in graph.children_of("fx")] == ["d1", "d2"]
        assert graph.children_of("w") == []

    def test_duplicate_id_raises(self, graph):
        with pytest.raises(ValueError, match="already exists"):
            graph.add_node(GraphNode("fx", "sound"))

    def test_missing_parent_raises_and_leaves_graph_unchanged(self, graph):
        with pytest.raises(ValueError, match="not found"):
            graph.add_node(GraphNode("x", "delay", parent_id="ghost"))
        assert "x" not in graph

    def test_attach_at_index(self, graph):
        graph.add_node(GraphNode("d3", "async"))
        graph.attach("d3", "fx", index=0)
        assert [n.id for n in graph.children_of("fx")] == ["d3", "d1", "d2"]
        assert graph.get_node("d3").parent_id == "fx"

    def test_reattach_moves_child(self, graph):
        graph.add_node(GraphNode("fx2", "effect", {"file": "b.webm"}))
        graph.attach("d1", "fx2")
        assert [n.id for n in graph.children_of("fx")] == ["d2"]
        assert [n.id for n in graph.children_of("fx2")] == ["d1"]

    def test_attach_errors(self, graph):
        with pytest.raises(ValueError):
            graph.attach("ghost", "fx")
        with pytest.raises(ValueError):
            graph.attach("d1", "ghost")
        with pytest.raises(ValueError):
            graph.attach("fx", "fx")

    def test_detach(self, graph):
        graph.detach("d1")
        assert graph.get_node("d1").parent_id is None
        assert [n.id for n in graph.children_of("fx")] == ["d2"]

    def test_remove_root_orphans_children(self, graph):
        graph.remove_node("fx")
        assert "fx" not in graph
        assert graph.get_node("d1").parent_id is None
        assert graph.get_node("d2").parent_id is None

    def test_create_node_uses_registry_defaults(self):
        g = Graph()
        registry = default_registry()
        node = g.create_node("wait", "w1", registry=registry)
        assert node.config == {"ms": 1000, "msMax": 0}

        explicit = g.create_node("wait", "w2", {"ms": 5}, registry=registry)
        assert explicit.config == {"ms": 5}

    def test_create_node_generates_id(self):
        g = Graph()
        node = g.create_node("async")
        assert node.id in g
        assert node.config == {}
