import json

import pytest

from visualencer.compiler import GraphCompiler
from visualencer.compiler.deserialiser import json_to_graph
from visualencer.compiler.schema import SchemaError, validate, validate_file
from visualencer.config import CompilerOptions


def _graph(*nodes):
    return {"graph_name": "test", "nodes": list(nodes)}


class TestValidate:

    def test_valid_graph(self):
        validate(_graph(
            {"id": "fx", "type": "effect", "config": {"file": "a.webm", "scale": 1.5, "x": None, "on": True}},
            {"id": "d", "type": "delay", "parent": "fx", "label": "Delay"},
        ))

    @pytest.mark.parametrize("data, message", [
        ([], "JSON object"),
        ({"nodes": []}, "graph_name"),
        ({"graph_name": 1, "nodes": []}, "graph_name must be a string"),
        ({"graph_name": "g", "nodes": {}}, "nodes must be a list"),
        (_graph("fx"), "JSON object"),
        (_graph({"type": "effect"}), "missing required field 'id'"),
        (_graph({"id": "", "type": "effect"}), "non-empty string"),
        (_graph({"id": "a", "type": 3}), "type must be a string"),
        (_graph({"id": "a", "type": "wait"}, {"id": "a", "type": "wait"}), "duplicate node id 'a'"),
        (_graph({"id": "a", "type": "wait", "config": []}), "config must be an object"),
        (_graph({"id": "a", "type": "wait", "config": {"ms": {"min": 1}}}), "config.ms"),
        (_graph({"id": "a", "type": "wait", "label": 5}), "label must be a string"),
        (_graph({"id": "a", "type": "delay", "parent": "ghost"}), "parent 'ghost' not found"),
        (_graph({"id": "a", "type": "delay", "parent": "a"}), "its own parent"),
    ])
    def test_structural_errors(self, data, message):
        with pytest.raises(SchemaError, match=message):
            validate(data)

    def test_schema_error_is_value_error(self):
        assert issubclass(SchemaError, ValueError)

    def test_unknown_type_warns(self):
        with pytest.warns(UserWarning, match="unknown node type 'nope'"):
            validate(_graph({"id": "a", "type": "nope"}))

    def test_unknown_type_strict(self):
        with pytest.raises(SchemaError, match="unknown node type"):
            validate(_graph({"id": "a", "type": "nope"}), strict=True)

    def test_validate_file(self, tmp_path):
        path = tmp_path / "g.json"
        path.write_text(json.dumps(_graph({"id": "w", "type": "wait"})), encoding="utf-8")
        assert validate_file(path)["graph_name"] == "test"

    def test_validate_file_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")
        with pytest.raises(SchemaError, match="invalid JSON"):
            validate_file(path)


class TestJsonToGraph:

    def test_children_may_precede_their_root(self):
        graph = json_to_graph(_graph(
            {"id": "d", "type": "delay", "config": {"delayMin": 100}, "parent": "fx"},
            {"id": "fx", "type": "effect", "config": {"file": "a.webm"}},
            {"id": "f", "type": "fade", "config": {"fadeInDuration": 250}, "parent": "fx"},
        ))
        assert [n.id for n in graph] == ["d", "fx", "f"]
        assert [n.id for n in graph.children_of("fx")] == ["d", "f"]

        text = GraphCompiler(options=CompilerOptions(wrap=False)).compile(graph).text
        assert text == 'seq.effect()\n  .file("a.webm")\n  .delay(100)\n  .fadeIn(250);\n'

    def test_labels_and_defaults(self):
        graph = json_to_graph(_graph({"id": "w", "type": "wait", "label": "Pause"}, {"id": "a", "type": "async"}))
        assert graph.name == "test"
        assert graph.get_node("w").label == "Pause"
        assert graph.get_node("a").label == "a"
        assert graph.get_node("a").config == {}

    def test_invalid_input_raises(self):
        with pytest.raises(SchemaError):
            json_to_graph({"graph_name": "g"})
