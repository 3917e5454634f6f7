import json

import pytest

from visualencer.compile_from_json import main


GRAPH = {
    "graph_name": "boom",
    "nodes": [
        {"id": "s", "type": "sound", "config": {"file": "audio/boom.ogg"}},
        {"id": "v", "type": "volume", "config": {"volume": 0.5}, "parent": "s"},
        {"id": "w", "type": "wait", "config": {"ms": 250}},
    ],
}


class TestCompileFromJson:

    @pytest.fixture(autouse=True)
    def isolated(self, tmp_path, monkeypatch):
        """Run from an empty directory with no option variables set."""
        monkeypatch.chdir(tmp_path)
        for key in ("VISUALENCER_WRAP", "VISUALENCER_SEPARATE_ENTRIES", "VISUALENCER_LOG_LEVEL"):
            monkeypatch.delenv(key, raising=False)

    @pytest.fixture
    def graph_file(self, tmp_path):
        path = tmp_path / "boom.json"
        path.write_text(json.dumps(GRAPH), encoding="utf-8")
        return path

    def test_prints_script(self, graph_file, capsys):
        assert main([str(graph_file)]) == 0
        out, err = capsys.readouterr()
        assert out == (
            "const seq = new Sequence();\n"
            "\n"
            "seq.sound()\n"
            '  .file("audio/boom.ogg")\n'
            "  .volume(0.5);\n"
            "\n"
            "seq.wait(250);\n"
            "\n"
            "seq.play();\n"
        )
        assert "graph  : boom" in err

    def test_no_wrap_compact(self, graph_file, capsys):
        assert main([str(graph_file), "--no-wrap", "--compact"]) == 0
        out, _ = capsys.readouterr()
        assert out == 'seq.sound()\n  .file("audio/boom.ogg")\n  .volume(0.5);\nseq.wait(250);\n'

    def test_writes_output_file(self, graph_file, tmp_path, capsys):
        out_path = tmp_path / "macros" / "boom.js"
        assert main([str(graph_file), "--out", str(out_path), "--no-wrap"]) == 0
        assert out_path.read_text(encoding="utf-8").startswith("seq.sound()")
        out, err = capsys.readouterr()
        assert out == ""
        assert "wrote" in err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.json")]) == 1
        assert "[error] File not found" in capsys.readouterr().err

    def test_schema_error(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"graph_name": "bad"}), encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Schema validation failed" in capsys.readouterr().err

    def test_diagnostics_go_to_stderr(self, tmp_path, capsys):
        data = dict(GRAPH, nodes=GRAPH["nodes"] + [{"id": "d", "type": "delay", "config": {}}])
        path = tmp_path / "orphan.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        assert main([str(path)]) == 0
        out, err = capsys.readouterr()
        assert ".delay(" not in out
        assert "[orphan-child] d:" in err

    def test_strict_rejects_unknown_types(self, tmp_path, capsys):
        data = dict(GRAPH, nodes=[{"id": "x", "type": "fireworks"}])
        path = tmp_path / "unknown.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        assert main([str(path), "--strict"]) == 1
        assert "unknown node type 'fireworks'" in capsys.readouterr().err
