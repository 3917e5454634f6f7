import pytest
from fastapi.testclient import TestClient

from visualencer.server.main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


class TestPreviewServer:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_lists_node_types(self, client):
        types = client.get("/api/node-types").json()
        assert len(types) == 64
        assert {"effect", "delay", "wait", "text"} <= {t["type"] for t in types}

    def test_node_type_detail(self, client):
        info = client.get("/api/node-types/effect").json()
        assert info["role"] == "root"
        assert info["family"] == "effect"
        assert info["defaultConfig"] == {"file": "", "baseFolder": ""}

    def test_unknown_node_type_is_404(self, client):
        assert client.get("/api/node-types/fireworks").status_code == 404

    def test_compile(self, client):
        body = {
            "graph_name": "boom",
            "wrap": False,
            "separate_entries": True,
            "nodes": [
                {"id": "s", "type": "sound", "config": {"file": "audio/boom.ogg"}},
                {"id": "w", "type": "wait", "config": {"ms": 250}},
            ],
        }
        response = client.post("/api/compile", json=body)
        assert response.status_code == 200
        assert response.json() == {
            "script": 'seq.sound()\n  .file("audio/boom.ogg");\n\nseq.wait(250);\n',
            "diagnostics": [],
        }

    def test_compile_rejects_invalid_graph(self, client):
        body = {"nodes": [{"id": "a", "type": "wait"}, {"id": "a", "type": "wait"}]}
        response = client.post("/api/compile", json=body)
        assert response.status_code == 400
        assert "duplicate node id 'a'" in response.json()["detail"]

    @pytest.mark.filterwarnings("ignore:.*unknown node type")
    def test_compile_reports_unknown_types(self, client):
        body = {"wrap": False, "nodes": [{"id": "x", "type": "fireworks"}]}
        data = client.post("/api/compile", json=body).json()
        assert data["script"] == ""
        assert [d["kind"] for d in data["diagnostics"]] == ["unknown-type"]
        assert data["diagnostics"][0]["nodeId"] == "x"
