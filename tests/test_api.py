"""Tests for the HTTP surface."""

import pytest
from fastapi.testclient import TestClient

from solidify.api.scans import get_services
from solidify.checkers import AnalysisEngine
from solidify.graph.workflow import WorkflowServices
from solidify.main import app


@pytest.fixture
def client(settings):
    services = WorkflowServices(engine=AnalysisEngine(settings=settings))
    app.dependency_overrides[get_services] = lambda: services
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestHealth:
    """GET /api/v1/health"""

    def test_degraded_without_api_key(self, client):
        response = client.get("/api/v1/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "degraded"
        assert body["dependencies"]["llm"]["status"] == "degraded"
        assert body["dependencies"]["checkers"]["status"] == "healthy"
        assert "SRPChecker" in body["dependencies"]["checkers"]["message"]

    def test_healthy_with_api_key(self, client, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        from solidify.config import get_settings
        get_settings.cache_clear()
        assert client.get("/api/v1/health").json()["status"] == "healthy"


class TestScans:
    """POST /api/v1/scans and GET /api/v1/rules"""

    def test_scan_returns_result(self, client, project):
        response = client.post("/api/v1/scans", json={"path": str(project)})
        assert response.status_code == 200
        body = response.json()
        assert body["files_scanned"] == 3
        assert [v["principle"] for v in body["violations"]] == ["SRP"]
        assert len(body["violations"][0]["evidences"]) == 2
        assert body["summary"]["SRP"] == 2

    def test_missing_path_is_404(self, client, tmp_path):
        response = client.post("/api/v1/scans", json={"path": str(tmp_path / "nope")})
        assert response.status_code == 404

    def test_empty_path_is_rejected(self, client):
        assert client.post("/api/v1/scans", json={"path": ""}).status_code == 422

    def test_rules(self, client):
        rules = client.get("/api/v1/rules").json()
        assert [r["principle"] for r in rules] == ["SRP", "OCP", "LSP", "ISP", "DIP"]
        assert rules[3]["applies_to"] == "interface"

    def test_root(self, client):
        assert client.get("/").json()["health"] == "/api/v1/health"
