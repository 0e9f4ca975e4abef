"""
Tests for the Flask HTTP API.
"""
import logging

import pytest

import app as api_module
from disposal_agent import DisposalAgentApp, DisposalAgentConfig


@pytest.fixture
def agent(catalog, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    agent = DisposalAgentApp(DisposalAgentConfig(), catalog=catalog)
    agent.initialize()
    return agent


@pytest.fixture
def client(agent, monkeypatch):
    monkeypatch.setattr(api_module, "agent_app", agent)
    monkeypatch.setattr(api_module.limiter, "enabled", False)
    api_module.app.config["TESTING"] = True
    return api_module.app.test_client()


class TestResolveEndpoint:
    """Tests for POST /resolve."""

    def test_resolves_item(self, client):
        response = client.post("/resolve", json={
            "providerId": "testville",
            "guessedItemName": "keys",
            "labels": [],
        })

        assert response.status_code == 200
        data = response.get_json()
        assert data["best"]["id"] == "scrap-metal"
        assert data["best"]["commonMistakes"] == []
        assert data["confidence"] == 1.0
        assert data["providerName"] == "Testville"
        assert data["matches"][0]["material"]["id"] == "scrap-metal"
        assert isinstance(data["rationale"], list)

    def test_unknown_item(self, client):
        response = client.post("/resolve", json={
            "providerId": "testville",
            "guessedItemName": "xqzvbnmw",
            "labels": [],
        })

        assert response.status_code == 200
        assert response.get_json()["best"] is None

    def test_vision_confidence(self, client):
        response = client.post("/resolve", json={
            "providerId": "testville",
            "guessedItemName": "Batteries",
            "labels": ["battery"],
            "visionConfidence": 0.6,
        })

        assert response.get_json()["confidence"] == 0.87

    def test_schema_violation(self, client):
        response = client.post("/resolve", json={"guessedItemName": "keys", "labels": []})

        assert response.status_code == 400
        data = response.get_json()
        assert data["error"] == "Invalid request"
        assert data["details"][0]["loc"] == ["providerId"]

    def test_not_json(self, client):
        response = client.post("/resolve", data="keys", content_type="text/plain")

        assert response.status_code == 400

    def test_unknown_provider(self, client):
        response = client.post("/resolve", json={
            "providerId": "atlantis",
            "guessedItemName": "keys",
            "labels": [],
        })

        assert response.status_code == 404
        assert "atlantis" in response.get_json()["error"]

    def test_internal_error_hidden(self, client, agent, monkeypatch):
        def explode(_request):
            raise RuntimeError("database password is hunter2")

        monkeypatch.setattr(agent, "resolve", explode)

        response = client.post("/resolve", json={
            "providerId": "testville",
            "guessedItemName": "keys",
            "labels": [],
        })

        assert response.status_code == 500
        assert response.get_json() == {"error": "Resolve failed"}

    def test_agent_not_initialized(self, client, monkeypatch):
        monkeypatch.setattr(api_module, "agent_app", None)

        response = client.post("/resolve", json={"providerId": "testville", "guessedItemName": "keys", "labels": []})

        assert response.status_code == 500


class TestSearchEndpoint:
    """Tests for GET /search."""

    def test_hits(self, client):
        response = client.get("/search?q=plastic&provider=testville")

        assert response.status_code == 200
        hits = response.get_json()
        assert [h["materialId"] for h in hits] == ["plastic-bags", "plastic-bottles"]
        assert set(hits[0]) == {"materialId", "name", "category", "score"}

    def test_missing_query(self, client):
        assert client.get("/search").get_json() == []
        assert client.get("/search?q=%20%20").get_json() == []

    def test_default_provider_is_general(self, client):
        hits = client.get("/search?q=batteries").get_json()

        assert hits[0]["materialId"] == "batteries"

    def test_suggestions(self, client):
        response = client.get("/search?q=xoax&provider=testville")

        assert response.get_json() == {"results": [], "suggestions": ["Foam"]}

    def test_limit(self, client):
        hits = client.get("/search?q=plastic&provider=testville&limit=1").get_json()

        assert len(hits) == 1

    @pytest.mark.parametrize("limit", ["0", "51", "many"])
    def test_invalid_limit(self, client, limit):
        assert client.get(f"/search?q=plastic&limit={limit}").status_code == 400

    def test_query_too_long(self, client):
        assert client.get("/search?q=" + "a" * 201).status_code == 400

    def test_unknown_provider(self, client):
        assert client.get("/search?q=keys&provider=atlantis").status_code == 404


class TestProviderEndpoints:
    """Tests for GET /providers and GET /providers/<id>."""

    def test_list(self, client):
        data = client.get("/providers").get_json()

        assert [p["id"] for p in data] == ["general", "testville"]
        assert data[1] == {
            "id": "testville",
            "displayName": "Testville",
            "coverage": {
                "country": "US",
                "region": "TS",
                "city": "Testville",
                "zips": ["12345"],
                "aliases": ["test city"],
            },
        }

    def test_detail(self, client):
        response = client.get("/providers/testville")

        assert response.status_code == 200
        data = response.get_json()
        assert data["displayName"] == "Testville"
        assert len(data["materials"]) == 10
        assert "rulesSummary" in data

    def test_detail_not_found(self, client):
        assert client.get("/providers/atlantis").status_code == 404


class TestStartup:
    """Tests for agent initialization from the environment."""

    def test_applies_configured_log_level(self, monkeypatch):
        monkeypatch.setattr(api_module, "agent_app", None)
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        root = logging.getLogger()
        previous = root.level

        try:
            api_module._initialize_agent_from_env()

            assert root.level == logging.WARNING
            assert api_module.agent_app is not None
        finally:
            root.setLevel(previous)

    def test_invalid_config_leaves_agent_unset(self, monkeypatch):
        monkeypatch.setattr(api_module, "agent_app", None)
        monkeypatch.setenv("LOG_LEVEL", "loud")

        api_module._initialize_agent_from_env()

        assert api_module.agent_app is None
