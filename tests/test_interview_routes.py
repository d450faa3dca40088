import pytest

from services.errors import StoreUnavailableError
from services.record_store import Base

SEARCH = "/api/interview/search"


def _search(client, **params):
    query = {"company": "meta", "role": "swe", "position": "sde1", "year": "2024"}
    query.update(params)
    return client.get(SEARCH, query_string={k: v for k, v in query.items() if v is not None})


class TestCreateRoute:

    def test_create_returns_stored_record(self, client, meta_payload):
        resp = client.post("/api/interview", json=meta_payload)
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["message"] == "Interview data saved successfully"
        assert body["data"]["id"] >= 1
        assert body["data"]["questions"][0]["frequency"] == 3
        assert body["data"]["questions"][0]["recency"]

    def test_invalid_question_shape(self, client, meta_payload):
        del meta_payload["questions"][0]["difficulty"]
        resp = client.post("/api/interview", json=meta_payload)
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["error"] == "validation_error"
        assert body["message"] == "Each question must have text, topic, roundType, and difficulty"
        assert _search(client).status_code == 404

    def test_invalid_position(self, client, meta_payload):
        meta_payload["position"] = "Manager"
        resp = client.post("/api/interview", json=meta_payload)
        assert resp.status_code == 400
        assert resp.get_json()["details"][0]["field"] == "position"

    def test_non_json_body(self, client):
        resp = client.post("/api/interview", data="company=Meta", content_type="text/plain")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "validation_error"

    def test_store_failure(self, client, store, meta_payload):
        Base.metadata.drop_all(store.engine)
        resp = client.post("/api/interview", json=meta_payload)
        assert resp.status_code == 503
        body = resp.get_json()
        assert body["error"] == "store_unavailable"
        assert body["message"] == "Failed to save data"
        assert body["details"]


class TestSearchRoute:

    @pytest.fixture(autouse=True)
    def seeded(self, client, meta_payload):
        assert client.post("/api/interview", json=meta_payload).status_code == 201

    def test_difficulty_filter(self, client):
        resp = _search(client, difficulty="Easy")
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["totalResults"] == 1
        assert body["totalQuestions"] == 1
        assert body["questions"][0]["text"] == "Reverse a list"
        assert body["questions"][0]["topic"] == "Arrays"
        assert body["questions"][0]["roundType"] == "Technical"

    def test_all_questions_without_filters(self, client):
        body = _search(client, company=" META ").get_json()
        assert body["totalQuestions"] == 2
        assert [q["text"] for q in body["questions"]] == ["Reverse a list", "Design a cache"]

    def test_topic_with_space(self, client):
        body = _search(client, topic="System Design").get_json()
        assert [q["text"] for q in body["questions"]] == ["Design a cache"]

    @pytest.mark.parametrize("field", ["company", "role", "position", "year"])
    def test_missing_parameter(self, client, field):
        resp = _search(client, **{field: None})
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["error"] == "missing_parameter"
        assert body["message"] == "All parameters (company, role, position, year) are required."

    def test_no_matching_interviews(self, client):
        resp = _search(client, company="Meta2")
        assert resp.status_code == 404
        assert resp.get_json() == {"error": "not_found", "message": "No matching data found."}

    def test_no_questions_for_filters(self, client):
        resp = _search(client, topic="Graphs")
        assert resp.status_code == 404
        assert resp.get_json()["message"] == "No questions found for the given filters."

    def test_store_failure(self, client, store):
        Base.metadata.drop_all(store.engine)
        resp = _search(client)
        assert resp.status_code == 503
        assert resp.get_json()["error"] == "store_unavailable"

    def test_unexpected_failure(self, client, app, monkeypatch):
        def boom(criteria):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(app.extensions["query_aggregator"], "search", boom)
        resp = _search(client)
        assert resp.status_code == 500
        assert resp.get_json() == {"error": "internal_error", "message": "Internal Server Error"}


def test_cors_allows_configured_origin(client):
    resp = client.get(SEARCH, headers={"Origin": "http://localhost:3000"})
    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:3000"


def test_cors_ignores_unknown_origin(client):
    resp = client.get(SEARCH, headers={"Origin": "http://evil.example"})
    assert "Access-Control-Allow-Origin" not in resp.headers


def test_app_fails_fast_when_store_unreachable(tmp_path):
    from app import create_app
    from config import Config

    config = Config(database_url=f"sqlite:///{tmp_path / 'nope' / 'interviews.db'}")
    with pytest.raises(StoreUnavailableError):
        create_app(config)


def test_app_reads_dotenv_when_config_is_not_given(tmp_path, monkeypatch):
    import app as app_module

    database_url = f"sqlite:///{tmp_path / 'from_dotenv.db'}"
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("URL_API", raising=False)

    def fake_load_dotenv():
        monkeypatch.setenv("DATABASE_URL", database_url)
        return True

    monkeypatch.setattr(app_module, "load_dotenv", fake_load_dotenv)
    app = app_module.create_app()
    store = app.extensions["record_store"]
    try:
        assert store.database_url == database_url
    finally:
        store.dispose()
