import pytest

from app import create_app
from config import Config
from services.record_store import RecordStore


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'interviews.db'}"


@pytest.fixture
def store(database_url):
    store = RecordStore(database_url)
    store.connect()
    yield store
    store.dispose()


@pytest.fixture
def app(store):
    app = create_app(Config(database_url=store.database_url), store=store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def meta_payload():
    return {
        "company": "Meta",
        "role": "SWE",
        "position": "SDE1",
        "experience": "2y",
        "year": "2024",
        "questions": [
            {"text": "Reverse a list", "topic": "Arrays", "roundType": "Technical", "difficulty": "Easy"},
            {"text": "Design a cache", "topic": "System Design", "roundType": "Design", "difficulty": "Hard"},
        ],
    }
