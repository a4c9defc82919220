import pytest

from config import TestConfig
from taskflow import create_app, db
from taskflow.services import stats_service


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def set_today(monkeypatch):
    """Pin the stats service's notion of "today"."""

    def _set(day):
        monkeypatch.setattr(stats_service, "today_in", lambda timezone: day)

    return _set


@pytest.fixture
def habit(client):
    resp = client.post("/api/habits", json={"title": "Drink water", "habitType": "water", "targetValue": 8, "unit": "glasses"})
    assert resp.status_code == 201
    return resp.get_json()


@pytest.fixture
def task(client):
    resp = client.post("/api/tasks", json={"title": "Write report", "category": "Work", "priority": "High"})
    assert resp.status_code == 201
    return resp.get_json()
