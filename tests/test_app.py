from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from lms_service.infrastructure.db import get_db
from lms_service.infrastructure.ratelimit import limiter
from lms_service.main import app


def test_api_root(client):
    """Тестовый маршрут отвечает простым текстом"""
    response = client.get("/api")
    assert response.status_code == 200
    assert response.text == "API is working!"
    assert response.headers["content-type"].startswith("text/plain")


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_landing_page(client):
    """На корне отдаётся страница входа"""
    response = client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers["content-type"]
    assert "Student login" in response.text


def test_static_asset(client):
    response = client.get("/login.html")
    assert response.status_code == 200


def test_metrics_endpoint(client):
    """Тест endpoint метрик"""
    client.get("/api")
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]
    assert "http_requests_total" in response.text


def test_json_charset(client):
    response = client.get("/api/courses")
    assert response.headers["content-type"] == "application/json; charset=utf-8"


def test_login_rate_limit(client):
    """После исчерпания лимита логин отвечает 429"""
    limiter.enabled = True
    limiter.reset()
    try:
        body = {"username": "ghost", "password": "password123"}
        statuses = [client.post("/api/students/login", json=body).status_code for _ in range(11)]
    finally:
        limiter.enabled = False
        limiter.reset()
    assert statuses[:10] == [401] * 10
    assert statuses[10] == 429


@pytest.fixture
def broken_db():
    """Сессия, у которой любая операция с БД падает"""
    error = OperationalError("SELECT 1", {}, Exception("db down"))
    db = MagicMock()
    db.query.side_effect = error
    db.get.side_effect = error
    db.execute.side_effect = error
    db.commit.side_effect = error

    def _get_db():
        yield db

    previous = app.dependency_overrides[get_db]
    app.dependency_overrides[get_db] = _get_db
    yield db
    app.dependency_overrides[get_db] = previous


def test_database_failure_returns_500(client, broken_db):
    """Ошибка БД превращается в 500 с полем error"""
    responses = [
        client.post("/api/courses", json={"title": "T"}),
        client.get("/api/courses"),
        client.get("/api/progress/s1"),
        client.get("/api/progress/s1/c1"),
        client.post("/api/students/register", json={"username": "u", "password": "p"}),
        client.post("/api/students/login", json={"username": "u", "password": "p"}),
        client.post("/api/enroll", json={"studentId": "s1", "courseId": "c1"}),
    ]
    for response in responses:
        assert response.status_code == 500
        assert "db down" in response.json()["error"]


def test_progress_upsert_unsupported_dialect(client, broken_db):
    """Диалект без ON CONFLICT даёт 500 с описанием"""
    broken_db.get_bind.return_value.dialect.name = "mysql"

    response = client.post("/api/progress", json={"studentId": "s1", "courseId": "c1"})
    assert response.status_code == 500
    assert response.json() == {"error": "progress upsert is not supported for mysql"}
