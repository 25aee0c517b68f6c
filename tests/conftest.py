import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# Настройки читаются при импорте, поэтому окружение задаём до импорта приложения
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import lms_service.infrastructure.db
import lms_service.main
from lms_service.infrastructure.db import Base, get_db
from lms_service.infrastructure.ratelimit import limiter

# Тестовая БД в памяти: одно соединение на все потоки TestClient
test_engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# Переопределяем engine в infrastructure.db и main.py для тестов
lms_service.infrastructure.db.engine = test_engine
lms_service.main.engine = test_engine
lms_service.infrastructure.db.SessionLocal = TestingSessionLocal

from lms_service.main import app


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture
def db_session():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def client():
    # Чистые таблицы перед каждым тестом
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    limiter.enabled = False
    yield TestClient(app)
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def student(client):
    """Зарегистрированный студент: (id, username, password)"""
    username, password = "alice", "s3cret-pass"
    assert client.post("/api/students/register",
                       json={"username": username, "password": password}).status_code == 201
    resp = client.post("/api/students/login", json={"username": username, "password": password})
    return resp.json()["studentId"], username, password


@pytest.fixture
def course_id(client):
    resp = client.post("/api/courses", json={
        "title": "Python Basics",
        "description": "Learn Python",
        "lessons": [{"title": "Intro", "type": "video", "contentUrl": "https://cdn.example.com/intro.mp4"}],
    })
    assert resp.status_code == 201
    return resp.json()["id"]
