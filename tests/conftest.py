import os
import sys

import pytest

CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.dirname(CURRENT_DIR)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from adaptacao.infrastructure import kv_store as kv_module
from adaptacao.infrastructure.kv_store import SqlKeyValueStore
from adaptacao.interfaces.http.rate_limit import limiter
from adaptacao.main import app

# no rate limiting in tests
limiter.enabled = False

COORDINATOR = ("coordenador@escola.com", "coord123")
TEACHER = ("professor@escola.com", "prof123")

STUDENT_ANA = {
    "name": "Ana",
    "course": "Eng",
    "class": "A1",
    "birthDate": "2010-01-01",
    "registrationNumber": "123",
}


@pytest.fixture
def kv():
    """Fresh in-memory SQL key-value store for each test"""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    store = SqlKeyValueStore(engine)
    store.create_schema()
    yield store
    engine.dispose()


@pytest.fixture
def client(kv, monkeypatch):
    """Test client over the test store; startup seeds the default accounts"""
    monkeypatch.setattr(kv_module, "_store", kv)
    with TestClient(app) as c:
        yield c


def login(client, email: str, password: str) -> str:
    r = client.post("/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["access_token"]


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def coordinator(client) -> dict:
    return auth_header(login(client, *COORDINATOR))


@pytest.fixture
def teacher(client) -> dict:
    return auth_header(login(client, *TEACHER))


@pytest.fixture
def other_teacher(client) -> dict:
    r = client.post("/signup", json={
        "email": "outra@escola.com", "password": "outra123", "name": "Carla Lima", "role": "professor",
    })
    assert r.status_code == 200, r.text
    return auth_header(login(client, "outra@escola.com", "outra123"))


@pytest.fixture
def student(client, coordinator) -> dict:
    r = client.post("/students", json=STUDENT_ANA, headers=coordinator)
    assert r.status_code == 200, r.text
    return r.json()["student"]


def me(client, headers: dict) -> dict:
    r = client.get("/me", headers=headers)
    assert r.status_code == 200, r.text
    return r.json()["user"]
