"""Shared fixtures: a throwaway SQLite database and an API client."""

import os
import tempfile

# Setup environment for testing, before the app reads its settings
os.environ["GIFTHUB_DATA_DIR"] = tempfile.mkdtemp()
os.environ["GIFTHUB_DB_PATH"] = os.path.join(os.environ["GIFTHUB_DATA_DIR"], "test.db")
os.environ["GIFTHUB_JWT_SECRET"] = "test-secret-with-enough-bytes-for-hs256"

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from gifthub.database import engine
from gifthub.main import app


@pytest.fixture(autouse=True)
def fresh_db():
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session():
    with Session(engine) as s:
        yield s


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_family(client: TestClient, name: str = "Smiths", display_name: str = "Alice") -> dict:
    r = client.post("/api/families", json={"name": name, "display_name": display_name})
    assert r.status_code == 201, r.text
    return r.json()


def join_family(client: TestClient, code: str, display_name: str) -> dict:
    r = client.post("/api/auth/join", json={"family_code": code, "display_name": display_name})
    assert r.status_code == 201, r.text
    return r.json()


def add_gift(client: TestClient, token: str, **fields) -> dict:
    r = client.post("/api/lists/me/items", json=fields, headers=auth(token))
    assert r.status_code == 201, r.text
    return r.json()
