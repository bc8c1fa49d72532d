"""Shared test fixtures for the Planner API tests."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Ensure the repo root is on the path and point the app at a throwaway database
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
_db_dir = tempfile.mkdtemp(prefix="planner-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{Path(_db_dir) / 'planner.db'}"
os.environ["OPENAI_API_KEY"] = ""

from fastapi.testclient import TestClient

from planner.database import create_tables, drop_tables
from planner.main import app


@pytest.fixture(autouse=True)
def fresh_db():
    """Every test starts from empty tables."""
    drop_tables()
    create_tables()
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_todo(client):
    """Create a todo through the API and return the response body."""
    def _make(**fields):
        response = client.post("/api/todos", json=fields)
        assert response.status_code == 201, response.text
        return response.json()
    return _make
