"""
- Force local secret generation so no test ever touches random.org
- Give every test its own empty GameStore (games + scoreboard)
- Provide a client fixture (TestClient(app)) that already uses that store
"""
import os
import pytest

from fastapi.testclient import TestClient

# Must be set before codeduel.config is imported
os.environ["APP_ENV"] = "test"
os.environ["RANDOM_SOURCE"] = "local"

from codeduel.main import app, get_store
from codeduel.store import GameStore

@pytest.fixture
def store() -> GameStore:
    return GameStore()

@pytest.fixture(autouse=True)
def override_store(store):
    """Force the app to use this test's store for every request."""
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    # Talks to the FastAPI app in-process; state lives in the overridden store.
    return TestClient(app)
