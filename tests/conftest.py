import pytest
from fastapi.testclient import TestClient

from todo_api.main import create_app
from todo_api.settings import Settings


@pytest.fixture()
def client():
    """TestClient for a fresh app with an empty in-memory store."""
    app = create_app(Settings(persistence_backend="memory"))
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def sqlite_client(tmp_path):
    """TestClient for a fresh app backed by a temporary SQLite file."""
    settings = Settings(persistence_backend="sqlite", sqlite_db_path=str(tmp_path / "todos.db"))
    app = create_app(settings)
    with TestClient(app) as c:
        yield c
