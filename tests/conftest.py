import pytest
from fastapi.testclient import TestClient

from student_api.core.config import Settings
from student_api.core.database import Database
from student_api.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(STORAGE_PATH=str(tmp_path / "storage" / "students.db"), LOG_LEVEL="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database(settings):
    database = Database(settings.DATABASE_URL)
    database.init()
    yield database
    database.dispose()


@pytest.fixture
def db(database):
    yield from database.session()


@pytest.fixture
def john(client):
    """Create John Doe and return the new id."""
    response = client.post(
        "/students", json={"name": "John Doe", "email": "john@example.com", "age": 20}
    )
    assert response.status_code == 201
    return response.json()["data"]
