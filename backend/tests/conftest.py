import os

# The application engine is built at import time; keep it off PostgreSQL.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from schedule_api.api.deps import get_db  # noqa: E402
from schedule_api.core.security import create_access_token  # noqa: E402
from schedule_api.db.base import Base  # noqa: E402
from schedule_api.main import app  # noqa: E402


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers(client):
    payload = {"username": "admin", "password": "password123"}
    assert client.post("/auth/registration", json=payload).status_code == 200
    token = client.post("/auth/login", json=payload).json()["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def user_headers():
    token = create_access_token("reader-id", ["USER"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def catalog(client, admin_headers):
    """One group, one discipline taught by two teachers, a lesson type and two rooms."""
    client.post(
        "/discipline/add",
        json={"name": "Algorithms", "groups": ["CS-К1"], "teachers": ["Smith", "Jones"], "aH": 30},
        headers=admin_headers,
    )
    client.post("/types/add", json={"name": "Лекция"}, headers=admin_headers)
    client.post("/audithories/add", json={"name": "101", "pc": True}, headers=admin_headers)
    client.post("/audithories/add", json={"name": "102"}, headers=admin_headers)

    discipline = client.get(
        "/discipline/getByName", params={"name": "Algorithms"}, headers=admin_headers
    ).json()["discipline"]
    teachers = {teacher["surname"]: teacher["id"] for teacher in discipline["teachers"]}
    rooms = {
        room["name"]: room["id"]
        for room in client.get("/audithories/get", headers=admin_headers).json()["audithories"]
    }
    lesson_type = client.get("/types/get", headers=admin_headers).json()["types"][0]
    return {
        "group": discipline["groups"][0]["id"],
        "discipline": discipline["id"],
        "smith": teachers["Smith"],
        "jones": teachers["Jones"],
        "type": lesson_type["id"],
        "room_101": rooms["101"],
        "room_102": rooms["102"],
    }
