from fastapi.testclient import TestClient

from schedule_api.db.repositories import LessonTypeRepository
from schedule_api.main import app


def test_health_endpoints(client):
    assert client.get("/health").json() == {"status": "ok"}

    live = client.get("/health/live")
    assert live.status_code == 200
    assert live.json()["status"] == "ok"

    ready = client.get("/health/ready")
    assert ready.status_code == 200
    payload = ready.json()
    assert payload["database"]["ok"] is True
    assert payload["database"]["missing_tables"] == []


def test_unknown_route_uses_message_body(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert "message" in response.json()


def test_activity_log_records_admin_actions(client, admin_headers, user_headers):
    client.post("/types/add", json={"name": "Лекция"}, headers=admin_headers)

    response = client.get("/activity/logs", headers=admin_headers)
    assert response.status_code == 200
    entries = {(entry["entity"], entry["action"]) for entry in response.json()["logs"]}
    assert ("type", "created") in entries
    assert ("user", "registered") in entries

    types_only = client.get("/activity/logs", params={"entity": "type"}, headers=admin_headers).json()["logs"]
    assert [entry["action"] for entry in types_only] == ["created"]
    assert types_only[0]["actor_id"] is not None

    assert client.get("/activity/logs", params={"entity": "lesson"}, headers=admin_headers).status_code == 400
    assert client.get("/activity/logs", headers=user_headers).status_code == 403


def test_unexpected_error_hides_details(client, user_headers, monkeypatch):
    def explode(self):
        raise RuntimeError("boom")

    monkeypatch.setattr(LessonTypeRepository, "list_all", explode)
    quiet_client = TestClient(app, raise_server_exceptions=False)

    response = quiet_client.get("/types/get", headers=user_headers)
    assert response.status_code == 500
    assert response.json() == {"message": "Ошибка сервера"}
    assert "boom" not in response.text
