from fastapi.testclient import TestClient

from chatrelay.core.settings import Settings
from chatrelay.main import create_app


def _client(tmp_path) -> TestClient:
    return TestClient(create_app(Settings(_env_file=None, static_dir=tmp_path / "missing")))


def test_health_reports_connection_count(tmp_path):
    client = _client(tmp_path)
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True, "connections": 0}


def test_rooms_empty_when_nobody_joined(tmp_path):
    client = _client(tmp_path)
    assert client.get("/api/rooms").json() == {"rooms": []}


def test_unknown_room_is_404(tmp_path):
    client = _client(tmp_path)
    resp = client.get("/api/rooms/attic/users")
    assert resp.status_code == 404
    data = resp.json()
    assert data["code"] == "room_not_found"
    assert data["details"] == {"room": "attic"}
