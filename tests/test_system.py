from fastapi.testclient import TestClient
from fitchallenge.main import app

client = TestClient(app)

def test_health_ok():
    r = client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "request_id" in data
    assert "today" in data

def test_version_ok():
    r = client.get("/version")
    assert r.status_code == 200
    data = r.json()
    assert "version" in data and "git_sha" in data

def test_request_id_is_echoed():
    r = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert r.headers["X-Request-ID"] == "abc-123"
    assert r.json()["request_id"] == "abc-123"
