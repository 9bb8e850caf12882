from octane_nexus.config import settings


def test_health_and_ready(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/ready").json() == {"status": "ready"}


def test_security_headers(client):
    response = client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_debug_env_never_leaks_keys(client, monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", "sk-secret-value")
    response = client.get("/api/debug-env")
    assert response.json() == {
        "status": "Check",
        "keyLoaded": True,
        "keyLength": 15,
        "geminiKeyLoaded": False,
    }
    assert "sk-secret-value" not in response.text


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_validation_errors_are_400(client, auth_headers):
    response = client.post("/api/generate/calibration", json={"outcome": "viral"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error": "predicted_score: Field required"}
