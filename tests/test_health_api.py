from unittest.mock import AsyncMock


def test_ready_when_redis_answers(client, monkeypatch):
    monkeypatch.setattr(
        "app.api.routes.health.check_redis_health", AsyncMock(return_value=True)
    )

    response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "ready", "checks": {"redis": True}}


def test_not_ready_when_redis_is_down(client, monkeypatch):
    monkeypatch.setattr(
        "app.api.routes.health.check_redis_health", AsyncMock(return_value=False)
    )

    response = client.get("/health/ready")

    assert response.status_code == 503
    assert response.json() == {"status": "not_ready", "checks": {"redis": False}}


def test_health_reports_service_name(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "session-guard"}
