"""Tests for the health endpoint."""


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "ok"
        assert data["app"] == "Wedding Planner API"
        assert data["aiEnabled"] is False
        assert data["emailEnabled"] is False

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/api/v1/nope")
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"
