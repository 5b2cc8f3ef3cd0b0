"""Tests for /api/v1/dashboard."""


class TestDashboard:
    def test_empty_dashboard(self, client):
        response = client.get("/api/v1/dashboard")
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["wedding"] == {"name": "Sarah's Wedding", "date": "September 15, 2024"}
        assert data["stats"]["totalBudget"] == 0
        assert data["categories"] == []
        assert data["recentActivity"] == []
        assert data["pendingActions"] == []

    def test_dashboard_after_acceptance(self, client, category, vendor):
        client.post(f"/api/v1/vendors/{vendor['id']}/accept", json={"finalPrice": 3100})

        data = client.get("/api/v1/dashboard").json()["data"]

        stats = data["stats"]
        assert stats["totalBudget"] == 4000
        assert stats["totalSpent"] == 3100
        assert stats["remaining"] == 900
        assert stats["categoriesComplete"] == 1
        assert stats["totalVendors"] == 1

        overview = data["categories"][0]
        assert overview["confirmed"] is True
        assert overview["statusText"] == "Confirmed: Bloom & Petal"
        assert overview["progressPercentage"] == 100

        activity = data["recentActivity"][0]
        assert activity["vendor"] == "Bloom & Petal"
        assert activity["action"] == "Contract confirmed"
        assert activity["badge"]["color"] == "green"

    def test_pending_actions_and_needing_input(self, client, vendor):
        client.post(
            f"/api/v1/vendors/{vendor['id']}/responses",
            json={"responseContent": "Quote attached", "priceQuoted": 3300},
        )

        data = client.get("/api/v1/dashboard").json()["data"]
        assert data["stats"]["vendorsNeedingInput"] == 1
        assert data["pendingActions"][0]["actionType"] == "price_received"
        assert data["pendingActions"][0]["vendor"]["categoryName"] == "Florist"
        assert data["categories"][0]["statusText"] == "1 negotiating"
