"""Tests for the per-vendor outreach workflow (delivery not configured)."""

from datetime import date


def _history(client, vendor_id):
    return client.get(f"/api/v1/vendors/{vendor_id}/conversations").json()["data"]


def _pending(client):
    return client.get("/api/v1/actions/pending").json()["data"]


class TestInitialOutreach:
    def test_template_outreach(self, client, vendor):
        response = client.post(f"/api/v1/vendors/{vendor['id']}/outreach", json={})
        assert response.status_code == 201

        body = response.json()
        assert body["message"] == "Initial outreach email sent!"
        assert body["data"]["messageType"] == "outbound"
        assert body["data"]["subject"] == "Initial Inquiry"
        assert "Budget Range: $3,200 - $4,000" in body["data"]["body"]

        actions = _pending(client)
        assert len(actions) == 1
        assert actions[0]["actionType"] == "initial_outreach_sent"
        assert actions[0]["requiresHumanInput"] is False
        assert actions[0]["vendor"] == {
            "name": "Bloom & Petal",
            "contactEmail": "hello@bloomandpetal.com",
            "categoryName": "Florist",
        }

    def test_custom_message(self, client, vendor):
        client.post(
            f"/api/v1/vendors/{vendor['id']}/outreach",
            json={"customMessage": "Hi! Are you free on Sept 15?"},
        )

        history = _history(client, vendor["id"])
        assert [c["body"] for c in history] == ["Hi! Are you free on Sept 15?"]

    def test_unknown_vendor(self, client):
        response = client.post("/api/v1/vendors/missing/outreach", json={})
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestVendorResponse:
    def test_price_quote(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/responses",
            json={"responseContent": "We'd love to! Package is $2,800.", "priceQuoted": 2800},
        )
        assert response.status_code == 201

        action = response.json()["data"]
        assert action["actionType"] == "price_received"
        assert action["description"] == "Price quote received: $2,800"
        assert action["requiresHumanInput"] is True

        updated = client.get(f"/api/v1/vendors/{vendor['id']}").json()["data"]
        assert updated["status"] == "negotiating"
        assert updated["price"] == 2800
        assert updated["lastContact"] == date.today().isoformat()

        history = _history(client, vendor["id"])
        assert history[-1]["messageType"] == "inbound"
        assert history[-1]["subject"] == "Response to Inquiry"

    def test_without_price_keeps_existing_price(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/responses",
            json={"responseContent": "Sorry, we're booked that weekend."},
        )
        assert response.json()["data"]["actionType"] == "vendor_unavailable"

        updated = client.get(f"/api/v1/vendors/{vendor['id']}").json()["data"]
        assert updated["price"] == 3500

    def test_empty_response_rejected(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/responses", json={"responseContent": ""}
        )
        assert response.status_code == 422


class TestNegotiation:
    def test_follow_up(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/follow-up", json={"message": "Just checking in!"}
        )
        assert response.status_code == 201
        assert response.json()["data"]["subject"] == "Follow-up"

        updated = client.get(f"/api/v1/vendors/{vendor['id']}").json()["data"]
        assert updated["lastContact"] == date.today().isoformat()

    def test_negotiate(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/negotiate",
            json={"targetPrice": 3000, "justification": "Our guest count dropped."},
        )
        assert response.status_code == 201

        action = response.json()["data"]
        assert action["actionType"] == "price_negotiation_sent"
        assert action["description"] == "Negotiation email sent for target price: $3,000"

        history = _history(client, vendor["id"])
        assert history[-1]["subject"] == "Follow-up"
        assert "within a range of $3,000." in history[-1]["body"]

    def test_target_price_must_be_positive(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/negotiate",
            json={"targetPrice": 0, "justification": "x"},
        )
        assert response.status_code == 422


class TestDecision:
    def test_accept(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/accept", json={"finalPrice": 3100}
        )
        assert response.status_code == 200

        body = response.json()
        assert body["message"] == "Vendor accepted! Contract process initiated."
        assert body["data"]["status"] == "confirmed"
        assert body["data"]["price"] == 3100

        category = client.get(f"/api/v1/categories/{vendor['categoryId']}").json()["data"]
        assert category["selectedVendorId"] == vendor["id"]

        history = _history(client, vendor["id"])
        assert history[-1]["subject"] == "Acceptance & Next Steps"
        assert "Final agreed price: $3,100" in history[-1]["body"]

    def test_decline(self, client, vendor):
        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/decline", json={"reason": "Over budget"}
        )
        assert response.status_code == 200

        data = response.json()["data"]
        assert data["status"] == "declined"
        assert data["notes"] == "Over budget"
        assert _history(client, vendor["id"])[-1]["subject"] == "Thank You"


class TestActions:
    def test_complete_action(self, client, vendor):
        action = client.post(
            f"/api/v1/vendors/{vendor['id']}/responses",
            json={"responseContent": "Can we see examples?"},
        ).json()["data"]
        assert action["actionType"] == "portfolio_requested"

        response = client.post(f"/api/v1/actions/{action['id']}/complete")
        assert response.status_code == 200
        assert response.json()["data"]["completed"] is True
        assert response.json()["data"]["completedAt"] is not None

        assert _pending(client) == []

    def test_complete_missing_action(self, client):
        assert client.post("/api/v1/actions/missing/complete").status_code == 404

    def test_history_is_oldest_first(self, client, vendor):
        client.post(f"/api/v1/vendors/{vendor['id']}/outreach", json={})
        client.post(
            f"/api/v1/vendors/{vendor['id']}/responses",
            json={"responseContent": "Thanks for reaching out!"},
        )

        subjects = [c["subject"] for c in _history(client, vendor["id"])]
        assert subjects == ["Initial Inquiry", "Response to Inquiry"]
