"""Tests for workflow steps when Resend delivery is configured."""

import pytest
from resend.exceptions import ResendError

from app.services.email_delivery import EmailDeliveryService


@pytest.fixture
def delivery(transport):
    """Configured delivery that records sends on the mocked transport."""
    return EmailDeliveryService(
        api_key="re_test",
        sender="Sarah's Wedding <planner@example.com>",
        send_delay_ms=0,
        transport=transport,
    )


def _sent(transport):
    return transport.call_args.args[0]


class TestDeliveredWorkflow:
    def test_outreach_is_emailed(self, client, vendor, transport):
        response = client.post(f"/api/v1/vendors/{vendor['id']}/outreach", json={})
        assert response.status_code == 201

        params = _sent(transport)
        assert params["to"] == ["hello@bloomandpetal.com"]
        assert params["subject"] == "Wedding Vendor Inquiry - Florist"
        assert params["text"].startswith("Dear Bloom & Petal Team,")

    def test_follow_up_replies_to_last_subject(self, client, vendor, transport):
        client.post(f"/api/v1/vendors/{vendor['id']}/outreach", json={})
        client.post(f"/api/v1/vendors/{vendor['id']}/follow-up", json={"message": "Any news?"})

        assert _sent(transport)["subject"] == "Re: Initial Inquiry"

    def test_accept_sends_acceptance(self, client, vendor, transport):
        client.post(f"/api/v1/vendors/{vendor['id']}/accept", json={"finalPrice": 3000})

        params = _sent(transport)
        assert params["subject"] == "Acceptance & Next Steps"
        assert {"name": "final_price", "value": "3000"} in params["tags"]

    def test_failed_delivery_records_nothing(self, client, vendor, transport):
        transport.side_effect = ResendError(
            code=403,
            error_type="invalid_api_key",
            message="API key is invalid",
            suggested_action="",
        )

        response = client.post(
            f"/api/v1/vendors/{vendor['id']}/decline", json={"reason": "Over budget"}
        )
        assert response.status_code == 502
        assert response.json()["error"]["code"] == "EMAIL_DELIVERY_ERROR"

        unchanged = client.get(f"/api/v1/vendors/{vendor['id']}").json()["data"]
        assert unchanged["status"] == "uncontacted"
        history = client.get(f"/api/v1/vendors/{vendor['id']}/conversations").json()["data"]
        assert history == []

    def test_failed_delivery_publishes_no_changes(self, client, vendor, transport):
        transport.side_effect = ResendError(
            code=500,
            error_type="application_error",
            message="Something went wrong",
            suggested_action="",
        )

        with client.websocket_connect("/api/v1/changes/ws") as websocket:
            assert websocket.receive_json() == {"type": "connected"}

            response = client.post(
                f"/api/v1/vendors/{vendor['id']}/decline", json={"reason": "Over budget"}
            )
            assert response.status_code == 502

            client.post("/api/v1/categories", json={"name": "Caterer", "budget": 8000})

            # the next frame is the committed category, not the rolled-back decline
            frame = websocket.receive_json()
            assert frame["table"] == "vendor_categories"
            assert frame["eventType"] == "INSERT"
            assert frame["record"]["name"] == "Caterer"
