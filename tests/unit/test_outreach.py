"""Tests for outreach message templates and reply classification."""

from app.services.outreach import (
    DECLINE_MESSAGE,
    acceptance_message,
    analyze_response,
    initial_outreach_template,
    negotiation_message,
)


class TestAnalyzeResponse:
    def test_quoted_price_needs_review(self):
        action = analyze_response("Our package is perfect for you", 2800)

        assert action.type == "price_received"
        assert action.description == "Price quote received: $2,800"
        assert action.requires_human_input is True
        assert action.input_needed == "Review price quote and approve/negotiate"

    def test_booked_vendor(self):
        action = analyze_response("Sorry, we are booked that day")

        assert action.type == "vendor_unavailable"
        assert action.requires_human_input is False

    def test_portfolio_request(self):
        action = analyze_response("Happy to share examples of our work")

        assert action.type == "portfolio_requested"
        assert action.input_needed == "Review vendor portfolio and provide feedback"

    def test_anything_else_needs_follow_up(self):
        action = analyze_response("Thanks for reaching out!")

        assert action.type == "follow_up_needed"
        assert action.input_needed == "Review response and determine next steps"

    def test_zero_price_is_ignored(self):
        assert analyze_response("Thanks!", 0).type == "follow_up_needed"


class TestTemplates:
    def test_initial_outreach(self, sample_vendor):
        class _Category:
            name = "Florist"
            budget = 4000

        vendor = type("VendorStub", (), {"name": sample_vendor.name, "category": _Category})()
        body = initial_outreach_template(vendor)

        assert body.startswith("Dear Bloom & Petal Team,")
        assert "your florist services" in body
        assert "- Budget Range: $3,200 - $4,000" in body
        assert body.endswith("Wedding Planning Team")

    def test_negotiation(self):
        message = negotiation_message(2500, "Our guest count dropped.")

        assert "within a range of $2,500." in message
        assert "Our guest count dropped." in message

    def test_acceptance(self):
        assert "Final agreed price: $3,100" in acceptance_message(3100)

    def test_decline(self):
        assert DECLINE_MESSAGE.startswith("Thank you for taking the time")
