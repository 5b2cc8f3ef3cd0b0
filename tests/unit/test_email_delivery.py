"""Tests for Resend email delivery."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import requests
from resend.exceptions import ResendError

from app.schemas.email import EmailRecipient, GeneratedEmail, SendEmailOptions
from app.services.email_delivery import EmailDeliveryService, build_tags, text_to_html


@pytest.fixture
def transport():
    return MagicMock(return_value={"id": "msg_123"})


@pytest.fixture
def service(transport):
    return EmailDeliveryService(
        api_key="re_test",
        sender="Sarah's Wedding <planner@example.com>",
        send_delay_ms=0,
        transport=transport,
    )


@pytest.fixture
def recipient():
    return EmailRecipient(email="hello@bloomandpetal.com", name="Bloom & Petal")


def _sent_params(transport):
    return transport.call_args.args[0]


class TestHelpers:
    def test_text_to_html_splits_paragraphs(self):
        html = text_to_html("Dear team,\n\nLine one\nLine two")
        assert html == "<p>Dear team,</p><p>Line one<br>Line two</p>"

    def test_text_to_html_escapes_markup(self):
        assert text_to_html("Fish & <chips>") == "<p>Fish &amp; &lt;chips&gt;</p>"

    def test_build_tags(self):
        tags = build_tags(["wedding-planner", "vendor outreach"], {"vendor_id": "abc-123"})
        assert tags == [
            {"name": "wedding-planner", "value": "true"},
            {"name": "vendor_outreach", "value": "true"},
            {"name": "vendor_id", "value": "abc-123"},
        ]


class TestSendEmail:
    @pytest.mark.asyncio
    async def test_not_configured(self, transport, recipient):
        service = EmailDeliveryService(api_key="", transport=transport)

        result = await service.send_email(SendEmailOptions(to=recipient, subject="Hi", text="x"))

        assert result.success is False
        assert result.error == "Email delivery not configured"
        transport.assert_not_called()

    @pytest.mark.asyncio
    async def test_success(self, service, transport, recipient):
        result = await service.send_email(
            SendEmailOptions(to=recipient, subject="Hi", text="Hello", html="<p>Hello</p>")
        )

        assert result.success is True
        assert result.message_id == "msg_123"
        assert result.status_code == 200

        params = _sent_params(transport)
        assert params["from"] == "Sarah's Wedding <planner@example.com>"
        assert params["to"] == ["hello@bloomandpetal.com"]
        assert params["text"] == "Hello"
        assert {"name": "source", "value": "wedding-planner-ai"} in params["tags"]
        assert {"name": "wedding-planner", "value": "true"} in params["tags"]

    @pytest.mark.asyncio
    async def test_provider_error_becomes_failed_result(self, service, transport, recipient):
        transport.side_effect = ResendError(
            code=422,
            error_type="validation_error",
            message="Invalid `to` field",
            suggested_action="",
        )

        result = await service.send_email(SendEmailOptions(to=recipient, subject="Hi", text="x"))

        assert result.success is False
        assert result.error == "Invalid `to` field"
        assert result.status_code == 422

    @pytest.mark.asyncio
    async def test_connection_error_becomes_failed_result(self, service, transport, recipient):
        transport.side_effect = requests.exceptions.ConnectionError("connection reset")

        result = await service.send_email(SendEmailOptions(to=recipient, subject="Hi", text="x"))

        assert result.success is False
        assert result.error == "connection reset"
        assert result.message_id is None


class TestTypedHelpers:
    @pytest.mark.asyncio
    async def test_ai_generated_email_tags(self, service, transport, recipient):
        email = GeneratedEmail(subject="Florals", body="Hello\n\nThanks", tone="friendly")

        result = await service.send_ai_generated_email(email, recipient, "vendor-1", "Florist")

        assert result.success is True
        params = _sent_params(transport)
        assert params["subject"] == "Florals"
        assert params["html"] == "<p>Hello</p><p>Thanks</p>"
        assert {"name": "florist", "value": "true"} in params["tags"]
        assert {"name": "tone", "value": "friendly"} in params["tags"]

    @pytest.mark.asyncio
    async def test_follow_up_prefixes_subject_once(self, service, transport, recipient):
        await service.send_follow_up_email("Wedding Inquiry", "Checking in", recipient, "v1")
        assert _sent_params(transport)["subject"] == "Re: Wedding Inquiry"

        await service.send_follow_up_email("Re: Wedding Inquiry", "Again", recipient, "v1")
        assert _sent_params(transport)["subject"] == "Re: Wedding Inquiry"

    @pytest.mark.asyncio
    async def test_negotiation_records_prices(self, service, transport, recipient):
        await service.send_negotiation_email("Budget", "Body", recipient, "v1", 3000, 2500)

        tags = _sent_params(transport)["tags"]
        assert {"name": "original_price", "value": "3000"} in tags
        assert {"name": "target_price", "value": "2500"} in tags


class TestBulkSend:
    @pytest.mark.asyncio
    async def test_sends_in_order_with_delay(self, transport, recipient):
        service = EmailDeliveryService(api_key="re_test", send_delay_ms=250, transport=transport)
        email = GeneratedEmail(subject="Hi", body="Body")
        batch = [(email, recipient, f"v{i}", "Florist") for i in range(3)]

        with patch("app.services.email_delivery.asyncio.sleep", new=AsyncMock()) as sleep:
            results = await service.send_bulk_emails(batch)

        assert [r.success for r in results] == [True, True, True]
        assert transport.call_count == 3
        # pause between sends, not before the first
        assert sleep.await_count == 2
        sleep.assert_awaited_with(0.25)

    @pytest.mark.asyncio
    async def test_network_error_does_not_stop_the_batch(self, transport, recipient):
        transport.side_effect = [
            {"id": "msg_1"},
            requests.exceptions.Timeout("read timed out"),
            {"id": "msg_3"},
        ]
        service = EmailDeliveryService(api_key="re_test", send_delay_ms=0, transport=transport)
        email = GeneratedEmail(subject="Hi", body="Body")
        batch = [(email, recipient, f"v{i}", "Florist") for i in range(3)]

        results = await service.send_bulk_emails(batch)

        assert [r.success for r in results] == [True, False, True]
        assert results[1].error == "read timed out"
        assert results[2].message_id == "msg_3"


class TestConfiguration:
    def test_validate_reports_missing_key(self):
        is_valid, errors = EmailDeliveryService(api_key="").validate_configuration()

        assert is_valid is False
        assert "RESEND_API_KEY environment variable is required" in errors

    @pytest.mark.asyncio
    async def test_test_configuration_stops_on_invalid_config(self, transport):
        service = EmailDeliveryService(api_key="", transport=transport)

        result = await service.test_configuration("me@example.com")

        assert result.success is False
        assert result.error.startswith("Configuration errors:")
        transport.assert_not_called()
