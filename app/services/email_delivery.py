"""Transactional email delivery via Resend.

Every send returns an :class:`EmailDeliveryResult` instead of raising, so a
failed send can be shown to the planner without losing the drafted text.
Callers that must stop on failure check ``result.success`` themselves.
"""

from __future__ import annotations

import asyncio
import html
import logging
import re
from typing import Any, Callable, Optional

import resend
from resend.exceptions import ResendError

from app.core.config import settings
from app.schemas.email import (
    EmailDeliveryResult,
    EmailRecipient,
    GeneratedEmail,
    SendEmailOptions,
)

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "wedding-planner"
SOURCE_TAG = "wedding-planner-ai"

# Resend tag names and values: ASCII letters, numbers, underscores or dashes
_TAG_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def _tag(value: str) -> str:
    return _TAG_UNSAFE.sub("_", value).strip("_")[:256] or "unknown"


def _address(recipient: EmailRecipient) -> str:
    return f"{recipient.name} <{recipient.email}>" if recipient.name else recipient.email


def text_to_html(text: str) -> str:
    """Plain text to minimal HTML: blank lines split paragraphs, newlines become <br>."""
    paragraphs = html.escape(text).split("\n\n")
    rendered = [p.replace("\n", "<br>") or "&nbsp;" for p in paragraphs]
    return "".join(f"<p>{p}</p>" for p in rendered)


def build_tags(categories: list[str], custom_args: dict[str, str]) -> list[dict[str, str]]:
    tags = [{"name": _tag(category), "value": "true"} for category in categories]
    tags.extend({"name": _tag(key), "value": _tag(value)} for key, value in custom_args.items())
    return tags


class EmailDeliveryService:
    """Async facade over the (synchronous) Resend SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        sender: Optional[str] = None,
        send_delay_ms: Optional[int] = None,
        transport: Optional[Callable[[dict[str, Any]], Any]] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.resend_api_key
        self.sender = sender or settings.default_sender
        self.send_delay_ms = (
            settings.bulk_send_delay_ms if send_delay_ms is None else send_delay_ms
        )
        self._transport = transport or resend.Emails.send

    def is_configured(self) -> bool:
        return bool(self.api_key)

    # ── Core send ─────────────────────────────────────────────────────────

    async def send_email(self, options: SendEmailOptions) -> EmailDeliveryResult:
        if not self.is_configured():
            logger.error("Resend API key not configured")
            return EmailDeliveryResult(success=False, error="Email delivery not configured")

        categories = options.categories or [DEFAULT_CATEGORY]
        custom_args = {"source": SOURCE_TAG, **(options.custom_args or {})}

        params: dict[str, Any] = {
            "from": _address(options.sender) if options.sender else self.sender,
            "to": [options.to.email],
            "subject": options.subject,
            "tags": build_tags(categories, custom_args),
        }
        if options.text:
            params["text"] = options.text
        if options.html:
            params["html"] = options.html
        if options.reply_to:
            params["reply_to"] = options.reply_to.email
        if options.attachments:
            params["attachments"] = [
                {"filename": a.filename, "content": a.content} for a in options.attachments
            ]

        resend.api_key = self.api_key
        try:
            logger.info("Sending email via Resend to: %s", options.to.email)
            response = await asyncio.to_thread(self._transport, params)
        except ResendError as exc:
            logger.error("Resend error sending to %s: %s", options.to.email, exc)
            return EmailDeliveryResult(
                success=False,
                error=getattr(exc, "message", None) or str(exc) or "Failed to send email",
                status_code=_status_code(exc),
            )
        except Exception as exc:
            # Transport failures (connection reset, timeout) surface from requests
            logger.error("Email delivery to %s failed: %s", options.to.email, exc)
            return EmailDeliveryResult(success=False, error=str(exc) or "Failed to send email")

        message_id = response.get("id") if isinstance(response, dict) else None
        logger.info("Email sent successfully via Resend: %s", message_id)
        return EmailDeliveryResult(success=True, message_id=message_id, status_code=200)

    # ── Typed helpers ─────────────────────────────────────────────────────

    async def send_ai_generated_email(
        self,
        generated_email: GeneratedEmail,
        recipient: EmailRecipient,
        vendor_id: str,
        category_name: str,
    ) -> EmailDeliveryResult:
        result = await self.send_email(
            SendEmailOptions(
                to=recipient,
                subject=generated_email.subject,
                text=generated_email.body,
                html=text_to_html(generated_email.body),
                categories=[DEFAULT_CATEGORY, "vendor-outreach", category_name.lower()],
                custom_args={
                    "vendor_id": vendor_id,
                    "email_type": "ai_generated",
                    "tone": generated_email.tone,
                },
            )
        )
        logger.info(
            "Email to %s: success=%s subject=%r message_id=%s",
            recipient.email, result.success, generated_email.subject, result.message_id,
        )
        return result

    async def send_bulk_emails(
        self, emails: list[tuple[GeneratedEmail, EmailRecipient, str, str]]
    ) -> list[EmailDeliveryResult]:
        """Send one after another with a fixed pause to stay under the provider rate limit.

        Each item is ``(generated_email, recipient, vendor_id, category_name)``.
        """
        results: list[EmailDeliveryResult] = []
        for index, (generated_email, recipient, vendor_id, category_name) in enumerate(emails):
            if index and self.send_delay_ms:
                await asyncio.sleep(self.send_delay_ms / 1000)
            results.append(
                await self.send_ai_generated_email(
                    generated_email, recipient, vendor_id, category_name
                )
            )
        return results

    async def send_outreach_email(
        self,
        subject: str,
        body: str,
        recipient: EmailRecipient,
        vendor_id: str,
        category_name: str,
    ) -> EmailDeliveryResult:
        return await self.send_email(
            SendEmailOptions(
                to=recipient,
                subject=subject,
                text=body,
                html=text_to_html(body),
                categories=[DEFAULT_CATEGORY, "vendor-outreach", category_name.lower()],
                custom_args={"vendor_id": vendor_id, "email_type": "initial_outreach"},
            )
        )

    async def send_follow_up_email(
        self,
        original_subject: str,
        follow_up_body: str,
        recipient: EmailRecipient,
        vendor_id: str,
    ) -> EmailDeliveryResult:
        subject = (
            original_subject if original_subject.startswith("Re:") else f"Re: {original_subject}"
        )
        return await self.send_email(
            SendEmailOptions(
                to=recipient,
                subject=subject,
                text=follow_up_body,
                html=text_to_html(follow_up_body),
                categories=[DEFAULT_CATEGORY, "follow-up"],
                custom_args={"vendor_id": vendor_id, "email_type": "follow_up"},
            )
        )

    async def send_negotiation_email(
        self,
        subject: str,
        body: str,
        recipient: EmailRecipient,
        vendor_id: str,
        original_price: float,
        target_price: float,
    ) -> EmailDeliveryResult:
        return await self.send_email(
            SendEmailOptions(
                to=recipient,
                subject=subject,
                text=body,
                html=text_to_html(body),
                categories=[DEFAULT_CATEGORY, "negotiation"],
                custom_args={
                    "vendor_id": vendor_id,
                    "email_type": "price_negotiation",
                    "original_price": f"{original_price:g}",
                    "target_price": f"{target_price:g}",
                },
            )
        )

    async def send_acceptance_email(
        self,
        subject: str,
        body: str,
        recipient: EmailRecipient,
        vendor_id: str,
        final_price: float,
    ) -> EmailDeliveryResult:
        return await self.send_email(
            SendEmailOptions(
                to=recipient,
                subject=subject,
                text=body,
                html=text_to_html(body),
                categories=[DEFAULT_CATEGORY, "acceptance"],
                custom_args={
                    "vendor_id": vendor_id,
                    "email_type": "vendor_acceptance",
                    "final_price": f"{final_price:g}",
                },
            )
        )

    async def send_decline_email(
        self,
        subject: str,
        body: str,
        recipient: EmailRecipient,
        vendor_id: str,
        reason: str,
    ) -> EmailDeliveryResult:
        return await self.send_email(
            SendEmailOptions(
                to=recipient,
                subject=subject,
                text=body,
                html=text_to_html(body),
                categories=[DEFAULT_CATEGORY, "decline"],
                custom_args={
                    "vendor_id": vendor_id,
                    "email_type": "vendor_decline",
                    "decline_reason": reason,
                },
            )
        )

    # ── Configuration checks ──────────────────────────────────────────────

    def validate_configuration(self) -> tuple[bool, list[str]]:
        errors: list[str] = []
        if not self.api_key:
            errors.append("RESEND_API_KEY environment variable is required")
        if not settings.email_from_address:
            errors.append("EMAIL_FROM_ADDRESS environment variable is required")
        return not errors, errors

    async def test_configuration(self, test_email: str) -> EmailDeliveryResult:
        """Send a short test message after checking the configuration."""
        is_valid, errors = self.validate_configuration()
        if not is_valid:
            return EmailDeliveryResult(
                success=False, error=f"Configuration errors: {', '.join(errors)}"
            )

        text = "This is a test email to verify email delivery is configured correctly."
        return await self.send_email(
            SendEmailOptions(
                to=EmailRecipient(email=test_email),
                subject="Wedding Planner AI - Test Email",
                text=text,
                html=f"<p>{text}</p>",
                categories=["test"],
            )
        )


def _status_code(exc: Exception) -> Optional[int]:
    code = getattr(exc, "code", None)
    try:
        return int(code) if code is not None else None
    except (TypeError, ValueError):
        return None


def get_email_delivery() -> EmailDeliveryService:
    """Factory used as a FastAPI dependency (overridable in tests)."""
    return EmailDeliveryService()
