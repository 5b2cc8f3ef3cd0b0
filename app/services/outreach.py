"""Vendor outreach workflow: message log, pending actions and status changes.

Each workflow step writes the outbound/inbound message to ``ai_conversations``
and moves the vendor along its status. Follow-up work is opened in
``ai_actions``. When Resend is configured the email is delivered as well; a
failed delivery raises :class:`EmailDeliveryError` so the request's
transaction is rolled back and nothing is recorded as sent.
"""


import logging
from datetime import date, datetime, timezone
from typing import Awaitable, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import EmailDeliveryError, NotFoundError
from app.domain.action import AIAction
from app.domain.conversation import AIConversation
from app.domain.enums import MessageType, VendorStatus
from app.domain.vendor import Vendor
from app.repositories.action import ActionRepository
from app.repositories.category import CategoryRepository
from app.repositories.conversation import ConversationRepository
from app.repositories.vendor import VendorRepository
from app.schemas.email import ConfigurationStatus, EmailDeliveryResult, EmailRecipient
from app.schemas.outreach import ActionVendorSummary, NextAction, PendingActionOut
from app.services.email_delivery import EmailDeliveryService
from app.services.email_generator import EmailGenerator, format_money

logger = logging.getLogger(__name__)

Delivery = Callable[[EmailRecipient], Awaitable[EmailDeliveryResult]]


# ---------------------------------------------------------------------------
# Message templates
# ---------------------------------------------------------------------------

def initial_outreach_template(vendor: Vendor) -> str:
    category = vendor.category
    budget = category.budget if category else 0
    service = category.name.lower() if category else "wedding"
    return (
        f"Dear {vendor.name} Team,\n\n"
        f"I hope this email finds you well. I am currently planning a wedding for "
        f"{settings.wedding_date}, and am reaching out to inquire about your {service} services.\n\n"
        f"Event Details:\n"
        f"- Date: {settings.wedding_date}\n"
        f"- Guest Count: {settings.guest_count}\n"
        f"- Budget Range: ${format_money(budget * 0.8)} - ${format_money(budget)}\n"
        f"- Style: {settings.wedding_style}\n\n"
        f"Could you please provide:\n"
        f"1. Your availability for this date\n"
        f"2. Package options and pricing\n"
        f"3. Portfolio or examples of recent work\n"
        f"4. Any additional services you offer\n\n"
        f"I would love to schedule a consultation to discuss our vision in more detail. "
        f"Please let me know your availability for a call or meeting in the coming week.\n\n"
        f"Thank you for your time, and I look forward to hearing from you.\n\n"
        f"Best regards,\n{settings.planner_name}\nWedding Planning Team"
    )


def negotiation_message(target_price: float, justification: str) -> str:
    return (
        f"Thank you for your quote. After reviewing our budget, we were hoping to work "
        f"within a range of ${format_money(target_price)}.\n\n"
        f"{justification}\n\n"
        f"Would you be able to work within this budget? We're flexible on some aspects of "
        f"the package if needed.\n\n"
        f"Looking forward to your response."
    )


def acceptance_message(final_price: float) -> str:
    return (
        "Great news! We would love to move forward with your services for our wedding.\n\n"
        f"Final agreed price: ${format_money(final_price)}\n\n"
        "Next steps:\n"
        "1. Please send over the contract for review\n"
        "2. We'll schedule a detailed planning meeting\n"
        "3. Arrange deposit payment\n\n"
        "Thank you for working with us. We're excited to have you as part of our special day!"
    )


DECLINE_MESSAGE = (
    "Thank you for taking the time to provide a quote for our wedding.\n\n"
    "After careful consideration, we have decided to go with another vendor that better "
    "fits our current needs and budget.\n\n"
    "We appreciate your professionalism and wish you all the best.\n\n"
    "Best regards,\nWedding Planning Team"
)


def analyze_response(content: str, price_quoted: Optional[float] = None) -> NextAction:
    """Decide the follow-up action for a vendor reply."""
    if price_quoted and price_quoted > 0:
        return NextAction(
            type="price_received",
            description=f"Price quote received: ${format_money(price_quoted)}",
            requires_human_input=True,
            input_needed="Review price quote and approve/negotiate",
        )

    lowered = content.lower()
    if "not available" in lowered or "booked" in lowered:
        return NextAction(
            type="vendor_unavailable",
            description="Vendor reported unavailable for requested date",
            requires_human_input=False,
        )

    if "portfolio" in lowered or "examples" in lowered:
        return NextAction(
            type="portfolio_requested",
            description="Vendor requested to see portfolio/examples",
            requires_human_input=True,
            input_needed="Review vendor portfolio and provide feedback",
        )

    return NextAction(
        type="follow_up_needed",
        description="Response received, follow-up required",
        requires_human_input=True,
        input_needed="Review response and determine next steps",
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class OutreachService:
    def __init__(
        self,
        session: AsyncSession,
        delivery: EmailDeliveryService,
        generator: Optional[EmailGenerator] = None,
    ):
        self._vendors = VendorRepository(session)
        self._categories = CategoryRepository(session)
        self._conversations = ConversationRepository(session)
        self._actions = ActionRepository(session)
        self._delivery = delivery
        self._generator = generator

    # ── Records ──────────────────────────────────────────────────────────

    async def log_conversation(
        self, vendor_id: str, message_type: MessageType, subject: str, body: str
    ) -> AIConversation:
        return await self._conversations.create(
            vendor_id=vendor_id,
            message_type=message_type.value,
            subject=subject,
            body=body,
            sent_at=datetime.now(timezone.utc),
        )

    async def create_ai_action(
        self,
        vendor_id: str,
        action_type: str,
        description: str,
        requires_human_input: bool = False,
        input_needed: Optional[str] = None,
    ) -> AIAction:
        return await self._actions.create(
            vendor_id=vendor_id,
            action_type=action_type,
            description=description,
            requires_human_input=requires_human_input,
            input_needed=input_needed,
        )

    async def get_conversation_history(self, vendor_id: str) -> list[AIConversation]:
        await self._require_vendor(vendor_id)
        return await self._conversations.history(vendor_id)

    async def get_pending_actions(self) -> list[AIAction]:
        return await self._actions.pending()

    # ── Workflow steps ───────────────────────────────────────────────────

    async def send_initial_outreach(
        self, vendor_id: str, custom_message: Optional[str] = None
    ) -> AIConversation:
        vendor = await self._require_vendor(vendor_id, with_category=True)
        body = custom_message or initial_outreach_template(vendor)

        conversation = await self.log_conversation(
            vendor_id, MessageType.OUTBOUND, "Initial Inquiry", body
        )
        await self.create_ai_action(
            vendor_id, "initial_outreach_sent", "Initial outreach email sent, awaiting response"
        )

        category_name = vendor.category.name if vendor.category else "Wedding Services"
        await self._deliver(
            vendor,
            lambda to: self._delivery.send_outreach_email(
                f"Wedding Vendor Inquiry - {category_name}", body, to, vendor_id, category_name
            ),
        )
        return conversation

    async def process_vendor_response(
        self, vendor_id: str, response_content: str, price_quoted: Optional[float] = None
    ) -> AIAction:
        await self._require_vendor(vendor_id)
        await self.log_conversation(
            vendor_id, MessageType.INBOUND, "Response to Inquiry", response_content
        )

        updates: dict = {
            "status": VendorStatus.NEGOTIATING.value,
            "last_contact": date.today(),
        }
        if price_quoted:
            updates["price"] = price_quoted
        await self._vendors.update(vendor_id, **updates)

        next_action = analyze_response(response_content, price_quoted)
        return await self.create_ai_action(
            vendor_id,
            next_action.type,
            next_action.description,
            next_action.requires_human_input,
            next_action.input_needed,
        )

    async def send_follow_up(self, vendor_id: str, message: str) -> AIConversation:
        vendor = await self._require_vendor(vendor_id)
        conversation = await self._record_follow_up(vendor_id, message)
        original_subject = await self._last_outbound_subject(vendor_id)
        await self._deliver(
            vendor,
            lambda to: self._delivery.send_follow_up_email(
                original_subject, message, to, vendor_id
            ),
        )
        logger.info("Follow-up sent to vendor: %s", vendor_id)
        return conversation

    async def negotiate_price(
        self, vendor_id: str, target_price: float, justification: str
    ) -> AIAction:
        vendor = await self._require_vendor(vendor_id)
        message = negotiation_message(target_price, justification)

        await self._record_follow_up(vendor_id, message)
        action = await self.create_ai_action(
            vendor_id,
            "price_negotiation_sent",
            f"Negotiation email sent for target price: ${format_money(target_price)}",
        )
        await self._deliver(
            vendor,
            lambda to: self._delivery.send_negotiation_email(
                "Re: Wedding Services - Budget Discussion",
                message,
                to,
                vendor_id,
                vendor.price,
                target_price,
            ),
        )
        return action

    async def accept_vendor(self, vendor_id: str, final_price: float) -> Vendor:
        vendor = await self._require_vendor(vendor_id)
        updated = await self._vendors.update(
            vendor_id,
            status=VendorStatus.CONFIRMED.value,
            price=final_price,
            last_contact=date.today(),
        )
        await self._categories.update(vendor.category_id, selected_vendor_id=vendor_id)

        message = acceptance_message(final_price)
        await self.log_conversation(
            vendor_id, MessageType.OUTBOUND, "Acceptance & Next Steps", message
        )
        await self._deliver(
            vendor,
            lambda to: self._delivery.send_acceptance_email(
                "Acceptance & Next Steps", message, to, vendor_id, final_price
            ),
        )
        return updated  # type: ignore[return-value]

    async def decline_vendor(self, vendor_id: str, reason: str) -> Vendor:
        vendor = await self._require_vendor(vendor_id)
        updated = await self._vendors.update(
            vendor_id,
            status=VendorStatus.DECLINED.value,
            notes=reason,
            last_contact=date.today(),
        )
        await self.log_conversation(vendor_id, MessageType.OUTBOUND, "Thank You", DECLINE_MESSAGE)
        await self._deliver(
            vendor,
            lambda to: self._delivery.send_decline_email(
                "Thank You", DECLINE_MESSAGE, to, vendor_id, reason
            ),
        )
        return updated  # type: ignore[return-value]

    async def test_email_configuration(self, test_email: str) -> ConfigurationStatus:
        """Check both integrations; email is verified by actually sending a test message."""
        errors: list[str] = []

        result = await self._delivery.test_configuration(test_email)
        if not result.success and result.error:
            errors.append(result.error)

        ai_ready = bool(self._generator and self._generator.is_configured())
        if not ai_ready:
            errors.append("OPENAI_API_KEY environment variable is required for AI drafting")

        return ConfigurationStatus(email_delivery=result.success, ai=ai_ready, errors=errors)

    # ── Helpers ──────────────────────────────────────────────────────────

    async def _require_vendor(self, vendor_id: str, with_category: bool = False) -> Vendor:
        if with_category:
            vendor = await self._vendors.get_with_category(vendor_id)
        else:
            vendor = await self._vendors.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def _record_follow_up(self, vendor_id: str, message: str) -> AIConversation:
        conversation = await self.log_conversation(
            vendor_id, MessageType.OUTBOUND, "Follow-up", message
        )
        await self._vendors.update(vendor_id, last_contact=date.today())
        return conversation

    async def _last_outbound_subject(self, vendor_id: str) -> str:
        history = await self._conversations.history(vendor_id)
        for entry in reversed(history):
            if entry.message_type == MessageType.OUTBOUND.value and entry.subject not in (
                None,
                "Follow-up",
            ):
                return entry.subject
        return "Wedding Vendor Inquiry"

    async def _deliver(self, vendor: Vendor, send: Delivery) -> Optional[EmailDeliveryResult]:
        """Run a delivery call when Resend is configured; otherwise the log entry stands alone."""
        if not self._delivery.is_configured():
            logger.info("Email delivery not configured; message to %s logged only", vendor.contact_email)
            return None

        result = await send(EmailRecipient(email=vendor.contact_email, name=vendor.name))
        if not result.success:
            raise EmailDeliveryError(
                f"Failed to email {vendor.contact_email}: {result.error or 'unknown error'}"
            )
        return result


def pending_action_view(action: AIAction) -> PendingActionOut:
    """Flatten a pending action with its vendor's name, email and category."""
    view = PendingActionOut.model_validate(action)
    vendor = action.vendor
    if vendor is not None:
        view.vendor = ActionVendorSummary(
            name=vendor.name,
            contact_email=vendor.contact_email,
            category_name=vendor.category.name if vendor.category else None,
        )
    return view
