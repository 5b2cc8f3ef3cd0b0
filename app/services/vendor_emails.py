"""Draft, analyze and send AI-written vendor emails for the ``/emails`` endpoints."""


import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundError
from app.domain.enums import EmailType, MessageType
from app.domain.vendor import Vendor
from app.repositories.conversation import ConversationRepository
from app.repositories.vendor import VendorRepository
from app.schemas.category import CategoryOut
from app.schemas.email import (
    AnalysisResult,
    BulkSendItemResult,
    EmailContext,
    EmailDeliveryResult,
    EmailRecipient,
    GeneratedEmail,
    PriceNegotiation,
    WeddingDetails,
)
from app.schemas.vendor import VendorOut
from app.services.email_delivery import EmailDeliveryService
from app.services.email_generator import EmailGenerator

logger = logging.getLogger(__name__)


class VendorEmailService:
    def __init__(
        self,
        session: AsyncSession,
        generator: EmailGenerator,
        delivery: EmailDeliveryService,
    ):
        self._vendors = VendorRepository(session)
        self._conversations = ConversationRepository(session)
        self._generator = generator
        self._delivery = delivery

    async def build_context(
        self,
        vendor_id: str,
        email_type: EmailType,
        custom_instructions: Optional[str] = None,
        price_negotiation: Optional[PriceNegotiation] = None,
    ) -> EmailContext:
        """Vendor, its category and the wedding details from settings."""
        vendor = await self._require_vendor(vendor_id)
        category = vendor.category
        return EmailContext(
            vendor=VendorOut.model_validate(vendor),
            category=CategoryOut.model_validate(category),
            wedding_details=WeddingDetails(
                planner_name=settings.planner_name,
                date=settings.wedding_date,
                guest_count=settings.guest_count,
                style=settings.wedding_style,
                budget=category.budget,
            ),
            email_type=email_type,
            custom_instructions=custom_instructions,
            price_negotiation=price_negotiation,
        )

    async def generate(
        self,
        vendor_id: str,
        email_type: EmailType,
        custom_instructions: Optional[str] = None,
        price_negotiation: Optional[PriceNegotiation] = None,
    ) -> GeneratedEmail:
        context = await self.build_context(
            vendor_id, email_type, custom_instructions, price_negotiation
        )
        return await self._generator.generate_email(context)

    async def variations(
        self,
        vendor_id: str,
        email_type: EmailType,
        count: int,
        custom_instructions: Optional[str] = None,
        price_negotiation: Optional[PriceNegotiation] = None,
    ) -> list[GeneratedEmail]:
        context = await self.build_context(
            vendor_id, email_type, custom_instructions, price_negotiation
        )
        return await self._generator.generate_email_variations(context, count)

    async def analyze(self, vendor_id: str, vendor_response: str) -> AnalysisResult:
        context = await self.build_context(vendor_id, EmailType.FOLLOW_UP)
        return await self._generator.analyze_response_and_suggest_reply(vendor_response, context)

    async def send_generated(self, vendor_id: str, email: GeneratedEmail) -> EmailDeliveryResult:
        """Deliver a drafted email; a successful send is added to the vendor's message log."""
        vendor = await self._require_vendor(vendor_id)
        result = await self._delivery.send_ai_generated_email(
            email, _recipient(vendor), vendor.id, vendor.category.name
        )
        if result.success:
            await self._log_sent(vendor.id, email)
        return result

    async def bulk_send(
        self,
        vendor_ids: list[str],
        email_type: EmailType,
        custom_instructions: Optional[str] = None,
    ) -> list[BulkSendItemResult]:
        """Draft one email per vendor, then send them all with the configured pacing."""
        batch = []
        for vendor_id in vendor_ids:
            context = await self.build_context(vendor_id, email_type, custom_instructions)
            email = await self._generator.generate_email(context)
            recipient = EmailRecipient(
                email=context.vendor.contact_email, name=context.vendor.name
            )
            batch.append((email, recipient, vendor_id, context.category.name))

        results = await self._delivery.send_bulk_emails(batch)

        items: list[BulkSendItemResult] = []
        for (email, _, vendor_id, _), result in zip(batch, results):
            if result.success:
                await self._log_sent(vendor_id, email)
            items.append(BulkSendItemResult(vendor_id=vendor_id, result=result))

        sent = sum(1 for item in items if item.result.success)
        logger.info("Bulk send finished: %d/%d delivered", sent, len(items))
        return items

    async def _require_vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._vendors.get_with_category(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def _log_sent(self, vendor_id: str, email: GeneratedEmail) -> None:
        await self._conversations.create(
            vendor_id=vendor_id,
            message_type=MessageType.OUTBOUND.value,
            subject=email.subject,
            body=email.body,
            sent_at=datetime.now(timezone.utc),
        )


def _recipient(vendor: Vendor) -> EmailRecipient:
    return EmailRecipient(email=vendor.contact_email, name=vendor.name)
