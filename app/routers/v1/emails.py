"""AI email router: draft with OpenAI, deliver with Resend.

Drafting never fails outright (templates stand in when OpenAI is unavailable).
Send endpoints report provider failures in the result body with
``success=false`` rather than as an HTTP error.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse
from app.db.base import get_db
from app.schemas.email import (
    AnalysisResult,
    AnalyzeResponseRequest,
    BulkSendItemResult,
    BulkSendRequest,
    ConfigurationCheckRequest,
    ConfigurationStatus,
    EmailDeliveryResult,
    EmailVariationsRequest,
    GeneratedEmail,
    GenerateEmailRequest,
    SendGeneratedEmailRequest,
)
from app.services.email_delivery import EmailDeliveryService, get_email_delivery
from app.services.email_generator import EmailGenerator, get_email_generator
from app.services.outreach import OutreachService
from app.services.vendor_emails import VendorEmailService

router = APIRouter(prefix="/emails", tags=["Emails"])


def _svc(
    session: AsyncSession = Depends(get_db),
    generator: EmailGenerator = Depends(get_email_generator),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
) -> VendorEmailService:
    return VendorEmailService(session, generator, delivery)


@router.post("/generate", response_model=DataResponse[GeneratedEmail])
async def generate_email(body: GenerateEmailRequest, svc: VendorEmailService = Depends(_svc)):
    email = await svc.generate(
        body.vendor_id, body.email_type, body.custom_instructions, body.price_negotiation
    )
    return {"data": email}


@router.post("/variations", response_model=DataResponse[list[GeneratedEmail]])
async def generate_variations(
    body: EmailVariationsRequest, svc: VendorEmailService = Depends(_svc)
):
    """Several drafts of the same email in different tones."""
    emails = await svc.variations(
        body.vendor_id,
        body.email_type,
        body.count,
        body.custom_instructions,
        body.price_negotiation,
    )
    return {"data": emails}


@router.post("/analyze", response_model=DataResponse[AnalysisResult])
async def analyze_response(body: AnalyzeResponseRequest, svc: VendorEmailService = Depends(_svc)):
    result = await svc.analyze(body.vendor_id, body.vendor_response)
    return {"data": result}


@router.post("/send", response_model=DataResponse[EmailDeliveryResult])
async def send_email(body: SendGeneratedEmailRequest, svc: VendorEmailService = Depends(_svc)):
    result = await svc.send_generated(body.vendor_id, body.email)
    message = "Email sent!" if result.success else f"Failed to send email: {result.error}"
    return {"data": result, "message": message}


@router.post("/bulk", response_model=DataResponse[list[BulkSendItemResult]])
async def bulk_send(body: BulkSendRequest, svc: VendorEmailService = Depends(_svc)):
    """Draft and send one email per vendor, paced to the provider's rate limit."""
    items = await svc.bulk_send(body.vendor_ids, body.email_type, body.custom_instructions)
    sent = sum(1 for item in items if item.result.success)
    return {"data": items, "message": f"{sent} of {len(items)} emails sent"}


@router.get("/config", response_model=DataResponse[ConfigurationStatus])
async def configuration_status(
    generator: EmailGenerator = Depends(get_email_generator),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    """Which integrations are configured, without sending anything."""
    email_ok, errors = delivery.validate_configuration()
    ai_ok = generator.is_configured()
    if not ai_ok:
        errors.append("OPENAI_API_KEY environment variable is required for AI drafting")
    return {"data": ConfigurationStatus(email_delivery=email_ok, ai=ai_ok, errors=errors)}


@router.post("/test", response_model=DataResponse[ConfigurationStatus])
async def test_configuration(
    body: ConfigurationCheckRequest,
    session: AsyncSession = Depends(get_db),
    generator: EmailGenerator = Depends(get_email_generator),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    """Send a test email to the given address and report both integrations."""
    result = await OutreachService(session, delivery, generator).test_email_configuration(
        body.test_email
    )
    message = "Test email sent!" if result.email_delivery else "Email configuration test failed"
    return {"data": result, "message": message}
