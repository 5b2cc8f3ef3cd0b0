"""Outreach workflow router: per-vendor message log and negotiation steps.

Each POST records the step, updates the vendor and (when configured) emails
the vendor. Delivery failures come back as 502 and nothing is recorded.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse
from app.db.base import get_db
from app.schemas.outreach import (
    AcceptRequest,
    ActionOut,
    ConversationOut,
    DeclineRequest,
    FollowUpRequest,
    NegotiationRequest,
    OutreachRequest,
    VendorResponseRequest,
)
from app.schemas.vendor import VendorOut
from app.services.email_delivery import EmailDeliveryService, get_email_delivery
from app.services.outreach import OutreachService

router = APIRouter(prefix="/vendors/{vendor_id}", tags=["Outreach"])


def _svc(session: AsyncSession, delivery: EmailDeliveryService) -> OutreachService:
    return OutreachService(session, delivery)


@router.get("/conversations", response_model=DataResponse[list[ConversationOut]])
async def conversation_history(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    """Every message exchanged with the vendor, oldest first."""
    history = await _svc(session, delivery).get_conversation_history(vendor_id)
    return {"data": [ConversationOut.model_validate(c) for c in history]}


@router.post(
    "/outreach",
    response_model=DataResponse[ConversationOut],
    status_code=status.HTTP_201_CREATED,
)
async def send_initial_outreach(
    vendor_id: str,
    body: OutreachRequest,
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    conversation = await _svc(session, delivery).send_initial_outreach(
        vendor_id, body.custom_message
    )
    return {
        "data": ConversationOut.model_validate(conversation),
        "message": "Initial outreach email sent!",
    }


@router.post(
    "/responses",
    response_model=DataResponse[ActionOut],
    status_code=status.HTTP_201_CREATED,
)
async def process_vendor_response(
    vendor_id: str,
    body: VendorResponseRequest,
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    """Record a vendor reply; the returned action says what to do next."""
    action = await _svc(session, delivery).process_vendor_response(
        vendor_id, body.response_content, body.price_quoted
    )
    return {"data": ActionOut.model_validate(action), "message": "Vendor response processed!"}


@router.post(
    "/follow-up",
    response_model=DataResponse[ConversationOut],
    status_code=status.HTTP_201_CREATED,
)
async def send_follow_up(
    vendor_id: str,
    body: FollowUpRequest,
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    conversation = await _svc(session, delivery).send_follow_up(vendor_id, body.message)
    return {
        "data": ConversationOut.model_validate(conversation),
        "message": "Follow-up email sent!",
    }


@router.post(
    "/negotiate",
    response_model=DataResponse[ActionOut],
    status_code=status.HTTP_201_CREATED,
)
async def negotiate_price(
    vendor_id: str,
    body: NegotiationRequest,
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    action = await _svc(session, delivery).negotiate_price(
        vendor_id, body.target_price, body.justification
    )
    return {
        "data": ActionOut.model_validate(action),
        "message": "Price negotiation email sent!",
    }


@router.post("/accept", response_model=DataResponse[VendorOut])
async def accept_vendor(
    vendor_id: str,
    body: AcceptRequest,
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    """Confirm the vendor at the final price and make it the category's selection."""
    vendor = await _svc(session, delivery).accept_vendor(vendor_id, body.final_price)
    return {
        "data": VendorOut.model_validate(vendor),
        "message": "Vendor accepted! Contract process initiated.",
    }


@router.post("/decline", response_model=DataResponse[VendorOut])
async def decline_vendor(
    vendor_id: str,
    body: DeclineRequest,
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    vendor = await _svc(session, delivery).decline_vendor(vendor_id, body.reason)
    return {"data": VendorOut.model_validate(vendor), "message": "Vendor declined politely."}
