"""Pending AI action router."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse
from app.db.base import get_db
from app.schemas.outreach import ActionOut, PendingActionOut
from app.services.category import CategoryService
from app.services.email_delivery import EmailDeliveryService, get_email_delivery
from app.services.outreach import OutreachService, pending_action_view

router = APIRouter(prefix="/actions", tags=["Actions"])


@router.get("/pending", response_model=DataResponse[list[PendingActionOut]])
async def pending_actions(
    session: AsyncSession = Depends(get_db),
    delivery: EmailDeliveryService = Depends(get_email_delivery),
):
    """Open actions, oldest first, with vendor name, email and category."""
    actions = await OutreachService(session, delivery).get_pending_actions()
    return {"data": [pending_action_view(a) for a in actions]}


@router.post("/{action_id}/complete", response_model=DataResponse[ActionOut])
async def complete_action(
    action_id: str,
    session: AsyncSession = Depends(get_db),
):
    action = await CategoryService(session).complete_action(action_id)
    return {"data": ActionOut.model_validate(action), "message": "Action marked complete"}
