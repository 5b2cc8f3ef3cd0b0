"""Dashboard router: one read that returns everything the overview screen shows."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse
from app.db.base import get_db
from app.schemas.dashboard import DashboardOut
from app.services.dashboard import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DataResponse[DashboardOut])
async def get_dashboard(session: AsyncSession = Depends(get_db)):
    return {"data": await DashboardService(session).build_dashboard()}
