"""Pending action repository."""

from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.domain.action import AIAction
from app.domain.vendor import Vendor
from app.repositories.base import BaseRepository


class ActionRepository(BaseRepository[AIAction]):
    model = AIAction

    async def pending(self) -> list[AIAction]:
        """Uncompleted actions, oldest first, with vendor and vendor category loaded."""
        result = await self._session.execute(
            select(AIAction)
            .options(selectinload(AIAction.vendor).selectinload(Vendor.category))
            .where(AIAction.completed.is_(False))
            .order_by(AIAction.created_at.asc())
        )
        return list(result.scalars().all())

    async def needing_input(self) -> list[AIAction]:
        result = await self._session.execute(
            select(AIAction)
            .options(selectinload(AIAction.vendor))
            .where(AIAction.requires_human_input.is_(True))
            .where(AIAction.completed.is_(False))
            .order_by(AIAction.created_at.asc())
        )
        return list(result.scalars().all())

    async def complete(self, action_id: str) -> AIAction | None:
        return await self.update(
            action_id, completed=True, completed_at=datetime.now(timezone.utc)
        )
