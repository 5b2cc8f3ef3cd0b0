"""Message log repository."""

from sqlalchemy import select

from app.domain.conversation import AIConversation
from app.repositories.base import BaseRepository


class ConversationRepository(BaseRepository[AIConversation]):
    model = AIConversation

    async def history(self, vendor_id: str) -> list[AIConversation]:
        """All messages exchanged with a vendor, oldest first."""
        result = await self._session.execute(
            select(AIConversation)
            .where(AIConversation.vendor_id == vendor_id)
            .order_by(AIConversation.sent_at.asc())
        )
        return list(result.scalars().all())
