"""SQLAlchemy ORM model for pending actions raised by the outreach workflow.

Rows with ``requires_human_input`` are the ones the dashboard surfaces for a
decision; ``completed`` / ``completed_at`` close them out.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.domain.mixins import CreatedAtMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.domain.vendor import Vendor


class AIAction(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "ai_actions"

    vendor_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action_type: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    requires_human_input: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    input_needed: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    completed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False, index=True
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    vendor: Mapped["Vendor"] = relationship(back_populates="actions", lazy="noload")
