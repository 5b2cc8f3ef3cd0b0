"""SQLAlchemy ORM model for Vendors.

A vendor is a prospective supplier inside one category, tracked through the
negotiation statuses in :class:`app.domain.enums.VendorStatus`.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Date, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.domain.enums import VendorStatus
from app.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.domain.action import AIAction
    from app.domain.category import VendorCategory
    from app.domain.conversation import AIConversation


class Vendor(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendors"

    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("vendor_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_email: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    price: Mapped[float] = mapped_column(Float, default=0, server_default="0", nullable=False)

    # uncontacted | pending | interested | negotiating | confirmed | declined
    status: Mapped[str] = mapped_column(
        String(20),
        default=VendorStatus.UNCONTACTED.value,
        server_default=VendorStatus.UNCONTACTED.value,
        nullable=False,
        index=True,
    )
    last_contact: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    category: Mapped["VendorCategory"] = relationship(
        back_populates="vendors", foreign_keys=[category_id], lazy="noload"
    )
    conversations: Mapped[List["AIConversation"]] = relationship(
        back_populates="vendor", passive_deletes=True, lazy="noload"
    )
    actions: Mapped[List["AIAction"]] = relationship(
        back_populates="vendor", passive_deletes=True, lazy="noload"
    )
