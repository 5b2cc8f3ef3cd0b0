"""SQLAlchemy ORM model for vendor categories (budgeted line items such as "Florist")."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.domain.mixins import TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from app.domain.vendor import Vendor


class VendorCategory(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "vendor_categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    budget: Mapped[float] = mapped_column(Float, default=0, server_default="0", nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # vendors <-> vendor_categories reference each other; the ALTER breaks the cycle
    selected_vendor_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey(
            "vendors.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_vendor_categories_selected_vendor_id",
        ),
        nullable=True,
    )

    vendors: Mapped[List["Vendor"]] = relationship(
        back_populates="category",
        foreign_keys="Vendor.category_id",
        order_by="Vendor.name",
        passive_deletes=True,
        lazy="noload",
    )
    selected_vendor: Mapped[Optional["Vendor"]] = relationship(
        foreign_keys=[selected_vendor_id],
        post_update=True,
        lazy="noload",
    )
