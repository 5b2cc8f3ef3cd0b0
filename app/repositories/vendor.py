"""Vendor repository."""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.domain.vendor import Vendor
from app.repositories.base import BaseRepository


class VendorRepository(BaseRepository[Vendor]):
    model = Vendor

    async def list_by_category(self, category_id: str) -> list[Vendor]:
        result = await self._session.execute(
            select(Vendor).where(Vendor.category_id == category_id).order_by(Vendor.name)
        )
        return list(result.scalars().all())

    async def get_with_category(self, vendor_id: str) -> Vendor | None:
        result = await self._session.execute(
            select(Vendor)
            .options(selectinload(Vendor.category))
            .where(Vendor.id == vendor_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()
