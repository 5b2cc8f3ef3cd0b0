"""Vendor category repository — categories are always read with their vendors."""

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from app.domain.category import VendorCategory
from app.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[VendorCategory]):
    model = VendorCategory

    def _base_query(self):
        return select(VendorCategory).options(
            selectinload(VendorCategory.vendors),
            selectinload(VendorCategory.selected_vendor),
        )

    async def list_with_vendors(self) -> list[VendorCategory]:
        result = await self._session.execute(
            self._base_query()
            .order_by(VendorCategory.name)
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> VendorCategory | None:
        result = await self._session.execute(
            select(VendorCategory).where(VendorCategory.name == name)
        )
        return result.scalars().first()
