"""Vendor service — CRUD over vendors.

Rule: No FastAPI here. Services raise AppException subclasses; routers map
them to HTTP responses via the registered exception handlers.
"""


from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError
from app.core.pagination import PaginationParams
from app.domain.vendor import Vendor
from app.repositories.category import CategoryRepository
from app.repositories.vendor import VendorRepository
from app.schemas.vendor import VendorCreate, VendorUpdate

class VendorService:
    def __init__(self, session: AsyncSession):
        self._repo = VendorRepository(session)
        self._categories = CategoryRepository(session)

    async def list_vendors(
        self,
        pagination: PaginationParams,
        category_id: str | None = None,
        status: str | None = None,
    ):
        filters = {"category_id": category_id, "status": status}
        items, total = await self._repo.list(
            offset=pagination.offset,
            limit=pagination.limit,
            order_by=pagination.sort,
            order=pagination.order,
            filters=filters,
        )
        return items, total

    async def get_vendor(self, vendor_id: str) -> Vendor:
        vendor = await self._repo.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        return vendor

    async def get_vendors_by_category(self, category_id: str) -> list[Vendor]:
        await self._require_category(category_id)
        return await self._repo.list_by_category(category_id)

    async def add_vendor(self, data: VendorCreate) -> Vendor:
        await self._require_category(data.category_id)
        payload = data.model_dump(exclude_none=True)
        payload["status"] = data.status.value
        return await self._repo.create(**payload)

    async def update_vendor(self, vendor_id: str, data: VendorUpdate) -> Vendor:
        _ = await self.get_vendor(vendor_id)  # raises 404 if missing
        updates = data.model_dump(exclude_unset=True)
        if updates.get("category_id"):
            await self._require_category(updates["category_id"])
        if updates.get("status") is not None:
            updates["status"] = data.status.value
        # name, email and price are required columns; null means "leave as is"
        for required in ("category_id", "name", "contact_email", "price", "status"):
            if required in updates and updates[required] is None:
                updates.pop(required)
        updated = await self._repo.update(vendor_id, **updates)
        return updated  # type: ignore[return-value]

    async def delete_vendor(self, vendor_id: str) -> None:
        deleted = await self._repo.delete(vendor_id)
        if not deleted:
            raise NotFoundError("Vendor", vendor_id)

    async def _require_category(self, category_id: str) -> None:
        if not await self._categories.get_by_id(category_id):
            raise NotFoundError("Vendor category", category_id)
