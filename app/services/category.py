"""Vendor category service — budgets, vendor selection, and human-input follow-ups."""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.domain.action import AIAction
from app.domain.category import VendorCategory
from app.domain.vendor import Vendor
from app.repositories.action import ActionRepository
from app.repositories.category import CategoryRepository
from app.repositories.vendor import VendorRepository
from app.schemas.category import CategoryCreate, CategoryUpdate

logger = logging.getLogger(__name__)

class CategoryService:
    def __init__(self, session: AsyncSession):
        self._repo = CategoryRepository(session)
        self._vendors = VendorRepository(session)
        self._actions = ActionRepository(session)

    async def get_categories(self) -> list[VendorCategory]:
        """All categories with their vendors and selected vendor, ordered by name."""
        return await self._repo.list_with_vendors()

    async def get_category(self, category_id: str) -> VendorCategory:
        category = await self._repo.get_by_id(category_id)
        if not category:
            raise NotFoundError("Vendor category", category_id)
        return category

    async def add_category(self, data: CategoryCreate) -> VendorCategory:
        if await self._repo.get_by_name(data.name):
            raise ConflictError(f"Vendor category '{data.name}' already exists")
        created = await self._repo.create(**data.model_dump())
        return await self.get_category(created.id)

    async def update_category(self, category_id: str, data: CategoryUpdate) -> VendorCategory:
        category = await self.get_category(category_id)
        updates = data.model_dump(exclude_unset=True)
        if updates.get("name") and updates["name"] != category.name:
            if await self._repo.get_by_name(updates["name"]):
                raise ConflictError(f"Vendor category '{updates['name']}' already exists")
        for required in ("name", "budget"):
            if required in updates and updates[required] is None:
                updates.pop(required)
        updated = await self._repo.update(category_id, **updates)
        return updated  # type: ignore[return-value]

    async def delete_category(self, category_id: str) -> None:
        deleted = await self._repo.delete(category_id)
        if not deleted:
            raise NotFoundError("Vendor category", category_id)

    async def select_vendor(self, category_id: str, vendor_id: str) -> VendorCategory:
        _ = await self.get_category(category_id)
        vendor = await self._vendors.get_by_id(vendor_id)
        if not vendor:
            raise NotFoundError("Vendor", vendor_id)
        if vendor.category_id != category_id:
            raise ValidationError(
                f"Vendor '{vendor.name}' does not belong to this category"
            )
        updated = await self._repo.update(category_id, selected_vendor_id=vendor_id)
        logger.info("Selected vendor %s for category %s", vendor_id, category_id)
        return updated  # type: ignore[return-value]

    async def get_vendors_needing_input(self) -> list[Vendor]:
        """Vendors behind open actions that wait on a human decision (one entry per action)."""
        actions = await self._actions.needing_input()
        return [action.vendor for action in actions if action.vendor is not None]

    async def complete_action(self, action_id: str) -> AIAction:
        completed = await self._actions.complete(action_id)
        if not completed:
            raise NotFoundError("AI action", action_id)
        return completed
