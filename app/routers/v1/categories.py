"""Vendor category router: budgets, vendor lists and the selected vendor."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.response import DataResponse
from app.db.base import get_db
from app.schemas.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryWithVendorsOut,
    SelectVendorRequest,
)
from app.schemas.vendor import VendorOut
from app.services.category import CategoryService
from app.services.vendor import VendorService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=DataResponse[list[CategoryWithVendorsOut]])
async def list_categories(session: AsyncSession = Depends(get_db)):
    """All categories ordered by name, each with its vendors and selected vendor."""
    categories = await CategoryService(session).get_categories()
    return {"data": [CategoryWithVendorsOut.model_validate(c) for c in categories]}


@router.post(
    "",
    response_model=DataResponse[CategoryWithVendorsOut],
    status_code=status.HTTP_201_CREATED,
)
async def create_category(
    body: CategoryCreate,
    session: AsyncSession = Depends(get_db),
):
    category = await CategoryService(session).add_category(body)
    return {
        "data": CategoryWithVendorsOut.model_validate(category),
        "message": "Category added successfully!",
    }


@router.get("/{category_id}", response_model=DataResponse[CategoryWithVendorsOut])
async def get_category(
    category_id: str,
    session: AsyncSession = Depends(get_db),
):
    category = await CategoryService(session).get_category(category_id)
    return {"data": CategoryWithVendorsOut.model_validate(category)}


@router.patch("/{category_id}", response_model=DataResponse[CategoryWithVendorsOut])
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    session: AsyncSession = Depends(get_db),
):
    category = await CategoryService(session).update_category(category_id, body)
    return {
        "data": CategoryWithVendorsOut.model_validate(category),
        "message": "Category updated successfully!",
    }


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: str,
    session: AsyncSession = Depends(get_db),
):
    """Delete a category; its vendors and their history go with it."""
    await CategoryService(session).delete_category(category_id)


@router.put("/{category_id}/selected-vendor", response_model=DataResponse[CategoryWithVendorsOut])
async def select_vendor(
    category_id: str,
    body: SelectVendorRequest,
    session: AsyncSession = Depends(get_db),
):
    category = await CategoryService(session).select_vendor(category_id, body.vendor_id)
    return {
        "data": CategoryWithVendorsOut.model_validate(category),
        "message": "Vendor selected successfully!",
    }


@router.get("/{category_id}/vendors", response_model=DataResponse[list[VendorOut]])
async def list_category_vendors(
    category_id: str,
    session: AsyncSession = Depends(get_db),
):
    """Vendors in one category, ordered by name."""
    vendors = await VendorService(session).get_vendors_by_category(category_id)
    return {"data": [VendorOut.model_validate(v) for v in vendors]}
