"""Vendor CRUD router.

Pattern:
  1. Declare a router with prefix and tags
  2. Inject the DB session via Depends
  3. Instantiate the service with the session
  4. Call service methods and wrap result in response envelope
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.pagination import PaginationParams
from app.core.response import DataResponse, ListResponse, paginated
from app.db.base import get_db
from app.domain.enums import VendorStatus
from app.schemas.vendor import VendorCreate, VendorOut, VendorUpdate
from app.services.category import CategoryService
from app.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


@router.get("", response_model=ListResponse[VendorOut])
async def list_vendors(
    category_id: Optional[str] = Query(default=None, alias="categoryId"),
    filter_status: Optional[VendorStatus] = Query(default=None, alias="status"),
    pagination: PaginationParams = Depends(),
    session: AsyncSession = Depends(get_db),
):
    """List vendors (paginated). Filter by ?categoryId=... and ?status=negotiating etc."""
    items, total = await VendorService(session).list_vendors(
        pagination,
        category_id=category_id,
        status=filter_status.value if filter_status else None,
    )
    return paginated(
        [VendorOut.model_validate(v) for v in items],
        total, pagination,
    )


@router.post("", response_model=DataResponse[VendorOut], status_code=status.HTTP_201_CREATED)
async def create_vendor(
    body: VendorCreate,
    session: AsyncSession = Depends(get_db),
):
    vendor = await VendorService(session).add_vendor(body)
    return {"data": VendorOut.model_validate(vendor), "message": "Vendor added successfully!"}


@router.get("/needing-input", response_model=DataResponse[list[VendorOut]])
async def vendors_needing_input(session: AsyncSession = Depends(get_db)):
    """Vendors with an open action that waits on a planner decision."""
    vendors = await CategoryService(session).get_vendors_needing_input()
    return {"data": [VendorOut.model_validate(v) for v in vendors]}


@router.get("/{vendor_id}", response_model=DataResponse[VendorOut])
async def get_vendor(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
):
    vendor = await VendorService(session).get_vendor(vendor_id)
    return {"data": VendorOut.model_validate(vendor)}


@router.put("/{vendor_id}", response_model=DataResponse[VendorOut])
async def update_vendor(
    vendor_id: str,
    body: VendorUpdate,
    session: AsyncSession = Depends(get_db),
):
    vendor = await VendorService(session).update_vendor(vendor_id, body)
    return {"data": VendorOut.model_validate(vendor), "message": "Vendor updated successfully!"}


@router.delete("/{vendor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_vendor(
    vendor_id: str,
    session: AsyncSession = Depends(get_db),
):
    await VendorService(session).delete_vendor(vendor_id)
