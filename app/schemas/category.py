"""Vendor category Pydantic schemas."""


from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.vendor import VendorOut

class CategoryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    budget: float = Field(default=0, ge=0)
    notes: str | None = None

class CategoryUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    budget: float | None = Field(default=None, ge=0)
    notes: str | None = None

class SelectVendorRequest(CamelModel):
    vendor_id: str

class CategoryOut(CamelModel):
    id: str
    name: str
    budget: float
    notes: str | None = None
    selected_vendor_id: str | None = None
    created_at: datetime
    updated_at: datetime

class CategoryWithVendorsOut(CategoryOut):
    vendors: list[VendorOut] = []
    selected_vendor: VendorOut | None = None
