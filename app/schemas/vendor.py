"""Vendor Pydantic schemas (request DTOs and response models)."""


from datetime import date, datetime

from pydantic import Field

from app.domain.enums import VendorStatus
from app.schemas.common import CamelModel

class VendorCreate(CamelModel):
    category_id: str
    name: str = Field(min_length=1, max_length=255)
    contact_email: str = Field(min_length=3, max_length=255)
    phone: str | None = None
    price: float = Field(default=0, ge=0)
    status: VendorStatus = VendorStatus.UNCONTACTED
    last_contact: date | None = None
    notes: str | None = None

class VendorUpdate(CamelModel):
    category_id: str | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    contact_email: str | None = None
    phone: str | None = None
    price: float | None = Field(default=None, ge=0)
    status: VendorStatus | None = None
    last_contact: date | None = None
    notes: str | None = None

class VendorOut(CamelModel):
    id: str
    category_id: str
    name: str
    contact_email: str
    phone: str | None = None
    price: float
    status: str
    last_contact: date | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
