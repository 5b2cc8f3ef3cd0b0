"""Builders for read models used across unit tests."""

from datetime import datetime, timezone

from app.schemas.category import CategoryWithVendorsOut
from app.schemas.vendor import VendorOut

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_vendor(**overrides) -> VendorOut:
    data = {
        "id": "vendor-1",
        "category_id": "cat-1",
        "name": "Bloom & Petal",
        "contact_email": "hello@bloomandpetal.com",
        "phone": "555-0100",
        "price": 3000.0,
        "status": "uncontacted",
        "last_contact": None,
        "notes": None,
        "created_at": NOW,
        "updated_at": NOW,
    }
    data.update(overrides)
    return VendorOut(**data)


def make_category(vendors=None, selected=None, **overrides) -> CategoryWithVendorsOut:
    data = {
        "id": "cat-1",
        "name": "Florist",
        "budget": 4000.0,
        "notes": None,
        "selected_vendor_id": selected.id if selected else None,
        "created_at": NOW,
        "updated_at": NOW,
        "vendors": vendors or [],
        "selected_vendor": selected,
    }
    data.update(overrides)
    return CategoryWithVendorsOut(**data)
