"""Pytest configuration and shared fixtures."""

import os

# Settings are read at import time; keep the suite independent of any local .env keys
os.environ["APP_ENV"] = "test"
os.environ["OPENAI_API_KEY"] = ""
os.environ["RESEND_API_KEY"] = ""
os.environ["EMAIL_FROM_ADDRESS"] = ""
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./wedding_planner_test.db"

from datetime import date  # noqa: E402

import pytest  # noqa: E402

from app.schemas.email import EmailContext, WeddingDetails  # noqa: E402
from tests.factories import make_category, make_vendor  # noqa: E402


@pytest.fixture
def sample_vendor():
    """A florist vendor that has not been contacted yet."""
    return make_vendor()


@pytest.fixture
def sample_categories():
    """Three categories: one confirmed, one mid-negotiation, one untouched."""
    photographer = make_vendor(
        id="vendor-2",
        category_id="cat-2",
        name="Lens & Light",
        status="confirmed",
        price=2500.0,
        last_contact=date(2024, 5, 30),
    )
    return [
        make_category(
            id="cat-2",
            name="Photographer",
            budget=3000.0,
            vendors=[photographer],
            selected=photographer,
        ),
        make_category(
            vendors=[
                make_vendor(status="negotiating", last_contact=date(2024, 5, 31)),
                make_vendor(
                    id="vendor-3",
                    name="Wildflower Co",
                    status="interested",
                    notes="Asked to see our portfolio",
                    last_contact=date(2024, 5, 20),
                ),
            ],
        ),
        make_category(id="cat-3", name="Caterer", budget=8000.0),
    ]


@pytest.fixture
def email_context(sample_vendor):
    """Drafting context for the sample florist."""
    category = make_category()
    return EmailContext(
        vendor=sample_vendor,
        category=category,
        wedding_details=WeddingDetails(
            planner_name="Sarah Johnson",
            date="September 15, 2024",
            guest_count=150,
            style="Elegant garden-themed wedding with soft pastels",
            budget=4000.0,
        ),
        email_type="initial_outreach",
    )
