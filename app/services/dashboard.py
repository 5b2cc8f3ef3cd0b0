"""Dashboard aggregates.

Nothing here is stored: budget totals, category progress, badges and the
activity feed are all computed on read from the categories with their vendors.
"""


import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.domain.enums import VendorStatus
from app.repositories.action import ActionRepository
from app.repositories.category import CategoryRepository
from app.schemas.category import CategoryWithVendorsOut
from app.schemas.dashboard import (
    ActivityItem,
    BudgetStats,
    CategoryOverviewItem,
    DashboardOut,
    StatusBadge,
    WeddingHeader,
)
from app.schemas.vendor import VendorOut
from app.services.outreach import pending_action_view

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 6

DEFAULT_BADGE = StatusBadge(color="gray", icon="clock", label="Uncontacted")

STATUS_BADGES: dict[str, StatusBadge] = {
    VendorStatus.CONFIRMED.value: StatusBadge(color="green", icon="check-circle", label="Confirmed"),
    VendorStatus.NEGOTIATING.value: StatusBadge(
        color="yellow", icon="message-square", label="Negotiating"
    ),
    VendorStatus.INTERESTED.value: StatusBadge(color="blue", icon="eye", label="Interested"),
    VendorStatus.PENDING.value: StatusBadge(color="purple", icon="clock", label="Pending"),
    VendorStatus.DECLINED.value: StatusBadge(color="red", icon="alert-circle", label="Declined"),
    VendorStatus.UNCONTACTED.value: DEFAULT_BADGE,
}

ACTIVITY_LABELS: dict[str, str] = {
    VendorStatus.CONFIRMED.value: "Contract confirmed",
    VendorStatus.NEGOTIATING.value: "Price negotiation in progress",
    VendorStatus.INTERESTED.value: "Vendor showed interest",
    VendorStatus.DECLINED.value: "Vendor declined",
}

_NOT_CONTACTED = {VendorStatus.PENDING.value, VendorStatus.UNCONTACTED.value}


# ---------------------------------------------------------------------------
# Budget
# ---------------------------------------------------------------------------

def total_budget(categories: list[CategoryWithVendorsOut]) -> float:
    return sum(category.budget for category in categories)


def total_spent(categories: list[CategoryWithVendorsOut]) -> float:
    """Sum of the selected vendor's price across categories."""
    return sum(
        category.selected_vendor.price
        for category in categories
        if category.selected_vendor is not None
    )


def remaining_budget(categories: list[CategoryWithVendorsOut]) -> float:
    return total_budget(categories) - total_spent(categories)


def categories_complete(categories: list[CategoryWithVendorsOut]) -> int:
    return sum(1 for category in categories if category.selected_vendor is not None)


def all_vendors(categories: list[CategoryWithVendorsOut]) -> list[VendorOut]:
    return [vendor for category in categories for vendor in category.vendors]


def needs_input(vendor: VendorOut) -> bool:
    if vendor.status == VendorStatus.NEGOTIATING.value:
        return True
    return vendor.status == VendorStatus.INTERESTED.value and "portfolio" in (vendor.notes or "")


def budget_stats(categories: list[CategoryWithVendorsOut]) -> BudgetStats:
    vendors = all_vendors(categories)
    return BudgetStats(
        total_budget=total_budget(categories),
        total_spent=total_spent(categories),
        remaining=remaining_budget(categories),
        categories_complete=categories_complete(categories),
        total_categories=len(categories),
        total_vendors=len(vendors),
        vendors_needing_input=sum(1 for vendor in vendors if needs_input(vendor)),
    )


# ---------------------------------------------------------------------------
# Status presentation
# ---------------------------------------------------------------------------

def status_badge(status: str) -> StatusBadge:
    return STATUS_BADGES.get(status, DEFAULT_BADGE)


def category_status_text(category: CategoryWithVendorsOut) -> str:
    if category.selected_vendor is not None:
        return f"Confirmed: {category.selected_vendor.name}"

    def count(status: VendorStatus) -> int:
        return sum(1 for vendor in category.vendors if vendor.status == status.value)

    negotiating = count(VendorStatus.NEGOTIATING)
    if negotiating:
        return f"{negotiating} negotiating"
    interested = count(VendorStatus.INTERESTED)
    if interested:
        return f"{interested} interested"
    pending = count(VendorStatus.PENDING) + count(VendorStatus.UNCONTACTED)
    if pending:
        return f"{pending} pending outreach"
    return "No active vendors"


def category_overview(category: CategoryWithVendorsOut) -> CategoryOverviewItem:
    contacted = sum(1 for vendor in category.vendors if vendor.status not in _NOT_CONTACTED)
    total = len(category.vendors)
    selected = category.selected_vendor
    return CategoryOverviewItem(
        id=category.id,
        name=category.name,
        budget=category.budget,
        confirmed=selected is not None,
        status_text=category_status_text(category),
        selected_vendor_name=selected.name if selected else None,
        selected_vendor_price=selected.price if selected else None,
        vendor_count=total,
        contacted_count=contacted,
        progress_percentage=round(contacted / total * 100) if total else 0,
    )


# ---------------------------------------------------------------------------
# Activity feed
# ---------------------------------------------------------------------------

def time_ago(last_contact: date, now: Optional[datetime] = None) -> str:
    """Relative time since a contact date, counted from midnight UTC of that day."""
    now = now or datetime.now(timezone.utc)
    contacted_at = datetime.combine(last_contact, time.min, tzinfo=timezone.utc)
    hours = int((now - contacted_at).total_seconds() // 3600)

    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hours ago"
    if hours < 48:
        return "1 day ago"
    return f"{hours // 24} days ago"


def recent_activity(
    categories: list[CategoryWithVendorsOut], now: Optional[datetime] = None
) -> list[ActivityItem]:
    entries = [
        (vendor, category.name)
        for category in categories
        for vendor in category.vendors
        if vendor.last_contact is not None
    ]
    entries.sort(key=lambda entry: entry[0].last_contact, reverse=True)

    return [
        ActivityItem(
            vendor_id=vendor.id,
            vendor=vendor.name,
            category=category_name,
            status=vendor.status,
            last_contact=vendor.last_contact,
            price=vendor.price,
            action=ACTIVITY_LABELS.get(vendor.status, "Initial contact made"),
            time_ago=time_ago(vendor.last_contact, now),
            badge=status_badge(vendor.status),
        )
        for vendor, category_name in entries[:RECENT_ACTIVITY_LIMIT]
    ]


def format_wedding_date(value: str) -> str:
    """Render the configured date as e.g. "September 15, 2024"; unparseable text is kept."""
    for fmt in ("%B %d, %Y", "%Y-%m-%d", "%m/%d/%Y"):
        try:
            parsed = datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
        return f"{parsed:%B} {parsed.day}, {parsed.year}"
    return value


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class DashboardService:
    def __init__(self, session: AsyncSession):
        self._categories = CategoryRepository(session)
        self._actions = ActionRepository(session)

    async def build_dashboard(self) -> DashboardOut:
        categories = [
            CategoryWithVendorsOut.model_validate(category)
            for category in await self._categories.list_with_vendors()
        ]
        pending = await self._actions.pending()
        logger.debug(
            "Building dashboard: %d categories, %d pending actions", len(categories), len(pending)
        )

        return DashboardOut(
            wedding=WeddingHeader(
                name=settings.wedding_name,
                date=format_wedding_date(settings.wedding_date),
            ),
            stats=budget_stats(categories),
            categories=[category_overview(category) for category in categories],
            recent_activity=recent_activity(categories),
            pending_actions=[pending_action_view(action) for action in pending],
        )
