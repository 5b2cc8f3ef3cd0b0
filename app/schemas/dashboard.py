"""Dashboard read models — everything here is derived on read from categories and vendors."""


from datetime import date

from app.schemas.common import CamelModel
from app.schemas.outreach import PendingActionOut

class StatusBadge(CamelModel):
    color: str
    icon: str
    label: str

class BudgetStats(CamelModel):
    total_budget: float
    total_spent: float
    remaining: float
    categories_complete: int
    total_categories: int
    total_vendors: int
    vendors_needing_input: int

class CategoryOverviewItem(CamelModel):
    id: str
    name: str
    budget: float
    confirmed: bool
    status_text: str
    selected_vendor_name: str | None = None
    selected_vendor_price: float | None = None
    vendor_count: int
    contacted_count: int
    progress_percentage: int

class ActivityItem(CamelModel):
    vendor_id: str
    vendor: str
    category: str
    status: str
    last_contact: date
    price: float
    action: str
    time_ago: str
    badge: StatusBadge

class WeddingHeader(CamelModel):
    name: str
    date: str

class DashboardOut(CamelModel):
    wedding: WeddingHeader
    stats: BudgetStats
    categories: list[CategoryOverviewItem]
    recent_activity: list[ActivityItem]
    pending_actions: list[PendingActionOut]
