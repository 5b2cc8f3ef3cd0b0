"""Domain package — all ORM models are imported here so Alembic autogenerate detects them.

Folder intent:
  category.py      — budgeted vendor categories (florist, venue, ...)
  vendor.py        — prospective vendors and their negotiation status
  conversation.py  — inbound/outbound message log
  action.py        — pending actions awaiting a human decision
  enums.py         — VendorStatus, MessageType, EmailType
  mixins.py        — shared UUID primary key and timestamp columns
"""

from app.domain.action import AIAction
from app.domain.category import VendorCategory
from app.domain.conversation import AIConversation
from app.domain.vendor import Vendor

__all__ = [
    "AIAction",
    "AIConversation",
    "Vendor",
    "VendorCategory",
]
