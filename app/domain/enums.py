"""String enums shared by ORM models, schemas and services."""

from enum import Enum


class VendorStatus(str, Enum):
    """Negotiation status of a prospective vendor."""

    UNCONTACTED = "uncontacted"
    PENDING = "pending"
    INTERESTED = "interested"
    NEGOTIATING = "negotiating"
    CONFIRMED = "confirmed"
    DECLINED = "declined"


class MessageType(str, Enum):
    OUTBOUND = "outbound"
    INBOUND = "inbound"


class EmailType(str, Enum):
    INITIAL_OUTREACH = "initial_outreach"
    FOLLOW_UP = "follow_up"
    NEGOTIATION = "negotiation"
    ACCEPTANCE = "acceptance"
    DECLINE = "decline"
