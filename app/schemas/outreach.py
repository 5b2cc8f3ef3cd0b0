"""Schemas for the outreach workflow: message log, pending actions, workflow requests."""


from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel

# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

class ConversationOut(CamelModel):
    id: str
    vendor_id: str
    message_type: str
    subject: str | None = None
    body: str | None = None
    sent_at: datetime
    created_at: datetime

class ActionOut(CamelModel):
    id: str
    vendor_id: str
    action_type: str
    description: str | None = None
    requires_human_input: bool
    input_needed: str | None = None
    completed: bool
    created_at: datetime
    completed_at: datetime | None = None

class ActionVendorSummary(CamelModel):
    name: str
    contact_email: str
    category_name: str | None = None

class PendingActionOut(ActionOut):
    vendor: ActionVendorSummary | None = None

class NextAction(CamelModel):
    """Outcome of classifying a vendor reply."""

    type: str
    description: str
    requires_human_input: bool
    input_needed: str | None = None

# ---------------------------------------------------------------------------
# Workflow requests
# ---------------------------------------------------------------------------

class OutreachRequest(CamelModel):
    custom_message: str | None = None

class VendorResponseRequest(CamelModel):
    response_content: str = Field(min_length=1)
    price_quoted: float | None = Field(default=None, ge=0)

class FollowUpRequest(CamelModel):
    message: str = Field(min_length=1)

class NegotiationRequest(CamelModel):
    target_price: float = Field(gt=0)
    justification: str = Field(min_length=1)

class AcceptRequest(CamelModel):
    final_price: float = Field(ge=0)

class DeclineRequest(CamelModel):
    reason: str = Field(min_length=1)
