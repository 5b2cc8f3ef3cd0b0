"""Email drafting and delivery schemas."""


from typing import Literal, Optional

from pydantic import Field

from app.domain.enums import EmailType
from app.schemas.category import CategoryOut
from app.schemas.common import CamelModel
from app.schemas.vendor import VendorOut

# ---------------------------------------------------------------------------
# Drafting (OpenAI)
# ---------------------------------------------------------------------------

class WeddingDetails(CamelModel):
    planner_name: str
    date: str
    guest_count: int
    style: str
    budget: float

class PriceNegotiation(CamelModel):
    current_price: float
    target_price: float
    justification: str

class EmailContext(CamelModel):
    vendor: VendorOut
    category: CategoryOut
    wedding_details: WeddingDetails
    email_type: EmailType
    custom_instructions: Optional[str] = None
    price_negotiation: Optional[PriceNegotiation] = None

class GeneratedEmail(CamelModel):
    subject: str
    body: str
    tone: Literal["professional", "friendly", "formal"] = "professional"
    estimated_response_time: str = "1-2 business days"

class ResponseAnalysis(CamelModel):
    sentiment: Literal["positive", "negative", "neutral"]
    price_quoted: Optional[float] = None
    availability: Literal["available", "unavailable", "checking"]
    next_action: str

class AnalysisResult(CamelModel):
    analysis: ResponseAnalysis
    suggested_reply: Optional[GeneratedEmail] = None

# ---------------------------------------------------------------------------
# Delivery (Resend)
# ---------------------------------------------------------------------------

class EmailRecipient(CamelModel):
    email: str
    name: Optional[str] = None

class EmailAttachment(CamelModel):
    content: str  # Base64 encoded
    filename: str
    type: Optional[str] = None

class SendEmailOptions(CamelModel):
    to: EmailRecipient
    sender: Optional[EmailRecipient] = Field(default=None, alias="from")
    reply_to: Optional[EmailRecipient] = None
    subject: str
    text: Optional[str] = None
    html: Optional[str] = None
    attachments: Optional[list[EmailAttachment]] = None
    categories: Optional[list[str]] = None
    custom_args: Optional[dict[str, str]] = None

class EmailDeliveryResult(CamelModel):
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None
    status_code: Optional[int] = None

class ConfigurationStatus(CamelModel):
    email_delivery: bool
    ai: bool
    errors: list[str] = []

# ---------------------------------------------------------------------------
# HTTP request bodies
# ---------------------------------------------------------------------------

class GenerateEmailRequest(CamelModel):
    vendor_id: str
    email_type: EmailType = EmailType.INITIAL_OUTREACH
    custom_instructions: Optional[str] = None
    price_negotiation: Optional[PriceNegotiation] = None

class EmailVariationsRequest(GenerateEmailRequest):
    count: int = Field(default=3, ge=1, le=5)

class AnalyzeResponseRequest(CamelModel):
    vendor_id: str
    vendor_response: str = Field(min_length=1)

class SendGeneratedEmailRequest(CamelModel):
    vendor_id: str
    email: GeneratedEmail

class BulkSendRequest(CamelModel):
    vendor_ids: list[str] = Field(min_length=1)
    email_type: EmailType = EmailType.INITIAL_OUTREACH
    custom_instructions: Optional[str] = None

class BulkSendItemResult(CamelModel):
    vendor_id: str
    result: EmailDeliveryResult

class ConfigurationCheckRequest(CamelModel):
    test_email: str = Field(min_length=3)

