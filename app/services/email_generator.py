"""Vendor email drafting — OpenAI chat completions with template fallback.

Two capabilities:
1. **Drafting** — writes outreach, follow-up, negotiation, acceptance and
   decline emails from an :class:`EmailContext`.
2. **Reply analysis** — reads a vendor's reply and extracts sentiment,
   availability, quoted price and a suggested next step.

Neither ever fails the caller: when no API key is configured, or the API call
errors, the built-in templates and keyword analysis are used instead.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from app.core.config import settings
from app.domain.enums import EmailType
from app.schemas.email import (
    AnalysisResult,
    EmailContext,
    GeneratedEmail,
    ResponseAnalysis,
)

logger = logging.getLogger(__name__)

# ── Prompts ───────────────────────────────────────────────────────────────

EMAIL_SYSTEM_PROMPT = """You are an AI assistant helping a wedding planner send professional, warm, and effective emails to vendors.

Your emails should be:
- Professional yet personable
- Clear and specific about requirements
- Respectful of the vendor's time
- Include relevant wedding details
- Have clear calls to action

Always respond with a JSON object containing:
{
  "subject": "Email subject line",
  "body": "Full email body with proper formatting and line breaks",
  "tone": "professional|friendly|formal",
  "estimatedResponseTime": "Expected response timeframe"
}

Use proper email etiquette, be concise but informative, and maintain a warm, professional tone throughout."""

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert at analyzing vendor communications for wedding planning. "
    "Extract key information and suggest appropriate next actions."
)

_TASKS: dict[EmailType, str] = {
    EmailType.INITIAL_OUTREACH: (
        "Write an initial inquiry email asking about availability, pricing, and services. "
        "Be professional, provide key wedding details, and request a consultation or meeting."
    ),
    EmailType.FOLLOW_UP: (
        "Write a polite follow-up email. Assume the vendor hasn't responded to a previous "
        "inquiry. Be understanding but express continued interest."
    ),
    EmailType.ACCEPTANCE: (
        "Accept their proposal and move forward with booking. Express enthusiasm and "
        "outline next steps for contracts and deposits."
    ),
    EmailType.DECLINE: (
        "Politely decline their services. Be gracious, professional, and leave the door "
        "open for future opportunities."
    ),
}

_VARIATION_TONES = ("formal", "friendly", "balanced")

# Substring cues; unavailable must be tested before positive ("unavailable" contains "available")
_UNAVAILABLE_CUES = re.compile(r"unavailable|not available|booked")
_POSITIVE_CUES = re.compile(r"yes|available|interested")
_NEGATIVE_CUES = re.compile(r"\bno\b")
_PRICE_PATTERN = re.compile(r"\$[\d,]+")

DEFAULT_RESPONSE_TIME = "1-2 business days"


def format_money(amount: float) -> str:
    """Thousands separators, no trailing .0, at most three decimals."""
    if float(amount).is_integer():
        return f"{amount:,.0f}"
    return f"{round(amount, 3):,}"


def _type_label(email_type: EmailType | str) -> str:
    value = email_type.value if isinstance(email_type, EmailType) else email_type
    return value.replace("_", " ", 1)


# ── Fallback templates ────────────────────────────────────────────────────

def fallback_email(context: EmailContext) -> GeneratedEmail:
    """Deterministic template email for the context's type."""
    vendor = context.vendor
    category = context.category
    details = context.wedding_details
    service = category.name.lower()

    if context.email_type is EmailType.INITIAL_OUTREACH:
        subject = f"Wedding Services Inquiry - {category.name}"
        vision = (
            f"Our Vision for {category.name}:\n{category.notes}\n\n" if category.notes else ""
        )
        portfolio = " that align with our vision" if category.notes else ""
        body = (
            f"Dear {vendor.name} Team,\n\n"
            f"I hope this email finds you well. I am currently planning a wedding for "
            f"{details.date} and am reaching out to inquire about your {service} services.\n\n"
            f"Event Details:\n"
            f"- Date: {details.date}\n"
            f"- Guest Count: {details.guest_count}\n"
            f"- Style: {details.style}\n"
            f"- Budget Range for {category.name}: "
            f"{format_money(round(category.budget * 0.8))} - {format_money(category.budget)}\n\n"
            f"{vision}"
            f"Could you please provide:\n"
            f"1. Your availability for this date\n"
            f"2. Package options and pricing within our budget range\n"
            f"3. Portfolio examples of recent work{portfolio}\n\n"
            f"I would love to schedule a consultation to discuss our vision in more detail. "
            f"Please let me know your availability for a call or meeting.\n\n"
            f"Thank you for your time, and I look forward to hearing from you.\n\n"
            f"Best regards,\n{details.planner_name}"
        )
    elif context.email_type is EmailType.FOLLOW_UP:
        subject = f"Follow-up: Wedding Services Inquiry - {category.name}"
        vision = (
            f"\n\nOur specific vision for this category:\n{category.notes}" if category.notes else ""
        )
        body = (
            f"Dear {vendor.name} Team,\n\n"
            f"I hope you're doing well. I wanted to follow up on my previous email regarding "
            f"{service} services for our wedding on {details.date}.\n\n"
            f"I understand you may be busy, but I wanted to check if you had a chance to review "
            f"our inquiry. We're excited about the possibility of working with you and would "
            f"appreciate any information you can share about your availability and services.\n\n"
            f"As a reminder, our budget for {category.name} is {format_money(category.budget)}.{vision}\n\n"
            f"If you need any additional details about our event, please don't hesitate to ask.\n\n"
            f"Thank you for your time, and I look forward to hearing from you soon.\n\n"
            f"Best regards,\n{details.planner_name}"
        )
    elif context.email_type is EmailType.NEGOTIATION:
        negotiation = context.price_negotiation
        current_price = (negotiation.current_price if negotiation else 0) or vendor.price
        target_price = (negotiation.target_price if negotiation else 0) or current_price * 0.9
        justification = (negotiation.justification if negotiation else "") or "budget considerations"
        subject = "Re: Wedding Services - Budget Discussion"
        body = (
            f"Dear {vendor.name},\n\n"
            f"Thank you for your proposal for our wedding {service} services. We're very "
            f"impressed with your work and would love to move forward.\n\n"
            f"After reviewing our overall wedding budget, we were wondering if there might be "
            f"some flexibility in the pricing. Our current budget allocation for {service} is "
            f"${format_money(target_price)}, given {justification}.\n\n"
            f"We understand the value of quality service and are hoping we can find a solution "
            f"that works for both of us. Perhaps we could discuss:\n"
            f"- Alternative package options\n"
            f"- Adjustments to the service scope\n"
            f"- Payment plan arrangements\n\n"
            f"We're committed to working with you and hope we can reach an agreement that works "
            f"for everyone.\n\n"
            f"Thank you for your understanding, and I look forward to your response.\n\n"
            f"Best regards,\n{details.planner_name}"
        )
    elif context.email_type is EmailType.ACCEPTANCE:
        subject = "Excited to Move Forward - Wedding Services Confirmation"
        body = (
            f"Dear {vendor.name},\n\n"
            f"Wonderful news! We're thrilled to confirm that we'd like to move forward with your "
            f"{service} services for our wedding on {details.date}.\n\n"
            f"Your proposal aligns perfectly with our vision, and we're excited to have you as "
            f"part of our special day.\n\n"
            f"Next steps:\n"
            f"- Please send over the contract for review\n"
            f"- Let us know about deposit requirements and payment schedule\n"
            f"- We'd love to schedule a detailed planning meeting at your earliest convenience\n\n"
            f"Thank you for your patience throughout this process. We can't wait to start "
            f"working together!\n\n"
            f"Best regards,\n{details.planner_name}"
        )
    else:
        subject = "Thank You - Wedding Services Decision"
        body = (
            f"Dear {vendor.name},\n\n"
            f"Thank you so much for taking the time to provide a proposal for our wedding "
            f"{service} services. We truly appreciate the effort you put into understanding our "
            f"needs and creating a thoughtful proposal.\n\n"
            f"After careful consideration, we have decided to go with a different vendor whose "
            f"services more closely align with our current needs and budget constraints.\n\n"
            f"This was not an easy decision, as we were impressed by your professionalism and "
            f"the quality of your work. We hope there may be opportunities to work together in "
            f"the future.\n\n"
            f"Thank you again for your time and consideration. We wish you all the best with "
            f"your business.\n\n"
            f"Warm regards,\n{details.planner_name}"
        )

    return GeneratedEmail(
        subject=subject,
        body=body,
        tone="professional",
        estimated_response_time=DEFAULT_RESPONSE_TIME,
    )


def build_prompt(context: EmailContext) -> str:
    """User prompt describing the vendor, wedding and the email to write."""
    vendor = context.vendor
    details = context.wedding_details
    prompt = (
        "Generate a professional email for a wedding planner.\n\n"
        f"VENDOR: {vendor.name}\n"
        f"CATEGORY: {context.category.name}\n"
        f"VENDOR EMAIL: {vendor.contact_email}\n\n"
        "WEDDING DETAILS:\n"
        f"- Planner: {details.planner_name}\n"
        f"- Date: {details.date}\n"
        f"- Guests: {details.guest_count}\n"
        f"- Style: {details.style}\n"
        f"- Category Budget: ${format_money(details.budget)}\n\n"
        f"EMAIL TYPE: {_type_label(context.email_type).upper()}"
    )

    if context.email_type is EmailType.NEGOTIATION:
        negotiation = context.price_negotiation
        current = format_money(negotiation.current_price) if negotiation else format_money(vendor.price)
        target = format_money(negotiation.target_price) if negotiation else "not specified"
        justification = negotiation.justification if negotiation else "budget considerations"
        prompt += (
            f"\n\nTASK: Write a diplomatic price negotiation email. "
            f"Current price: ${current}, Target: ${target}.\n"
            f"JUSTIFICATION: {justification}\n"
            "Be diplomatic and offer flexibility on terms while staying within budget."
        )
    else:
        prompt += f"\n\nTASK: {_TASKS[context.email_type]}"

    if context.custom_instructions:
        prompt += f"\n\nADDITIONAL INSTRUCTIONS: {context.custom_instructions}"

    return prompt


def parse_email_response(response: str, email_type: EmailType | str) -> GeneratedEmail:
    """Turn a model reply into a GeneratedEmail; plain text becomes the body."""
    default_subject = f"Wedding Services Inquiry - {_type_label(email_type)}"
    try:
        parsed = json.loads(response)
    except json.JSONDecodeError:
        parsed = None

    if not isinstance(parsed, dict):
        return GeneratedEmail(subject=default_subject, body=response)

    tone = parsed.get("tone")
    return GeneratedEmail(
        subject=parsed.get("subject") or default_subject,
        body=parsed.get("body") or response,
        tone=tone if tone in ("professional", "friendly", "formal") else "professional",
        estimated_response_time=parsed.get("estimatedResponseTime") or DEFAULT_RESPONSE_TIME,
    )


def fallback_analysis(vendor_response: str) -> AnalysisResult:
    """Keyword analysis of a vendor reply, used without (or after failure of) the model."""
    lowered = vendor_response.lower()

    if _UNAVAILABLE_CUES.search(lowered):
        sentiment, availability = "negative", "unavailable"
    elif _POSITIVE_CUES.search(lowered):
        sentiment, availability = "positive", "available"
    elif _NEGATIVE_CUES.search(lowered):
        sentiment, availability = "negative", "unavailable"
    else:
        sentiment, availability = "neutral", "checking"

    match = _PRICE_PATTERN.search(vendor_response)
    digits = match.group(0).replace("$", "").replace(",", "") if match else ""
    price_quoted = float(digits) if digits else None

    if availability == "available":
        next_action = "Schedule consultation or request detailed proposal"
    elif availability == "unavailable":
        next_action = "Thank vendor and mark as unavailable"
    else:
        next_action = "Request clarification on availability and pricing"

    return AnalysisResult(
        analysis=ResponseAnalysis(
            sentiment=sentiment,
            price_quoted=price_quoted,
            availability=availability,
            next_action=next_action,
        )
    )


class EmailGenerator:
    """Thin async wrapper around OpenAI for drafting vendor emails."""

    def __init__(self, client: Optional[AsyncOpenAI] = None) -> None:
        if client is None and settings.ai_enabled:
            client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=settings.openai_timeout,
            )
        self.client = client
        self.model = settings.openai_model
        self.max_tokens = settings.openai_max_tokens

    def is_configured(self) -> bool:
        return self.client is not None

    # ── Core OpenAI call ──────────────────────────────────────────────────

    async def _complete(
        self, system_prompt: str, user_message: str, *, temperature: float, max_tokens: int
    ) -> str:
        logger.info(
            "Calling OpenAI model=%s, input_length=%d", self.model, len(user_message)
        )
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        content = response.choices[0].message.content
        if not content:
            raise ValueError("Empty response from OpenAI")
        return content

    # ── Public methods ────────────────────────────────────────────────────

    async def generate_email(self, context: EmailContext) -> GeneratedEmail:
        """Draft an email for the context, falling back to the template on any failure."""
        if not self.is_configured():
            logger.warning("OpenAI not configured, using fallback template")
            return fallback_email(context)

        try:
            content = await self._complete(
                EMAIL_SYSTEM_PROMPT,
                build_prompt(context),
                temperature=0.7,
                max_tokens=self.max_tokens,
            )
        except (OpenAIError, ValueError) as exc:
            logger.error("Error generating email with AI: %s", exc)
            logger.info("Falling back to template email")
            return fallback_email(context)

        return parse_email_response(content, context.email_type)

    async def generate_email_variations(
        self, context: EmailContext, count: int = 3
    ) -> list[GeneratedEmail]:
        """Draft ``count`` variations one after another, each asked for a different tone."""
        variations: list[GeneratedEmail] = []
        for i in range(count):
            tone = _VARIATION_TONES[min(i, len(_VARIATION_TONES) - 1)]
            instructions = (
                f"{context.custom_instructions or ''} "
                f"Create variation {i + 1} with a {tone} tone."
            )
            variation_context = context.model_copy(update={"custom_instructions": instructions})
            variations.append(await self.generate_email(variation_context))
        return variations

    async def analyze_response_and_suggest_reply(
        self, vendor_response: str, context: EmailContext
    ) -> AnalysisResult:
        if not self.is_configured():
            return fallback_analysis(vendor_response)

        prompt = (
            "Analyze this vendor response and provide insights:\n\n"
            f'VENDOR RESPONSE: "{vendor_response}"\n\n'
            "Provide a JSON response with:\n"
            "{\n"
            '  "analysis": {\n'
            '    "sentiment": "positive|negative|neutral",\n'
            '    "priceQuoted": number or null,\n'
            '    "availability": "available|unavailable|checking",\n'
            '    "nextAction": "suggested next step"\n'
            "  }\n"
            "}"
        )
        try:
            content = await self._complete(
                ANALYSIS_SYSTEM_PROMPT, prompt, temperature=0.3, max_tokens=500
            )
            return AnalysisResult.model_validate(json.loads(content))
        except (OpenAIError, ValueError) as exc:
            # json.JSONDecodeError and pydantic.ValidationError are both ValueErrors
            logger.error("Error analyzing vendor response for %s: %s", context.vendor.name, exc)

        return fallback_analysis(vendor_response)


def get_email_generator() -> EmailGenerator:
    """Factory used as a FastAPI dependency (overridable in tests)."""
    return EmailGenerator()
