"""Anthropic messages API responder."""

from typing import Any, Dict

from ..models.context import BusinessContext
from .base import BaseResponder, ProviderError, history_messages


HISTORY_TURNS = 10
ANTHROPIC_VERSION = "2023-06-01"

BUSINESS_KEYWORDS = (
    "sales", "revenue", "deals", "customers", "business", "performance",
    "metrics", "analytics", "dashboard", "bitrix", "crm", "team",
    "profit", "expenses", "growth", "targets", "goals",
)


def is_business_query(message: str) -> bool:
    lowered = message.lower()
    return any(keyword in lowered for keyword in BUSINESS_KEYWORDS)


def business_note(context: BusinessContext) -> str:
    """Trailing sentence with CRM deal count and revenue, empty when nothing is known."""
    summary = context.sales_summary()
    deals = summary.get("deals") or 0
    if not deals:
        return ""
    revenue = summary.get("revenue") or 0
    currency = summary.get("currency") or "RUB"
    return (
        f"\n\nBased on your current business data: You have {deals} active deals worth "
        f"{revenue:,} {currency} in your CRM."
    )


class AnthropicResponder(BaseResponder):
    """Remote responder backed by the Anthropic messages API."""

    name = "anthropic"

    def build_system_prompt(self, context: BusinessContext) -> str:
        return (
            f"You are {self.assistant_name}, an intelligent business assistant integrated into the Oraclio "
            "platform. You have access to real business data and can provide comprehensive analysis.\n\n"
            "Current Context:\n"
            f"- User: {context.user_name or 'User'} at {context.company_name or 'their company'}\n"
            f"- Role: {context.user_role or 'Team Member'}\n\n"
            "Always be conversational, helpful, and knowledgeable. Do not invent business data that was "
            "not provided."
        )

    def build_payload(self, message: str, context: BusinessContext) -> Dict[str, Any]:
        messages = history_messages(context.conversation_history, HISTORY_TURNS)
        messages.append({"role": "user", "content": message})
        return {
            "model": self.model,
            "system": self.build_system_prompt(context),
            "max_tokens": 1024,
            "temperature": 0.7,
            "messages": messages,
        }

    async def generate(self, message: str, context: BusinessContext) -> str:
        data = await self._post_json(
            f"{self.api_base}/messages",
            headers={
                "x-api-key": self.api_key or "",
                "anthropic-version": ANTHROPIC_VERSION,
            },
            payload=self.build_payload(message, context),
        )

        try:
            blocks = data["content"]
            text = next(block["text"] for block in blocks if block.get("type") == "text")
        except (KeyError, TypeError, StopIteration) as e:
            raise ProviderError("anthropic response has no text block") from e

        if not text:
            raise ProviderError("anthropic returned an empty reply")

        if is_business_query(message):
            text += business_note(context)
        return text
