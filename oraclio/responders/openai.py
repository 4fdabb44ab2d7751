"""OpenAI chat completions responder."""

from typing import Any, Dict

from ..models.context import BusinessContext
from .base import BaseResponder, ProviderError, history_messages, serialize_sections


HISTORY_TURNS = 5


class OpenAIResponder(BaseResponder):
    """Remote responder backed by the OpenAI chat completions API."""

    name = "openai"

    def build_system_prompt(self, context: BusinessContext) -> str:
        profile = [
            line for line in (
                f"User: {context.user_name}" if context.user_name else "",
                f"Company: {context.company_name}" if context.company_name else "",
                f"Role: {context.user_role}" if context.user_role else "",
            ) if line
        ]

        return "\n".join([
            f"You are {self.assistant_name}, an advanced business intelligence assistant created for the "
            f"Oraclio platform. Always identify yourself as \"{self.assistant_name}\" when asked who you are.",
            "",
            "You don't have access to real-time information like current date, time, weather, or internet "
            "browsing. You work with business data from user integrations like Bitrix24 CRM systems.",
            "",
            *profile,
            "",
            "Answer the user's question based only on the business data provided below.",
            "- If the data is sufficient, provide a detailed, data-driven answer.",
            "- If the data is insufficient or missing, say so and explain what information would be needed. "
            "Do not invent data or make assumptions.",
            "",
            "Available business data:",
            serialize_sections(context),
        ])

    def build_payload(self, message: str, context: BusinessContext) -> Dict[str, Any]:
        messages = [{"role": "system", "content": self.build_system_prompt(context)}]
        messages.extend(history_messages(context.conversation_history, HISTORY_TURNS))
        messages.append({"role": "user", "content": message})
        return {
            "model": self.model,
            "messages": messages,
            "temperature": 0.7,
            "max_tokens": 800,
        }

    async def generate(self, message: str, context: BusinessContext) -> str:
        data = await self._post_json(
            f"{self.api_base}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            payload=self.build_payload(message, context),
        )

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("openai response has no message content") from e

        if not content:
            raise ProviderError("openai returned an empty reply")
        return content
