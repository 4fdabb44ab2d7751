"""Remote responder abstract base class."""

import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from ..models.context import BusinessContext, HistoryTurn
from ..utils.logger import get_app_logger


class ProviderError(RuntimeError):
    """Raised when a remote provider call fails."""


class ProviderUnavailableError(ProviderError):
    """Raised when a remote provider is not configured."""


SECTION_LABELS = {
    "metrics": "Current metrics",
    "sales_data": "Sales data",
    "team_performance": "Team performance",
    "top_customers": "Top customers",
    "recent_activities": "Recent activities",
}

NO_DATA_NOTE = "No specific data was found for this query. You can still answer general questions."


def serialize_sections(context: BusinessContext) -> str:
    """Render the populated context lists as labelled JSON lines."""
    sections = context.non_empty_sections()
    if not sections:
        return NO_DATA_NOTE
    return "\n".join(
        f"- {SECTION_LABELS[name]}: {json.dumps(rows, ensure_ascii=False, default=str)}"
        for name, rows in sections.items()
    )


def history_messages(history: List[HistoryTurn], limit: int) -> List[Dict[str, str]]:
    """Last ``limit`` turns as chat messages; unknown roles are sent as user turns."""
    turns = history[-limit:] if limit > 0 else []
    return [
        {
            "role": turn.role if turn.role in ("user", "assistant") else "user",
            "content": turn.content,
        }
        for turn in turns
    ]


class BaseResponder(ABC):
    """Remote reply provider reached over HTTP."""

    name = "base"

    def __init__(self, config: Dict[str, Any], http_client: Optional[httpx.AsyncClient] = None):
        """
        Initialize the responder.

        Args:
            config: Provider configuration (api_key, model, api_base, timeout, assistant_name)
            http_client: Optional shared client; a short-lived one is used per call otherwise
        """
        self.config = config
        self.api_key: Optional[str] = config.get("api_key")
        self.model: Optional[str] = config.get("model")
        self.api_base: str = (config.get("api_base") or "").rstrip("/")
        self.timeout: float = config.get("timeout", 30.0)
        self.assistant_name: str = config.get("assistant_name", "Oraclio AI")
        self.logger = get_app_logger()
        self._client = http_client

    def is_configured(self) -> bool:
        return bool(self.api_key)

    @abstractmethod
    async def generate(self, message: str, context: BusinessContext) -> str:
        """
        Produce a reply for the message.

        Raises:
            ProviderUnavailableError: no credentials configured
            ProviderError: transport, HTTP or payload failure
        """
        pass

    async def _post_json(self, url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Dict[str, Any]:
        if not self.is_configured():
            raise ProviderUnavailableError(f"{self.name} API key is not configured")

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"{self.name} returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"{self.name} request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"{self.name} returned a malformed payload") from e
