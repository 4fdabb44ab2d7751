"""Bitrix24 REST webhook client."""

import json
import re
from typing import Any, Dict, List, Optional

import httpx

from ..utils.logger import get_app_logger


class CRMError(RuntimeError):
    """Raised when the CRM cannot be reached or returns an error."""


def build_method_url(webhook_url: str, method: str) -> str:
    """
    Resolve the REST endpoint for ``method``.

    Webhook URLs (``https://portal.bitrix24.ru/rest/1/token/``) get the method
    appended. A bare portal domain is expanded to the default webhook path.
    """
    url = re.sub(r"\s+", "", webhook_url)
    if not url:
        raise CRMError("CRM webhook URL is empty")

    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"

    if "/rest/" in url:
        return f"{url.rstrip('/')}/{method}/"
    return f"{url.rstrip('/')}/rest/1/dummy/{method}/"


def encode_params(params: Optional[Dict[str, Any]]) -> Dict[str, str]:
    encoded = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        encoded[key] = json.dumps(value) if isinstance(value, (dict, list)) else str(value)
    return encoded


class BitrixClient:
    """Reads deals and contacts through a Bitrix24 inbound webhook."""

    def __init__(self, timeout: float = 15.0, http_client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self.logger = get_app_logger()
        self._client = http_client

    async def call(self, webhook_url: str, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call a REST method and return its ``result`` field.

        Raises:
            CRMError: transport failure, HTTP error, malformed JSON or an API error payload
        """
        url = build_method_url(webhook_url, method)
        query = encode_params(params)
        self.logger.debug(f"Calling Bitrix24 method {method}")

        try:
            if self._client is not None:
                response = await self._client.get(url, params=query, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=query)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise CRMError(f"Bitrix24 {method} returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise CRMError(f"Bitrix24 {method} request failed: {e}") from e
        except ValueError as e:
            raise CRMError(f"Bitrix24 {method} returned malformed JSON") from e

        if not isinstance(data, dict):
            raise CRMError(f"Bitrix24 {method} returned an unexpected payload")
        if data.get("error"):
            raise CRMError(data.get("error_description") or str(data["error"]))

        return data.get("result")

    async def _list(self, webhook_url: str, method: str, limit: int) -> List[Dict[str, Any]]:
        result = await self.call(webhook_url, method)
        if result is None:
            return []
        if not isinstance(result, list):
            raise CRMError(f"Bitrix24 {method} result is not a list")
        return [item for item in result if isinstance(item, dict)][:limit]

    async def list_deals(self, webhook_url: str, limit: int = 50) -> List[Dict[str, Any]]:
        return await self._list(webhook_url, "crm.deal.list", limit)

    async def list_contacts(self, webhook_url: str, limit: int = 50) -> List[Dict[str, Any]]:
        return await self._list(webhook_url, "crm.contact.list", limit)
