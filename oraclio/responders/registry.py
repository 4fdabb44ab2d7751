"""Responder Registry - remote responder registration and creation."""

from typing import Dict, List, Optional, Type

import httpx

from ..utils.logger import get_app_logger
from .anthropic import AnthropicResponder
from .base import BaseResponder
from .openai import OpenAIResponder


class ResponderRegistry:
    """Registry of remote responder classes."""

    def __init__(self):
        self._responders: Dict[str, Type[BaseResponder]] = {}
        self.logger = get_app_logger()

        self._register_builtin_responders()

    def _register_builtin_responders(self):
        self.register("openai", OpenAIResponder)
        self.register("anthropic", AnthropicResponder)

    def register(self, name: str, responder_class: Type[BaseResponder]):
        """
        Register a responder class.

        Args:
            name: Responder name
            responder_class: Responder class
        """
        name_lower = name.lower()
        self._responders[name_lower] = responder_class
        self.logger.debug(f"Registered responder: {name_lower} -> {responder_class.__name__}")

    def unregister(self, name: str):
        name_lower = name.lower()
        if name_lower in self._responders:
            del self._responders[name_lower]
            self.logger.debug(f"Unregistered responder: {name_lower}")

    def is_registered(self, name: str) -> bool:
        return name.lower() in self._responders

    def create_responder(
        self,
        name: str,
        config: dict,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> BaseResponder:
        """
        Create a responder instance.

        Args:
            name: Responder name
            config: Responder configuration
            http_client: Optional shared HTTP client

        Returns:
            Responder instance

        Raises:
            ValueError: If the responder is not registered
        """
        name_lower = name.lower()
        if name_lower not in self._responders:
            available = ", ".join(self._responders.keys())
            raise ValueError(f"Unknown responder: {name}. Available: {available}")

        responder_class = self._responders[name_lower]
        return responder_class(config, http_client=http_client)

    def list_registered(self) -> Dict[str, str]:
        return {
            name: responder_class.__name__
            for name, responder_class in self._responders.items()
        }

    def build_chain(self, settings, http_client: Optional[httpx.AsyncClient] = None) -> List[BaseResponder]:
        """
        Instantiate the remote responders named by the chain setting, in order.

        Unknown names are logged and skipped.
        """
        chain = []
        for name in settings.get_enabled_responders():
            if not self.is_registered(name):
                self.logger.warning(f"Skipping unknown responder in chain: {name}")
                continue
            chain.append(self.create_responder(name, settings.get_responder_config(name), http_client))
        return chain


# Global singleton
responder_registry = ResponderRegistry()
