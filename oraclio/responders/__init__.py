"""Reply providers and the fallback chain."""

from .base import BaseResponder, ProviderError, ProviderUnavailableError
from .openai import OpenAIResponder
from .anthropic import AnthropicResponder
from .local import LocalResponder, evaluate_arithmetic
from .knowledge import lookup_fact
from .registry import ResponderRegistry, responder_registry
from .chain import ResponseGenerator

__all__ = [
    "BaseResponder",
    "ProviderError",
    "ProviderUnavailableError",
    "OpenAIResponder",
    "AnthropicResponder",
    "LocalResponder",
    "evaluate_arithmetic",
    "lookup_fact",
    "ResponderRegistry",
    "responder_registry",
    "ResponseGenerator",
]
