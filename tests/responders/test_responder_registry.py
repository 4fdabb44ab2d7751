"""Tests for ResponderRegistry."""

import pytest

from oraclio.config import Settings
from oraclio.responders.anthropic import AnthropicResponder
from oraclio.responders.base import BaseResponder
from oraclio.responders.openai import OpenAIResponder
from oraclio.responders.registry import ResponderRegistry


class EchoResponder(BaseResponder):
    name = "echo"

    async def generate(self, message, context):
        return message


@pytest.fixture
def registry():
    return ResponderRegistry()


class TestResponderRegistry:
    """Tests for ResponderRegistry."""

    def test_builtin_responders(self, registry):
        assert registry.list_registered() == {
            "openai": "OpenAIResponder",
            "anthropic": "AnthropicResponder",
        }

    def test_register_is_case_insensitive(self, registry):
        registry.register("Echo", EchoResponder)
        assert registry.is_registered("ECHO")

    def test_unregister(self, registry):
        registry.unregister("anthropic")
        assert not registry.is_registered("anthropic")
        registry.unregister("anthropic")

    def test_create_responder(self, registry):
        responder = registry.create_responder("openai", {"api_key": "k", "model": "m"})
        assert isinstance(responder, OpenAIResponder)
        assert responder.model == "m"

    def test_create_unknown_raises(self, registry):
        with pytest.raises(ValueError, match="Unknown responder"):
            registry.create_responder("nope", {})

    def test_build_chain_follows_setting_order(self, registry):
        settings = Settings(_env_file=None, responder_chain="anthropic,openai")
        chain = registry.build_chain(settings)
        assert [type(r) for r in chain] == [AnthropicResponder, OpenAIResponder]

    def test_build_chain_skips_unknown(self, registry):
        settings = Settings(_env_file=None, responder_chain="mystery,openai")
        chain = registry.build_chain(settings)
        assert [r.name for r in chain] == ["openai"]
