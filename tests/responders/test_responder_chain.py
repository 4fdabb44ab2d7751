"""Tests for ResponseGenerator."""

import asyncio
import random

import pytest

from oraclio.responders.base import BaseResponder, ProviderError, ProviderUnavailableError
from oraclio.responders.chain import ResponseGenerator
from oraclio.responders.local import LocalResponder


class StubResponder(BaseResponder):
    """Remote responder returning a canned reply or raising."""

    def __init__(self, name, reply=None, error=None, delay=0.0):
        super().__init__({"api_key": "k"})
        self.name = name
        self.reply = reply
        self.error = error
        self.delay = delay
        self.calls = 0

    async def generate(self, message, context):
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def local():
    return LocalResponder(rng=random.Random(0))


class TestResponseGenerator:
    """Tests for ResponseGenerator."""

    class TestRespond:
        """SUT: ResponseGenerator.respond"""

        async def test_first_remote_wins(self, local, empty_context):
            first = StubResponder("a", reply="from a")
            second = StubResponder("b", reply="from b")
            generator = ResponseGenerator([first, second], local)

            assert await generator.respond("hi", empty_context) == "from a"
            assert second.calls == 0

        async def test_advances_on_failure(self, local, empty_context):
            first = StubResponder("a", error=ProviderError("boom"))
            second = StubResponder("b", reply="from b")
            generator = ResponseGenerator([first, second], local)

            assert await generator.respond("hi", empty_context) == "from b"
            assert first.calls == 1

        async def test_both_fail_uses_local(self, local, empty_context):
            generator = ResponseGenerator(
                [
                    StubResponder("a", error=ProviderUnavailableError("no key")),
                    StubResponder("b", error=RuntimeError("unexpected")),
                ],
                local,
            )
            assert await generator.respond("100/0", empty_context) == "Division by zero is undefined."

        async def test_local_reply_non_empty(self, local, business_context):
            generator = ResponseGenerator([StubResponder("a", error=ProviderError("down"))], local)
            reply = await generator.respond("hi", business_context)
            assert reply in LocalResponder.greetings("Anna")

        async def test_timeout_advances(self, local, empty_context):
            slow = StubResponder("slow", reply="late", delay=1.0)
            fast = StubResponder("fast", reply="on time")
            generator = ResponseGenerator([slow, fast], local, timeout=0.05)

            assert await generator.respond("hi", empty_context) == "on time"

        async def test_empty_reply_advances(self, local, empty_context):
            generator = ResponseGenerator(
                [StubResponder("a", reply=""), StubResponder("b", reply="from b")],
                local,
            )
            assert await generator.respond("hi", empty_context) == "from b"

        async def test_no_retry(self, local, empty_context):
            failing = StubResponder("a", error=ProviderError("boom"))
            generator = ResponseGenerator([failing], local)
            await generator.respond("hi", empty_context)
            assert failing.calls == 1

        async def test_no_remotes(self, local, empty_context):
            generator = ResponseGenerator([], local)
            assert await generator.respond("2*3", empty_context) == "2 times 3 equals 6."

    class TestTryRemote:
        """SUT: ResponseGenerator.try_remote"""

        async def test_none_when_all_fail(self, local, empty_context):
            generator = ResponseGenerator([StubResponder("a", error=ProviderError("x"))], local)
            assert await generator.try_remote("explain", empty_context) is None

        async def test_returns_remote_reply(self, local, empty_context):
            generator = ResponseGenerator([StubResponder("a", reply="explained")], local)
            assert await generator.try_remote("explain", empty_context) == "explained"
