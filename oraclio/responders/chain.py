"""Ordered reply fallback chain."""

import asyncio
from typing import List, Optional

from ..models.context import BusinessContext
from ..utils.logger import get_app_logger
from .base import BaseResponder, ProviderUnavailableError
from .local import LocalResponder


class ResponseGenerator:
    """
    Produces a reply by trying remote responders in priority order.

    Each remote state runs under ``timeout`` seconds and advances on any
    failure, without retry. The local responder is the terminal state and
    is called outside the error handling because it cannot fail.
    """

    def __init__(
        self,
        remotes: List[BaseResponder],
        local: LocalResponder,
        timeout: float = 30.0
    ):
        self.remotes = remotes
        self.local = local
        self.timeout = timeout
        self.logger = get_app_logger()

    async def try_remote(self, message: str, context: BusinessContext) -> Optional[str]:
        """Reply from the first remote responder that succeeds, or None when all fail."""
        for responder in self.remotes:
            try:
                reply = await asyncio.wait_for(responder.generate(message, context), timeout=self.timeout)
            except ProviderUnavailableError as e:
                self.logger.debug(f"Responder {responder.name} unavailable: {e}")
                continue
            except asyncio.TimeoutError:
                self.logger.warning(f"Responder {responder.name} timed out after {self.timeout}s")
                continue
            except Exception as e:
                self.logger.warning(f"Responder {responder.name} failed: {e}")
                continue

            if reply:
                self.logger.debug(f"Reply produced by {responder.name}")
                return reply

        return None

    async def respond(self, message: str, context: BusinessContext) -> str:
        reply = await self.try_remote(message, context)
        if reply is not None:
            return reply

        self.logger.debug("Remote responders exhausted, using local responder")
        return self.local.respond(message, context)
