"""Chat pipeline shared by the real-time and request/response paths."""

import asyncio
from typing import Dict, Tuple

from ..db.database_models.chat_message import ChatMessageDO
from ..responders.chain import ResponseGenerator
from ..utils.logger import get_app_logger
from .context_assembler import ContextAssembler
from .conversation_store import ConversationStore


class ChatService:
    """
    Context assembly, reply generation and storage for one message.

    Messages from the same user are processed one at a time, whichever
    transport they arrive on; different users interleave freely.
    """

    def __init__(self, assembler: ContextAssembler, generator: ResponseGenerator, store: ConversationStore):
        self.assembler = assembler
        self.generator = generator
        self.store = store
        self.logger = get_app_logger()
        # user id -> (lock, callers holding or waiting on it)
        self._locks: Dict[int, Tuple[asyncio.Lock, int]] = {}

    def _acquire_slot(self, user_id: int) -> asyncio.Lock:
        lock, pending = self._locks.get(user_id, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[user_id] = (lock, pending + 1)
        return lock

    def _release_slot(self, user_id: int):
        lock, pending = self._locks[user_id]
        if pending <= 1:
            del self._locks[user_id]
        else:
            self._locks[user_id] = (lock, pending - 1)

    async def process(self, user_id: int, message: str) -> ChatMessageDO:
        lock = self._acquire_slot(user_id)
        try:
            async with lock:
                context = await self.assembler.assemble(user_id)
                response = await self.generator.respond(message, context)
                record = await self.store.create_message(user_id, message, response)
                self.logger.debug(f"Processed message for user {user_id}")
                return record
        finally:
            self._release_slot(user_id)

    async def get_history(self, user_id: int):
        return await self.store.get_messages(user_id)
