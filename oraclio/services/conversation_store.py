"""Conversation store adapter over the chat message repository."""

from typing import List, Optional

from ..db.database_models.chat_message import ChatMessageDO
from ..db.repositories.chat_message import ChatMessageRepository
from ..models.context import HistoryTurn
from ..utils.logger import get_app_logger


class ConversationStore:
    """Persists message/reply exchanges and rebuilds bounded history."""

    def __init__(self, repository: ChatMessageRepository):
        self.repository = repository
        self.logger = get_app_logger()

    async def get_messages(self, user_id: int, limit: Optional[int] = None) -> List[ChatMessageDO]:
        """Stored exchanges for a user in timestamp order, the most recent ``limit`` when given."""
        return self.repository.get_by_user(user_id, limit=limit)

    async def create_message(self, user_id: int, message: str, response: str) -> ChatMessageDO:
        """
        Store one exchange.

        A failed write is logged and the exchange is still returned, without
        an id, so the reply can be delivered.
        """
        record = ChatMessageDO(user_id=user_id, message=message, response=response)
        if self.repository.add(record) is None:
            self.logger.error(f"Exchange for user {user_id} was not persisted")
        return record

    async def get_history(self, user_id: int, limit: int = 20) -> List[HistoryTurn]:
        """Last ``limit`` exchanges flattened into user and assistant turns."""
        turns: List[HistoryTurn] = []
        for record in await self.get_messages(user_id, limit=limit):
            turns.append(HistoryTurn(role="user", content=record.message, timestamp=record.timestamp))
            if record.response:
                turns.append(HistoryTurn(role="assistant", content=record.response, timestamp=record.timestamp))
        return turns
