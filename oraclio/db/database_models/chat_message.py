"""Chat message database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class ChatMessageDO:
    """Chat message data object - maps to chat_messages table."""

    user_id: int
    message: str
    response: Optional[str] = None
    id: Optional[int] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)
