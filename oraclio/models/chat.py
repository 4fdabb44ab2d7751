"""Chat API and real-time frame models."""

from datetime import datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field


class SendMessageRequest(BaseModel):
    """Request model for the request/response chat path."""

    message: str = Field(description="User message", min_length=1)
    user_id: int = Field(description="User ID")


class ChatMessageResponse(BaseModel):
    """Response model for a stored exchange."""

    id: Optional[int] = Field(None, description="Message ID")
    user_id: int = Field(description="User ID")
    message: str = Field(description="User message")
    response: Optional[str] = Field(None, description="Assistant reply")
    timestamp: datetime = Field(description="Exchange timestamp")


class ChatReplyResponse(BaseModel):
    """Response model for POST /chat/messages."""

    response: str = Field(description="Assistant reply")
    message: ChatMessageResponse = Field(description="Stored exchange")


class ChatHistoryResponse(BaseModel):
    messages: List[ChatMessageResponse]
    total: int


class ConnectionStatusResponse(BaseModel):
    user_id: int
    connected: bool


class Attachment(BaseModel):
    name: str
    type: str
    size: int
    url: str


class ChatFrame(BaseModel):
    """Inbound chat frame on the duplex channel."""

    message: str = Field(min_length=1)
    attachments: List[Attachment] = Field(default_factory=list)
    scenario: Optional[str] = None

    def attachments_payload(self) -> List[Dict[str, Any]]:
        return [a.model_dump() for a in self.attachments]
