"""Chat REST API routes - V1"""

from fastapi import APIRouter, Depends, HTTPException

from ...db.database_models.chat_message import ChatMessageDO
from ...models.chat import (
    ChatHistoryResponse,
    ChatMessageResponse,
    ChatReplyResponse,
    ConnectionStatusResponse,
    SendMessageRequest,
)
from ...realtime.registry import ConnectionRegistry
from ...services.chat_service import ChatService
from ...utils.logger import get_app_logger

router = APIRouter(prefix="/api/v1/chat", tags=["chat-v1"])

# Global instances (will be set by main.py)
chat_service: ChatService = None
connection_registry: ConnectionRegistry = None
logger = get_app_logger()


def get_chat_service() -> ChatService:
    """Dependency to get chat service instance."""
    if chat_service is None:
        raise HTTPException(status_code=500, detail="Chat service not initialized")
    return chat_service


def get_connection_registry() -> ConnectionRegistry:
    """Dependency to get connection registry instance."""
    if connection_registry is None:
        raise HTTPException(status_code=500, detail="Connection registry not initialized")
    return connection_registry


def to_message_response(record: ChatMessageDO) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=record.id,
        user_id=record.user_id,
        message=record.message,
        response=record.response,
        timestamp=record.timestamp,
    )


@router.get("/messages/{user_id}", response_model=ChatHistoryResponse)
async def get_messages(user_id: int, service: ChatService = Depends(get_chat_service)):
    """
    Get stored chat history for a user.

    Args:
        user_id: User ID

    Returns:
        Stored exchanges in timestamp order
    """
    records = await service.get_history(user_id)
    messages = [to_message_response(record) for record in records]
    return ChatHistoryResponse(messages=messages, total=len(messages))


@router.post("/messages", response_model=ChatReplyResponse)
async def send_message(request: SendMessageRequest, service: ChatService = Depends(get_chat_service)):
    """
    Request/response chat path, used when no live connection is open.

    Args:
        request: Message and user id

    Returns:
        The reply and the stored exchange

    Raises:
        HTTPException: If the pipeline fails
    """
    try:
        record = await service.process(request.user_id, request.message)
    except Exception as e:
        logger.error(f"Chat processing failed for user {request.user_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to process chat: {str(e)}")

    return ChatReplyResponse(response=record.response, message=to_message_response(record))


@router.get("/connections/{user_id}", response_model=ConnectionStatusResponse)
async def get_connection_status(
    user_id: int,
    registry: ConnectionRegistry = Depends(get_connection_registry)
):
    """Whether the user has a live real-time connection."""
    return ConnectionStatusResponse(user_id=user_id, connected=registry.is_user_connected(user_id))
