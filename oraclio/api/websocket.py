"""WebSocket API for real-time chat delivery.

Server frames: ``welcome``, ``message_response``, ``typing_stop``, ``error``,
``ping`` and ``pong``. Client frames: chat frames ``{message, attachments?,
scenario?}``, ``ping`` and ``pong``.

Liveness is checked with JSON frames rather than protocol pings. The
heartbeat sends ``{"type": "ping"}`` every interval and clients must reply
``{"type": "pong"}``; any inbound frame counts, and a connection silent for a
whole interval is closed on the next tick.
"""

import asyncio
import json
from typing import Any, Dict, Set

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from ..models.chat import ChatFrame
from ..realtime.registry import Connection, ConnectionRegistry, timestamp
from ..services.chat_service import ChatService
from ..utils.logger import get_app_logger

router = APIRouter(tags=["websocket"])

# Global instances (will be set by main.py)
chat_service: ChatService = None
connection_registry: ConnectionRegistry = None
logger = get_app_logger()

# Strong references to in-flight chat tasks
_chat_tasks: Set[asyncio.Task] = set()


def error_frame(message: str) -> Dict[str, Any]:
    return {"type": "error", "message": message, "timestamp": timestamp()}


async def handle_chat_frame(user_id: int, connection: Connection, frame: ChatFrame):
    """
    Run one chat frame through the pipeline and push the reply.

    The reply is dropped when ``connection`` is no longer the user's
    registered connection.
    """
    try:
        record = await chat_service.process(user_id, frame.message)
    except Exception as e:
        logger.error(f"Error processing chat message for user {user_id}: {e}")
        if connection_registry.is_current(user_id, connection):
            await connection.send(error_frame("Failed to process message"))
        return

    if not connection_registry.is_current(user_id, connection):
        logger.info(f"Connection for user {user_id} replaced or closed, discarding reply")
        return

    await connection.send({
        "type": "message_response",
        "data": {
            "id": record.id,
            "message": record.message,
            "response": record.response,
            "timestamp": record.timestamp.isoformat(),
            "attachments": frame.attachments_payload(),
            "scenario": frame.scenario,
        },
        "timestamp": timestamp(),
    })
    await connection.send({"type": "typing_stop", "timestamp": timestamp()})


@router.websocket("/ws/chat/{user_id}")
async def chat_websocket(websocket: WebSocket, user_id: int):
    """
    WebSocket endpoint for a user's chat session.

    Args:
        websocket: WebSocket connection
        user_id: User ID owning the session
    """
    await websocket.accept()
    logger.info(f"WebSocket connection accepted for user: {user_id}")

    connection = Connection(user_id, websocket)
    previous = connection_registry.register(user_id, connection)
    if previous is not None:
        await previous.terminate()

    try:
        await connection.send({
            "type": "welcome",
            "message": "Connected to Oraclio AI",
            "timestamp": timestamp(),
        })

        while True:
            data = await websocket.receive_text()
            connection.mark_alive()

            try:
                payload = json.loads(data)
            except json.JSONDecodeError:
                await connection.send(error_frame("Invalid JSON message"))
                continue

            if not isinstance(payload, dict):
                await connection.send(error_frame("Message must be a JSON object"))
                continue

            frame_type = payload.get("type")
            if frame_type == "ping":
                await connection.send({"type": "pong", "timestamp": timestamp()})
                continue
            if frame_type == "pong":
                continue

            try:
                frame = ChatFrame.model_validate(payload)
            except ValidationError as e:
                await connection.send(error_frame(f"Invalid chat message: {e.errors()[0]['msg']}"))
                continue

            task = asyncio.create_task(handle_chat_frame(user_id, connection, frame))
            _chat_tasks.add(task)
            task.add_done_callback(_chat_tasks.discard)

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected for user: {user_id}")

    except Exception as e:
        logger.error(f"WebSocket error for user {user_id}: {e}")

    finally:
        connection_registry.deregister(user_id, connection)
        logger.info(f"WebSocket connection closed for user: {user_id}")
