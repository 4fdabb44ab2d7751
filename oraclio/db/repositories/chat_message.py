"""Chat message repository for database operations."""

from typing import Optional, List
from .base import BaseRepository
from ..database_models.chat_message import ChatMessageDO


class ChatMessageRepository(BaseRepository):
    """Repository for chat message exchanges."""

    def add(self, message: ChatMessageDO) -> Optional[int]:
        """
        Add a new message/response pair.

        Args:
            message: ChatMessageDO instance

        Returns:
            Message ID if successful, None otherwise
        """
        try:
            result = self.conn.execute("""
                INSERT INTO chat_messages (id, user_id, message, response, timestamp)
                VALUES (nextval('chat_messages_id_seq'), ?, ?, ?, ?)
                RETURNING id
            """, [
                message.user_id,
                message.message,
                message.response,
                message.timestamp
            ]).fetchone()

            message_id = result[0] if result else None
            if message_id:
                self.conn.commit()
                message.id = message_id
                self.logger.debug(f"Added chat message {message_id} for user {message.user_id}")
            return message_id
        except Exception as e:
            self.logger.error(f"Failed to add chat message: {e}")
            return None

    def get_by_user(self, user_id: int, limit: Optional[int] = None) -> List[ChatMessageDO]:
        """
        Get messages for a user.

        Args:
            user_id: User ID
            limit: Maximum number of most recent messages to return

        Returns:
            List of ChatMessageDO instances (chronological order)
        """
        try:
            sql = """
                SELECT id, user_id, message, response, timestamp
                FROM chat_messages
                WHERE user_id = ?
                ORDER BY timestamp DESC, id DESC
            """
            params = [user_id]
            if limit is not None:
                sql += " LIMIT ?"
                params.append(limit)

            results = self.conn.execute(sql, params).fetchall()

            messages = [
                ChatMessageDO(
                    id=row[0],
                    user_id=row[1],
                    message=row[2],
                    response=row[3],
                    timestamp=row[4]
                )
                for row in results
            ]

            # Reverse to get chronological order
            messages.reverse()
            return messages
        except Exception as e:
            self.logger.error(f"Failed to get chat messages for user {user_id}: {e}")
            return []
