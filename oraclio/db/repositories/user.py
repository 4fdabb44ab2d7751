"""User repository for database operations."""

from typing import Optional
from .base import BaseRepository
from ..database_models.user import UserDO


class UserRepository(BaseRepository):
    """Repository for User reads and inserts."""

    def create(self, user: UserDO) -> Optional[int]:
        """
        Create a new user record.

        Args:
            user: UserDO instance

        Returns:
            User ID if successful, None otherwise
        """
        try:
            result = self.conn.execute("""
                INSERT INTO users (id, email, first_name, last_name, company, company_name, role, created_at)
                VALUES (nextval('users_id_seq'), ?, ?, ?, ?, ?, ?, ?)
                RETURNING id
            """, [
                user.email,
                user.first_name,
                user.last_name,
                user.company,
                user.company_name,
                user.role,
                user.created_at
            ]).fetchone()

            user_id = result[0] if result else None
            if user_id:
                self.conn.commit()
                user.id = user_id
                self.logger.info(f"Created user record: {user_id}")
            return user_id
        except Exception as e:
            self.logger.error(f"Failed to create user: {e}")
            return None

    def get(self, user_id: int) -> Optional[UserDO]:
        """
        Get user by ID.

        Args:
            user_id: User ID

        Returns:
            UserDO instance or None
        """
        try:
            result = self.conn.execute("""
                SELECT id, email, first_name, last_name, company, company_name, role, created_at
                FROM users
                WHERE id = ?
            """, [user_id]).fetchone()

            if result:
                return UserDO(
                    id=result[0],
                    email=result[1],
                    first_name=result[2],
                    last_name=result[3],
                    company=result[4],
                    company_name=result[5],
                    role=result[6],
                    created_at=result[7]
                )
            return None
        except Exception as e:
            self.logger.error(f"Failed to get user {user_id}: {e}")
            return None
