"""Integration repository for database operations."""

from typing import Optional, List
from .base import BaseRepository
from ..database_models.integration import IntegrationDO


class IntegrationRepository(BaseRepository):
    """Repository for Integration reads and inserts."""

    _COLUMNS = "id, user_id, service, service_name, api_url, api_key, is_active, created_at"

    def create(self, integration: IntegrationDO) -> Optional[int]:
        """
        Create a new integration record.

        Args:
            integration: IntegrationDO instance

        Returns:
            Integration ID if successful, None otherwise
        """
        try:
            result = self.conn.execute("""
                INSERT INTO integrations (id, user_id, service, service_name, api_url, api_key, is_active, created_at)
                VALUES (nextval('integrations_id_seq'), ?, ?, ?, ?, ?, ?, ?)
                RETURNING id
            """, [
                integration.user_id,
                integration.service,
                integration.service_name,
                integration.api_url,
                integration.api_key,
                integration.is_active,
                integration.created_at
            ]).fetchone()

            integration_id = result[0] if result else None
            if integration_id:
                self.conn.commit()
                integration.id = integration_id
                self.logger.info(f"Created integration {integration.service} for user {integration.user_id}")
            return integration_id
        except Exception as e:
            self.logger.error(f"Failed to create integration: {e}")
            return None

    def list_active(self, user_id: int) -> List[IntegrationDO]:
        """
        List active integrations for a user.

        Args:
            user_id: User ID

        Returns:
            List of IntegrationDO instances (oldest first)
        """
        try:
            results = self.conn.execute(f"""
                SELECT {self._COLUMNS}
                FROM integrations
                WHERE user_id = ? AND is_active = TRUE
                ORDER BY id ASC
            """, [user_id]).fetchall()

            return [self._row_to_do(row) for row in results]
        except Exception as e:
            self.logger.error(f"Failed to list integrations for user {user_id}: {e}")
            return []

    @staticmethod
    def _row_to_do(row) -> IntegrationDO:
        return IntegrationDO(
            id=row[0],
            user_id=row[1],
            service=row[2],
            service_name=row[3],
            api_url=row[4],
            api_key=row[5],
            is_active=row[6],
            created_at=row[7]
        )
