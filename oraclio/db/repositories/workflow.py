"""Workflow repository for database operations."""

import json
from typing import Optional, List
from .base import BaseRepository
from ..database_models.workflow import WorkflowDO


class WorkflowRepository(BaseRepository):
    """Repository for confirmed workflows."""

    _COLUMNS = "id, user_id, name, description, definition, is_active, created_at"

    def create(self, workflow: WorkflowDO) -> bool:
        """
        Create a new workflow record.

        Args:
            workflow: WorkflowDO instance

        Returns:
            True if successful, False otherwise
        """
        try:
            self.conn.execute("""
                INSERT INTO workflows (id, user_id, name, description, definition, is_active, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
            """, [
                workflow.id,
                workflow.user_id,
                workflow.name,
                workflow.description,
                json.dumps(workflow.definition),
                workflow.is_active,
                workflow.created_at
            ])
            self.conn.commit()
            self.logger.info(f"Created workflow record: {workflow.id}")
            return True
        except Exception as e:
            self.logger.error(f"Failed to create workflow: {e}")
            return False

    def get(self, workflow_id: str) -> Optional[WorkflowDO]:
        """
        Get workflow by ID.

        Args:
            workflow_id: Workflow ID

        Returns:
            WorkflowDO instance or None
        """
        try:
            result = self.conn.execute(f"""
                SELECT {self._COLUMNS}
                FROM workflows
                WHERE id = ?
            """, [workflow_id]).fetchone()

            return self._row_to_do(result) if result else None
        except Exception as e:
            self.logger.error(f"Failed to get workflow {workflow_id}: {e}")
            return None

    def list_by_user(self, user_id: int) -> List[WorkflowDO]:
        """
        List workflows for a user.

        Args:
            user_id: User ID

        Returns:
            List of WorkflowDO instances (newest first)
        """
        try:
            results = self.conn.execute(f"""
                SELECT {self._COLUMNS}
                FROM workflows
                WHERE user_id = ?
                ORDER BY created_at DESC
            """, [user_id]).fetchall()

            return [self._row_to_do(row) for row in results]
        except Exception as e:
            self.logger.error(f"Failed to list workflows for user {user_id}: {e}")
            return []

    def delete(self, workflow_id: str) -> bool:
        """
        Delete a workflow.

        Args:
            workflow_id: Workflow ID

        Returns:
            True if a row was deleted, False otherwise
        """
        try:
            if self.get(workflow_id) is None:
                return False
            self.conn.execute("DELETE FROM workflows WHERE id = ?", [workflow_id])
            self.conn.commit()
            self.logger.info(f"Deleted workflow: {workflow_id}")
            return True
        except Exception as e:
            self.logger.error(f"Failed to delete workflow {workflow_id}: {e}")
            return False

    @staticmethod
    def _row_to_do(row) -> WorkflowDO:
        return WorkflowDO(
            id=row[0],
            user_id=row[1],
            name=row[2],
            description=row[3],
            definition=json.loads(row[4]) if isinstance(row[4], str) else row[4],
            is_active=row[5],
            created_at=row[6]
        )
