"""Dashboard metric repository for database operations."""

import json
from typing import Optional, List
from .base import BaseRepository
from ..database_models.metric import MetricDO


class MetricRepository(BaseRepository):
    """Repository for dashboard metrics."""

    def add(self, metric: MetricDO) -> Optional[int]:
        """
        Add a metric record.

        Args:
            metric: MetricDO instance

        Returns:
            Metric ID if successful, None otherwise
        """
        try:
            result = self.conn.execute("""
                INSERT INTO dashboard_metrics (id, user_id, metric_type, value, change, period, data, updated_at)
                VALUES (nextval('metrics_id_seq'), ?, ?, ?, ?, ?, ?, ?)
                RETURNING id
            """, [
                metric.user_id,
                metric.metric_type,
                metric.value,
                metric.change,
                metric.period,
                json.dumps(metric.data),
                metric.updated_at
            ]).fetchone()

            metric_id = result[0] if result else None
            if metric_id:
                self.conn.commit()
                metric.id = metric_id
            return metric_id
        except Exception as e:
            self.logger.error(f"Failed to add metric: {e}")
            return None

    def list_by_user(self, user_id: int) -> List[MetricDO]:
        """
        List metrics for a user.

        Args:
            user_id: User ID

        Returns:
            List of MetricDO instances
        """
        try:
            results = self.conn.execute("""
                SELECT id, user_id, metric_type, value, change, period, data, updated_at
                FROM dashboard_metrics
                WHERE user_id = ?
                ORDER BY id ASC
            """, [user_id]).fetchall()

            return [
                MetricDO(
                    id=row[0],
                    user_id=row[1],
                    metric_type=row[2],
                    value=row[3],
                    change=row[4],
                    period=row[5],
                    data=json.loads(row[6]) if isinstance(row[6], str) else (row[6] or {}),
                    updated_at=row[7]
                )
                for row in results
            ]
        except Exception as e:
            self.logger.error(f"Failed to list metrics for user {user_id}: {e}")
            return []
