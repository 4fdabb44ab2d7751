"""Dashboard metric database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass
class MetricDO:
    """Metric data object - maps to dashboard_metrics table."""

    user_id: int
    metric_type: str
    value: int
    period: str
    id: Optional[int] = None
    change: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def to_context(self) -> Dict[str, Any]:
        """Shape used inside the business context."""
        return {
            "metric_type": self.metric_type,
            "value": self.value,
            "change": self.change,
            "period": self.period,
            "data": self.data,
        }
