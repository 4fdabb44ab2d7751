"""Workflow database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass
class WorkflowDO:
    """Workflow data object - maps to workflows table."""

    id: str
    user_id: int
    name: str
    definition: Dict[str, Any]
    description: Optional[str] = None
    is_active: bool = False
    created_at: datetime = field(default_factory=datetime.utcnow)
