"""Integration database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class IntegrationDO:
    """Integration data object - maps to integrations table."""

    user_id: int
    service: str
    service_name: str
    id: Optional[int] = None
    api_url: Optional[str] = None
    api_key: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=datetime.utcnow)
