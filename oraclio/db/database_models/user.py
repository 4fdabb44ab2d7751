"""User database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class UserDO:
    """User data object - maps to users table."""

    email: str
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    company_name: Optional[str] = None
    role: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def full_name(self) -> Optional[str]:
        """Whichever name parts are set, joined; None when neither is."""
        parts = [part for part in (self.first_name, self.last_name) if part]
        return " ".join(parts) or None
