"""Business context passed into reply generation."""

from datetime import datetime
from typing import Optional, Dict, Any, List
from pydantic import BaseModel, Field


class HistoryTurn(BaseModel):
    """Single turn of conversation history."""

    role: str = Field(description="Turn role: user or assistant")
    content: str = Field(description="Turn text")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="When the turn was stored")


class BusinessContext(BaseModel):
    """
    Bounded snapshot of a user's metrics, CRM data and conversation.

    Rebuilt for every request. Every list field is always present; the
    assembler fills labelled placeholders rather than leaving them out.
    """

    metrics: List[Dict[str, Any]] = Field(default_factory=list, description="Dashboard metrics")
    sales_data: List[Dict[str, Any]] = Field(default_factory=list, description="Sales summary rows")
    team_performance: List[Dict[str, Any]] = Field(default_factory=list, description="Per-assignee performance")
    top_customers: List[Dict[str, Any]] = Field(default_factory=list, description="Top deals by value")
    recent_activities: List[Dict[str, Any]] = Field(default_factory=list, description="Recent CRM activity")
    user_name: Optional[str] = Field(None, description="User display name")
    company_name: Optional[str] = Field(None, description="User company")
    user_role: Optional[str] = Field(None, description="User role")
    conversation_history: List[HistoryTurn] = Field(default_factory=list, description="Ordered history turns")

    def non_empty_sections(self) -> Dict[str, List[Dict[str, Any]]]:
        """Data lists that carry at least one entry, in a stable order."""
        sections = {
            "metrics": self.metrics,
            "sales_data": self.sales_data,
            "team_performance": self.team_performance,
            "top_customers": self.top_customers,
            "recent_activities": self.recent_activities,
        }
        return {name: rows for name, rows in sections.items() if rows}

    def first_name(self) -> Optional[str]:
        if not self.user_name:
            return None
        return self.user_name.split()[0]

    def sales_summary(self) -> Dict[str, Any]:
        """First sales row, or an empty dict."""
        return self.sales_data[0] if self.sales_data else {}
