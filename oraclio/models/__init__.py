"""Pydantic models for API request/response and domain values."""

from .context import BusinessContext, HistoryTurn
from .automation import (
    IntentType,
    TriggerType,
    StepType,
    Intent,
    IntentEntities,
    TriggerEntity,
    DataSourceEntity,
    ActionEntity,
    MetricEntity,
    Workflow,
    WorkflowStep,
    WorkflowTrigger,
)
from .chat import (
    SendMessageRequest,
    ChatMessageResponse,
    ChatReplyResponse,
    ChatHistoryResponse,
    ChatFrame,
)

__all__ = [
    "BusinessContext",
    "HistoryTurn",
    "IntentType",
    "TriggerType",
    "StepType",
    "Intent",
    "IntentEntities",
    "TriggerEntity",
    "DataSourceEntity",
    "ActionEntity",
    "MetricEntity",
    "Workflow",
    "WorkflowStep",
    "WorkflowTrigger",
    "SendMessageRequest",
    "ChatMessageResponse",
    "ChatReplyResponse",
    "ChatHistoryResponse",
    "ChatFrame",
]
