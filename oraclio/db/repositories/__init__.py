"""Repository layer for data access."""

from .user import UserRepository
from .integration import IntegrationRepository
from .metric import MetricRepository
from .chat_message import ChatMessageRepository
from .workflow import WorkflowRepository

__all__ = [
    "UserRepository",
    "IntegrationRepository",
    "MetricRepository",
    "ChatMessageRepository",
    "WorkflowRepository",
]
