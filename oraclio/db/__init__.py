"""Database package - connection, models, and repositories."""

from .connection import DatabaseConnection
from .repositories.user import UserRepository
from .repositories.integration import IntegrationRepository
from .repositories.metric import MetricRepository
from .repositories.chat_message import ChatMessageRepository
from .repositories.workflow import WorkflowRepository

__all__ = [
    "DatabaseConnection",
    "UserRepository",
    "IntegrationRepository",
    "MetricRepository",
    "ChatMessageRepository",
    "WorkflowRepository",
]
