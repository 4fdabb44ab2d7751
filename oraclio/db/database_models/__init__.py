"""Database models (Data Objects) - map to database tables."""

from .user import UserDO
from .integration import IntegrationDO
from .metric import MetricDO
from .chat_message import ChatMessageDO
from .workflow import WorkflowDO

__all__ = ["UserDO", "IntegrationDO", "MetricDO", "ChatMessageDO", "WorkflowDO"]
