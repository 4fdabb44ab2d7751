"""Services package."""

from .conversation_store import ConversationStore
from .context_assembler import ContextAssembler
from .chat_service import ChatService
from .automation_service import AutomationService

__all__ = ["ConversationStore", "ContextAssembler", "ChatService", "AutomationService"]
