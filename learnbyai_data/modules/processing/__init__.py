"""Processing logs, user activity and AI conversation history."""

from .schemas import AIConversation, ConversationMessage, ProcessingLog, UserActivity
from .services import HistoryService

__all__ = ["HistoryService", "ProcessingLog", "UserActivity", "AIConversation", "ConversationMessage"]
