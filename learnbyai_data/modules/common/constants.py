"""Common constants used across the application."""

from enum import Enum


class Collections(str, Enum):
    """Document-store collection names."""

    BOOKS_METADATA = "books_metadata"
    BOOK_PAGES = "book_pages"
    PROCESSING_LOGS = "processing_logs"
    USER_ACTIVITIES = "user_activities"
    AI_CONVERSATIONS = "ai_conversations"
    SEARCH_CACHE = "search_cache"


DEFAULT_TOP_K = 5

PAGE_SEPARATOR = "\n\n"
