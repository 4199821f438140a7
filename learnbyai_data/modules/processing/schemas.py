"""Schemas for processing logs, user activity and AI conversation history."""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from ..common.schemas import StoredDocument, TimestampSchema, utc_now

ProcessingStage = Literal["upload", "extraction", "ocr", "embedding", "completion"]
StageStatus = Literal["started", "in_progress", "completed", "failed"]


class ProcessingLog(StoredDocument):
    """Progress of one processing stage of a book."""

    book_id: str
    stage: ProcessingStage
    status: StageStatus
    message: str = ""
    error: Optional[Any] = None
    progress: float = Field(default=0, ge=0, le=100, description="Stage progress in percent")
    started_at: datetime = Field(default_factory=utc_now)
    completed_at: Optional[datetime] = None


class UserActivity(StoredDocument):
    """A user action, e.g. reading a book or taking a quiz."""

    user_id: str
    activity_type: str
    book_id: Optional[str] = None
    quiz_id: Optional[str] = None
    details: Dict[str, Any] = Field(default_factory=dict)
    duration: Optional[float] = Field(default=None, description="Duration in seconds")
    timestamp: datetime = Field(default_factory=utc_now)


class ConversationMessage(BaseModel):
    """One turn of an AI conversation."""

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=utc_now)
    tokens_used: Optional[int] = None
    relevant_pages: Optional[List[int]] = Field(default=None, description="Pages used as context")


class AIConversation(TimestampSchema, StoredDocument):
    """A conversation between a user and the assistant, optionally about a book."""

    conversation_id: str
    user_id: str
    book_id: Optional[str] = None
    messages: List[ConversationMessage] = Field(default_factory=list)
    context_used: List[str] = Field(default_factory=list)
