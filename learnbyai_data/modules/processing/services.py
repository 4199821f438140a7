"""Pass-through access to the audit and history collections."""

from typing import List, Optional

from pymongo import ASCENDING

from ...infrastructure.database import DocumentStore, get_document_store
from ...infrastructure.logging import get_logger
from ..common.constants import Collections
from ..common.filters import Eq
from .schemas import AIConversation, ProcessingLog, UserActivity

logger = get_logger(__name__)


class HistoryService:
    """Processing logs, user activity and AI conversations.

    Writes log the failure and re-raise it. Reads degrade to an empty
    result, like the book lookups.
    """

    def __init__(self, document_store: Optional[DocumentStore] = None):
        self.document_store = document_store or get_document_store()

    async def add_processing_log(self, log: ProcessingLog) -> str:
        """Store a processing log entry.

        Returns:
            Identifier of the stored entry
        """
        try:
            result = await self.document_store.collection(Collections.PROCESSING_LOGS).insert_one(log.to_document())
        except Exception as e:
            logger.error(
                f"Error writing processing log: {e}",
                extra={"book_id": log.book_id, "stage": log.stage, "status": log.status},
            )
            raise

        return str(result.inserted_id)

    async def get_processing_logs(self, book_id: str) -> List[ProcessingLog]:
        """Get a book's processing log, oldest entry first."""
        try:
            cursor = (
                self.document_store.collection(Collections.PROCESSING_LOGS)
                .find(Eq("book_id", book_id).to_query())
                .sort("started_at", ASCENDING)
            )
            return [ProcessingLog.model_validate(document) for document in await cursor.to_list(length=None)]
        except Exception as e:
            logger.error(f"Error fetching processing logs: {e}", extra={"book_id": book_id}, exc_info=True)
            return []

    async def record_user_activity(self, activity: UserActivity) -> str:
        """Store a user activity record and return its identifier."""
        try:
            result = await self.document_store.collection(Collections.USER_ACTIVITIES).insert_one(activity.to_document())
        except Exception as e:
            logger.error(
                f"Error recording user activity: {e}",
                extra={"user_id": activity.user_id, "activity_type": activity.activity_type},
            )
            raise

        return str(result.inserted_id)

    async def get_conversation(self, conversation_id: str) -> Optional[AIConversation]:
        """Get an AI conversation, or None if it is unknown or the lookup failed."""
        try:
            document = await self.document_store.collection(Collections.AI_CONVERSATIONS).find_one(
                Eq("conversation_id", conversation_id).to_query()
            )
            return AIConversation.model_validate(document) if document else None
        except Exception as e:
            logger.error(f"Error fetching conversation: {e}", extra={"conversation_id": conversation_id}, exc_info=True)
            return None
