from functools import lru_cache
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase

from ...modules.common.constants import Collections
from ...modules.common.exceptions import ConfigurationError
from ..config.settings import get_settings


class DocumentStore:
    """Handle on the MongoDB database holding book metadata, pages and audit records.

    The motor client is created on first use and kept for the lifetime of the
    handle. Motor connects lazily and pools connections internally, so one
    handle per process is shared by every service.

    Args:
        uri: MongoDB connection URI. Required unless ``client`` is given.
        db_name: Database name.
        client: Pre-built motor-compatible client, e.g. for tests.

    Raises:
        ConfigurationError: If neither a URI nor a client is provided.

    Example:
        ```python
        store = get_document_store()
        pages = store.collection(Collections.BOOK_PAGES)
        count = await pages.count_documents({"book_id": book_id})
        ```
    """

    def __init__(self, uri: Optional[str], db_name: str, client: Optional[Any] = None):
        if not uri and client is None:
            raise ConfigurationError("MONGODB_URI is not set. Add your MongoDB URI to the environment or .env file.")

        self.uri = uri
        self.db_name = db_name
        self._client = client

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            self._client = AsyncIOMotorClient(self.uri)
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self.db_name]

    def collection(self, name: Collections) -> AsyncIOMotorCollection:
        return self.database[name.value]

    def close(self) -> None:
        """Close the underlying client. The next access reconnects."""
        if self._client is not None:
            self._client.close()
            self._client = None


@lru_cache()
def get_document_store() -> DocumentStore:
    """Get the process-wide document store built from the settings."""
    settings = get_settings()
    return DocumentStore(uri=settings.MONGODB_URI, db_name=settings.MONGODB_DB_NAME)
