"""Pinecone client and index handles."""

from functools import lru_cache

from pinecone import Pinecone

from ...modules.common.exceptions import ConfigurationError
from ..config.settings import get_settings


@lru_cache()
def get_pinecone_client() -> Pinecone:
    """Get the process-wide Pinecone client."""
    settings = get_settings()
    if not settings.PINECONE_API_KEY:
        raise ConfigurationError("PINECONE_API_KEY is not set.")
    return Pinecone(api_key=settings.PINECONE_API_KEY)


def get_pinecone_index(index_name: str | None = None):
    """Get a handle on the configured (or given) Pinecone index.

    Index handles are cheap; the client underneath is shared.
    """
    return get_pinecone_client().Index(index_name or get_settings().PINECONE_INDEX_NAME)
