"""Infrastructure: settings, logging and the external service handles."""

from .config import get_settings
from .database import DocumentStore, get_document_store
from .vector_store import get_pinecone_client, get_pinecone_index

__all__ = [
    "DocumentStore",
    "get_document_store",
    "get_pinecone_client",
    "get_pinecone_index",
    "get_settings",
]
