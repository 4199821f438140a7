"""Vector-store access."""

from .client import get_pinecone_client, get_pinecone_index

__all__ = ["get_pinecone_client", "get_pinecone_index"]
