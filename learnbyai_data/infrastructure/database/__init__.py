"""Document-store access."""

from .mongo import DocumentStore, get_document_store

__all__ = ["DocumentStore", "get_document_store"]
