"""Vector-store records, similarity search and metadata sanitization."""

from .sanitize import sanitize_metadata, sanitize_text
from .schemas import VectorMatch, VectorQueryOptions, VectorRecord
from .services import VectorService

__all__ = [
    "VectorService",
    "VectorRecord",
    "VectorMatch",
    "VectorQueryOptions",
    "sanitize_metadata",
    "sanitize_text",
]
