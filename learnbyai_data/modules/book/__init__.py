"""Books, chapters and pages."""

from .schemas import BookDescriptiveMetadata, BookMetadata, BookPage, Chapter, PageRangeValidation
from .services import BookService, concatenate_page_content

__all__ = [
    "BookService",
    "concatenate_page_content",
    "BookMetadata",
    "BookDescriptiveMetadata",
    "BookPage",
    "Chapter",
    "PageRangeValidation",
]
