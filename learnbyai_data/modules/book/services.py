"""Book metadata and page retrieval on top of the document store."""

from typing import Iterable, List, Optional

from pydantic import ValidationError
from pymongo import ASCENDING

from ...infrastructure.database import DocumentStore, get_document_store
from ...infrastructure.logging import get_logger
from ..common.constants import PAGE_SEPARATOR, Collections
from ..common.filters import AllOf, AnyOf, Between, Eq, QueryFilter
from .schemas import BookMetadata, BookPage, PageRangeValidation

logger = get_logger(__name__)


class BookService:
    """Read access to books, their chapters and their pages.

    Lookups never raise. A failing store is logged and reported as "no data"
    (``None``, ``[]`` or ``0``), so request pipelines can fall back instead of
    crashing. Callers cannot tell a missing book from an unreachable store.
    """

    def __init__(self, document_store: Optional[DocumentStore] = None):
        self.document_store = document_store or get_document_store()

    async def get_book_metadata(self, book_id: str) -> Optional[BookMetadata]:
        """Get a book's metadata record.

        Args:
            book_id: Book identifier

        Returns:
            The metadata, or None if the book is unknown, its record is
            malformed or the lookup failed
        """
        try:
            document = await self.document_store.collection(Collections.BOOKS_METADATA).find_one(
                Eq("book_id", book_id).to_query()
            )
            return BookMetadata.model_validate(document) if document else None
        except ValidationError as e:
            logger.error(
                f"Malformed book metadata record: {e.error_count()} invalid field(s)",
                extra={"book_id": book_id, "errors": e.errors(include_url=False)},
            )
            return None
        except Exception as e:
            logger.error(f"Error fetching book metadata: {e}", extra={"book_id": book_id}, exc_info=True)
            return None

    async def get_book_pages(
        self,
        book_id: str,
        from_page: Optional[int] = None,
        to_page: Optional[int] = None,
    ) -> List[BookPage]:
        """Get a book's pages in page order.

        The range is only applied when both bounds are given.

        Args:
            book_id: Book identifier
            from_page: First page, inclusive
            to_page: Last page, inclusive

        Returns:
            Pages sorted by page number, or an empty list on failure
        """
        query_filter: QueryFilter = Eq("book_id", book_id)
        if from_page is not None and to_page is not None:
            query_filter = AllOf(query_filter, Between("page_number", from_page, to_page))

        try:
            return await self._find_pages(query_filter)
        except Exception as e:
            logger.error(
                f"Error fetching book pages: {e}",
                extra={"book_id": book_id, "from_page": from_page, "to_page": to_page},
                exc_info=True,
            )
            return []

    async def get_chapter_pages(self, book_id: str, chapter_numbers: Iterable[int]) -> List[BookPage]:
        """Get the pages covered by the given chapters.

        Chapters are matched in the order the book stores them. Pages covered
        by several of the chapters are returned once.

        Args:
            book_id: Book identifier
            chapter_numbers: Chapter numbers to include

        Returns:
            Pages sorted by page number, or an empty list if the book, its
            chapters or the requested chapters are missing, or on failure
        """
        chapter_numbers = list(chapter_numbers)
        try:
            metadata = await self.get_book_metadata(book_id)
            if not metadata or not metadata.chapters:
                return []

            wanted = set(chapter_numbers)
            selected = [chapter for chapter in metadata.chapters if chapter.chapter_number in wanted]
            if not selected:
                return []

            page_ranges = AnyOf(*(Between("page_number", ch.start_page, ch.end_page) for ch in selected))
            return await self._find_pages(AllOf(Eq("book_id", book_id), page_ranges))
        except Exception as e:
            logger.error(
                f"Error fetching chapter pages: {e}",
                extra={"book_id": book_id, "chapter_numbers": chapter_numbers},
                exc_info=True,
            )
            return []

    async def get_book_page_count(self, book_id: str) -> int:
        """Count the stored pages of a book, or return 0 on failure."""
        try:
            return await self._count_pages(book_id)
        except Exception as e:
            logger.error(f"Error getting page count: {e}", extra={"book_id": book_id}, exc_info=True)
            return 0

    async def validate_page_range(self, book_id: str, from_page: int, to_page: int) -> PageRangeValidation:
        """Check a page range against the number of stored pages.

        Checks run in a fixed order so the message is deterministic when
        several of them fail: lower bound, then page count, then ordering.

        Args:
            book_id: Book identifier
            from_page: First page, inclusive
            to_page: Last page, inclusive

        Returns:
            The validation result, carrying the page count when it was read
        """
        try:
            total_pages = await self._count_pages(book_id)
        except Exception as e:
            logger.error(f"Error validating page range: {e}", extra={"book_id": book_id}, exc_info=True)
            return PageRangeValidation(valid=False, error="Failed to validate page range")

        if from_page < 1:
            return PageRangeValidation(valid=False, error="From page must be at least 1", total_pages=total_pages)

        if to_page > total_pages:
            return PageRangeValidation(valid=False, error=f"To page cannot exceed {total_pages}", total_pages=total_pages)

        if from_page > to_page:
            return PageRangeValidation(
                valid=False, error="From page must be less than or equal to to page", total_pages=total_pages
            )

        return PageRangeValidation(valid=True, total_pages=total_pages)

    async def _find_pages(self, query_filter: QueryFilter) -> List[BookPage]:
        cursor = (
            self.document_store.collection(Collections.BOOK_PAGES)
            .find(query_filter.to_query())
            .sort("page_number", ASCENDING)
        )
        documents = await cursor.to_list(length=None)
        return [BookPage.model_validate(document) for document in documents]

    async def _count_pages(self, book_id: str) -> int:
        return await self.document_store.collection(Collections.BOOK_PAGES).count_documents(Eq("book_id", book_id).to_query())


def concatenate_page_content(pages: Iterable[BookPage]) -> str:
    """Join the plain text of pages, separated by a blank line.

    Pages whose text is empty or whitespace-only are skipped.
    """
    return PAGE_SEPARATOR.join(
        page.plain_text_content for page in pages if page.plain_text_content and page.plain_text_content.strip()
    )
