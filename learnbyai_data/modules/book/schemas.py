"""Pydantic schemas for books, chapters and pages."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..common.schemas import StoredDocument, TimestampSchema, utc_now


class Chapter(BaseModel):
    """A chapter embedded in a book's metadata, covering an inclusive page range."""

    chapter_number: int
    title: str = ""
    start_page: int
    end_page: int
    content: Optional[str] = ""
    keywords: Optional[List[str]] = Field(default_factory=list)
    summary: Optional[str] = None


class BookDescriptiveMetadata(BaseModel):
    """Bibliographic details of a book."""

    author: Optional[str] = None
    publisher: Optional[str] = None
    publication_year: Optional[int] = None
    isbn: Optional[str] = None
    language: Optional[str] = None
    subject: Optional[str] = None
    grade_level: Optional[str] = None


class BookMetadata(TimestampSchema, StoredDocument):
    """An uploaded book and the state of its processing pipeline."""

    book_id: str
    user_id: str = ""
    file_name: str = ""
    file_size: int = 0
    file_type: str = ""
    s3_url: str = ""
    processing_status: str = Field(
        default="pending", description="pending, processing, completed or failed. Other pipeline states are kept as is"
    )
    ocr_required: bool = False
    ocr_status: Optional[str] = None
    total_pages: Optional[int] = None
    extracted_text: Optional[str] = None
    chapters: List[Chapter] = Field(default_factory=list)
    metadata: BookDescriptiveMetadata = Field(default_factory=BookDescriptiveMetadata)
    embeddings_generated: bool = False
    pinecone_ids: List[str] = Field(default_factory=list)
    processed_at: Optional[datetime] = None

    @field_validator("chapters", "pinecone_ids", mode="before")
    @classmethod
    def _null_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("metadata", mode="before")
    @classmethod
    def _null_metadata(cls, value: Any) -> Any:
        return {} if value is None else value


class BookPage(StoredDocument):
    """One physical page of a book."""

    book_id: str
    page_number: int = Field(description="1-based page number, unique within the book")
    html_content: Optional[str] = ""
    plain_text_content: Optional[str] = ""
    image_url: Optional[str] = Field(default=None, description="S3 URL of the page image/thumbnail")
    has_images: bool = False
    has_tables: bool = False
    has_equations: bool = False
    word_count: int = 0
    embedding: Optional[List[float]] = None
    pinecone_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)


class PageRangeValidation(BaseModel):
    """Outcome of checking a requested page range against a book's page count."""

    valid: bool
    error: Optional[str] = None
    total_pages: Optional[int] = None
