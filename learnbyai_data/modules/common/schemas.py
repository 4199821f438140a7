"""Base schemas shared by document-store records."""

from datetime import UTC, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def utc_now() -> datetime:
    return datetime.now(UTC)


class StoredDocument(BaseModel):
    """Base schema for a record read from or written to the document store.

    MongoDB's ``_id`` is exposed as ``id`` (always a string), and fields the
    schema does not know about are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = Field(default=None, alias="_id", description="Document-store identifier")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_object_id(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    def to_document(self) -> Dict[str, Any]:
        """Dump to a document ready for insertion, without an empty ``_id``."""
        return self.model_dump(by_alias=True, exclude_none=True)


class TimestampSchema(BaseModel):
    """Creation/update timestamps."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
