"""Schemas for vector-store records and query results."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from ..common.constants import DEFAULT_TOP_K


class VectorRecord(BaseModel):
    """An embedding with its identifier and flat metadata payload."""

    id: str = Field(min_length=1, description="Vector-store record identifier")
    values: List[float] = Field(description="Embedding")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Flat key-value metadata")


class VectorMatch(BaseModel):
    """A record returned by a similarity query."""

    id: str
    score: Optional[float] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    values: List[float] = Field(default_factory=list)


class VectorQueryOptions(BaseModel):
    """Options for ``VectorService.query_vectors``."""

    top_k: Optional[int] = Field(default=DEFAULT_TOP_K, description="Number of matches to return")
    filter: Optional[Any] = Field(default=None, description="QueryFilter or raw metadata filter dict")
