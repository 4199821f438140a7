"""Typed query filters.

Filters are small immutable values that are translated into the Mongo-style
query dictionaries both MongoDB and Pinecone metadata filtering understand.
Build them with the helpers here instead of writing dictionaries by hand:

    AllOf(Eq("book_id", book_id), AnyOf(Between("page_number", 1, 10), Between("page_number", 21, 30)))
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union


@dataclass(frozen=True)
class Eq:
    """Exact match on a field."""

    field: str
    value: Any

    def to_query(self) -> Dict[str, Any]:
        return {self.field: {"$eq": self.value}}


@dataclass(frozen=True)
class Between:
    """Inclusive range on a numeric field."""

    field: str
    gte: Union[int, float]
    lte: Union[int, float]

    def to_query(self) -> Dict[str, Any]:
        return {self.field: {"$gte": self.gte, "$lte": self.lte}}


@dataclass(frozen=True)
class AnyOf:
    """Logical OR of sub-filters."""

    filters: Tuple["QueryFilter", ...]

    def __init__(self, *filters: "QueryFilter"):
        if not filters:
            raise ValueError("AnyOf requires at least one filter")
        object.__setattr__(self, "filters", tuple(filters))

    def to_query(self) -> Dict[str, Any]:
        if len(self.filters) == 1:
            return self.filters[0].to_query()
        return {"$or": [f.to_query() for f in self.filters]}


@dataclass(frozen=True)
class AllOf:
    """Logical AND of sub-filters."""

    filters: Tuple["QueryFilter", ...]

    def __init__(self, *filters: "QueryFilter"):
        if not filters:
            raise ValueError("AllOf requires at least one filter")
        object.__setattr__(self, "filters", tuple(filters))

    def to_query(self) -> Dict[str, Any]:
        queries = [f.to_query() for f in self.filters]

        merged: Dict[str, Any] = {}
        for query in queries:
            if merged.keys() & query.keys():
                return {"$and": queries}
            merged.update(query)
        return merged


QueryFilter = Union[Eq, Between, AnyOf, AllOf]


def to_query(query_filter: Union[QueryFilter, Dict[str, Any], None]) -> Union[Dict[str, Any], None]:
    """Translate a filter into its query dictionary.

    Raw dictionaries are passed through unchanged so callers holding a
    ready-made store filter can still use it.
    """
    if query_filter is None or isinstance(query_filter, dict):
        return query_filter
    return query_filter.to_query()
