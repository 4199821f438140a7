"""Similarity search and embedding persistence on the Pinecone index."""

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Union

from ...infrastructure.config.settings import get_settings
from ...infrastructure.logging import get_logger
from ...infrastructure.vector_store import get_pinecone_index
from ..common.constants import DEFAULT_TOP_K
from ..common.filters import Eq, QueryFilter, to_query
from .sanitize import sanitize_metadata
from .schemas import VectorMatch, VectorQueryOptions, VectorRecord

logger = get_logger(__name__)


class VectorService:
    """Upsert, query and delete records in one namespace of the vector index.

    Every failure is logged with the index and namespace and then re-raised
    unchanged. A failed write or search has to be handled by the caller,
    otherwise data loss would go unnoticed.

    The Pinecone SDK is blocking, so calls run in a worker thread.

    Args:
        index: Pinecone index handle. Defaults to the configured index.
        index_name: Index name used in logs. Defaults to the configured name.
        namespace: Namespace to operate in. Defaults to the configured namespace.
    """

    def __init__(self, index: Optional[Any] = None, index_name: Optional[str] = None, namespace: Optional[str] = None):
        settings = get_settings()
        self.index_name = index_name or settings.PINECONE_INDEX_NAME
        self.namespace = namespace or settings.PINECONE_NAMESPACE
        self.index = index if index is not None else get_pinecone_index(self.index_name)

    async def upsert_vectors(self, vectors: Sequence[VectorRecord], book_id: Optional[str] = None) -> None:
        """Sanitize the metadata of every record and upsert the batch.

        Existing records with the same ids are overwritten. An empty batch is
        sent as is, so the service decides whether to reject it.

        Args:
            vectors: Records to write
            book_id: Book the records belong to, for logging
        """
        context = {"index": self.index_name, "namespace": self.namespace, "vector_count": len(vectors), "book_id": book_id}
        logger.info(
            f"Upserting {len(vectors)} vectors to Pinecone",
            extra={**context, "dimension": len(vectors[0].values) if vectors else 0},
        )

        payload = [
            {"id": vector.id, "values": vector.values, "metadata": sanitize_metadata(vector.metadata)} for vector in vectors
        ]

        try:
            await asyncio.to_thread(self.index.upsert, vectors=payload, namespace=self.namespace)
        except Exception as e:
            logger.error(f"Error upserting vectors to Pinecone: {e}", extra={**context, "response": getattr(e, "body", None)})
            raise

        logger.info(f"Successfully upserted {len(vectors)} vectors", extra=context)

    async def query_similar_vectors(
        self,
        query_vector: List[float],
        top_k: int = DEFAULT_TOP_K,
        filter: Union[QueryFilter, Dict[str, Any], None] = None,
    ) -> List[VectorMatch]:
        """Find the records nearest to a query embedding.

        Args:
            query_vector: Query embedding
            top_k: Number of matches to return
            filter: Metadata filter

        Returns:
            Matches with their metadata, best first
        """
        try:
            response = await asyncio.to_thread(
                self.index.query,
                vector=query_vector,
                top_k=top_k,
                include_metadata=True,
                filter=to_query(filter),
                namespace=self.namespace,
            )
        except Exception as e:
            logger.error(f"Error querying Pinecone: {e}", extra={"index": self.index_name, "namespace": self.namespace})
            raise

        return [
            VectorMatch(id=match.id, score=match.score, metadata=match.metadata or {}, values=match.values or [])
            for match in response.matches or []
        ]

    async def query_vectors(self, query_vector: List[float], options: Optional[VectorQueryOptions] = None) -> List[VectorMatch]:
        """Shorthand for query_similar_vectors taking an options object."""
        options = options or VectorQueryOptions()
        return await self.query_similar_vectors(query_vector, options.top_k or DEFAULT_TOP_K, options.filter)

    async def delete_vectors(self, ids: List[str]) -> None:
        """Delete records by identifier."""
        try:
            await asyncio.to_thread(self.index.delete, ids=ids, namespace=self.namespace)
        except Exception as e:
            logger.error(
                f"Error deleting vectors from Pinecone: {e}",
                extra={"index": self.index_name, "namespace": self.namespace, "vector_count": len(ids)},
            )
            raise

    async def delete_book_vectors(self, book_id: str) -> None:
        """Delete every record whose ``book_id`` metadata matches, by filter."""
        try:
            await asyncio.to_thread(self.index.delete, filter=Eq("book_id", book_id).to_query(), namespace=self.namespace)
        except Exception as e:
            logger.error(
                f"Error deleting book vectors from Pinecone: {e}",
                extra={"index": self.index_name, "namespace": self.namespace, "book_id": book_id},
            )
            raise

    async def describe_index_stats(self) -> Any:
        """Get record counts of the index, per namespace."""
        try:
            return await asyncio.to_thread(self.index.describe_index_stats)
        except Exception as e:
            logger.error(
                f"Error describing Pinecone index stats: {e}", extra={"index": self.index_name, "namespace": self.namespace}
            )
            raise
