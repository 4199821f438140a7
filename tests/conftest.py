"""Test configuration and fixtures for the data-access layer."""

import math
import os
import random
from collections import defaultdict
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from mongomock_motor import AsyncMongoMockClient

# mypy: disable-error-code="import-untyped"
from testcontainers.core.docker_client import DockerClient
from testcontainers.mongodb import MongoDbContainer

# Settings are read at import time.
os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("PINECONE_INDEX_NAME", "learnbyai-test")
os.environ.setdefault("PINECONE_NAMESPACE", "books-test")

from learnbyai_data.infrastructure.database import DocumentStore  # noqa: E402
from learnbyai_data.infrastructure.logging import configure_testing_logging  # noqa: E402
from learnbyai_data.modules.book import BookService  # noqa: E402
from learnbyai_data.modules.common.constants import Collections  # noqa: E402
from learnbyai_data.modules.processing import HistoryService  # noqa: E402
from learnbyai_data.modules.vector import VectorService  # noqa: E402

TEST_DB_NAME = "learnbyai_test"
BOOK_ID = "book-123"


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output free of application logs."""
    configure_testing_logging()


def is_docker_running() -> bool:
    """Check if Docker daemon is running."""
    try:
        DockerClient()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def mongo_container():
    """Start a MongoDB container for integration tests."""
    if not is_docker_running():
        pytest.skip("Docker is required, but not running")

    with MongoDbContainer("mongo:7.0") as mongo:
        yield mongo


@pytest.fixture
def mongo_client():
    """In-memory motor-compatible client."""
    return AsyncMongoMockClient()


@pytest.fixture
def document_store(mongo_client) -> DocumentStore:
    """Document store backed by the in-memory client."""
    return DocumentStore(uri=None, db_name=TEST_DB_NAME, client=mongo_client)


@pytest.fixture
def book_service(document_store: DocumentStore) -> BookService:
    return BookService(document_store=document_store)


@pytest.fixture
def history_service(document_store: DocumentStore) -> HistoryService:
    return HistoryService(document_store=document_store)


def make_book_metadata(book_id: str = BOOK_ID, chapters: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """Raw books_metadata document as the upload pipeline stores it."""
    return {
        "book_id": book_id,
        "user_id": "user-1",
        "file_name": "physics.pdf",
        "file_size": 2048,
        "file_type": "application/pdf",
        "s3_url": "https://bucket.s3.amazonaws.com/physics.pdf",
        "processing_status": "completed",
        "ocr_required": False,
        "total_pages": 20,
        "chapters": chapters if chapters is not None else [],
        "metadata": {"author": "A. Author", "subject": "Physics", "grade_level": "10"},
        "embeddings_generated": True,
        "pinecone_ids": [],
    }


def make_page(page_number: int, book_id: str = BOOK_ID, text: Optional[str] = None) -> Dict[str, Any]:
    """Raw book_pages document."""
    content = text if text is not None else f"Page {page_number} text."
    return {
        "book_id": book_id,
        "page_number": page_number,
        "html_content": f"<p>{content}</p>",
        "plain_text_content": content,
        "has_images": False,
        "has_tables": False,
        "has_equations": False,
        "word_count": len(content.split()),
    }


@pytest_asyncio.fixture
async def sample_book(document_store: DocumentStore) -> Dict[str, Any]:
    """A 20-page book with chapter 1 on pages 1-10 and chapter 2 on pages 11-20.

    Pages are inserted out of order, alongside pages of another book.
    """
    metadata = make_book_metadata(
        chapters=[
            {"chapter_number": 1, "title": "Motion", "start_page": 1, "end_page": 10, "content": "", "keywords": ["speed"]},
            {"chapter_number": 2, "title": "Energy", "start_page": 11, "end_page": 20, "content": "", "keywords": ["work"]},
        ]
    )
    await document_store.collection(Collections.BOOKS_METADATA).insert_one(metadata)

    pages = [make_page(n) for n in range(1, 21)]
    random.Random(7).shuffle(pages)
    pages += [make_page(n, book_id="other-book") for n in range(1, 6)]
    await document_store.collection(Collections.BOOK_PAGES).insert_many(pages)

    return metadata


class FakePineconeIndex:
    """In-memory stand-in for a Pinecone index handle.

    Mirrors the SDK surface VectorService uses and rejects the requests the
    service rejects: empty upserts and vectors of the wrong dimension.
    """

    def __init__(self, dimension: int = 3):
        self.dimension = dimension
        self.namespaces: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self.delete_calls: List[Dict[str, Any]] = []

    def upsert(self, vectors: List[Dict[str, Any]], namespace: str = "") -> SimpleNamespace:
        if not vectors:
            raise ValueError("Invalid request: at least one vector is required")
        for vector in vectors:
            if len(vector["values"]) != self.dimension:
                raise ValueError(
                    f"Vector dimension {len(vector['values'])} does not match the dimension of the index {self.dimension}"
                )
        for vector in vectors:
            self.namespaces[namespace][vector["id"]] = {**vector, "metadata": dict(vector.get("metadata") or {})}
        return SimpleNamespace(upserted_count=len(vectors))

    def query(
        self,
        vector: List[float],
        top_k: int,
        include_metadata: bool = False,
        filter: Optional[Dict[str, Any]] = None,
        namespace: str = "",
    ) -> SimpleNamespace:
        records = [r for r in self.namespaces[namespace].values() if self._matches(r["metadata"], filter)]
        scored = sorted(((self._cosine(vector, r["values"]), r) for r in records), key=lambda pair: pair[0], reverse=True)
        return SimpleNamespace(
            matches=[
                SimpleNamespace(id=r["id"], score=score, values=[], metadata=r["metadata"] if include_metadata else None)
                for score, r in scored[:top_k]
            ]
        )

    def delete(self, ids: Optional[List[str]] = None, filter: Optional[Dict[str, Any]] = None, namespace: str = "") -> dict:
        self.delete_calls.append({"ids": ids, "filter": filter, "namespace": namespace})
        records = self.namespaces[namespace]
        if ids is not None:
            for record_id in ids:
                records.pop(record_id, None)
        elif filter is not None:
            for record_id in [rid for rid, r in records.items() if self._matches(r["metadata"], filter)]:
                del records[record_id]
        return {}

    def describe_index_stats(self) -> SimpleNamespace:
        counts = {name: SimpleNamespace(vector_count=len(records)) for name, records in self.namespaces.items()}
        return SimpleNamespace(
            dimension=self.dimension,
            namespaces=counts,
            total_vector_count=sum(len(records) for records in self.namespaces.values()),
        )

    @staticmethod
    def _matches(metadata: Dict[str, Any], filter: Optional[Dict[str, Any]]) -> bool:
        for field, condition in (filter or {}).items():
            expected = condition["$eq"] if isinstance(condition, dict) else condition
            if metadata.get(field) != expected:
                return False
        return True

    @staticmethod
    def _cosine(a: List[float], b: List[float]) -> float:
        dot = sum(x * y for x, y in zip(a, b))
        norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
        return dot / norm if norm else 0.0


@pytest.fixture
def pinecone_index() -> FakePineconeIndex:
    return FakePineconeIndex(dimension=3)


@pytest.fixture
def vector_service(pinecone_index: FakePineconeIndex) -> VectorService:
    return VectorService(index=pinecone_index, index_name="learnbyai-test", namespace="books-test")


@pytest.fixture
def book_document():
    """Factory for raw books_metadata documents."""
    return make_book_metadata


@pytest.fixture
def page_document():
    """Factory for raw book_pages documents."""
    return make_page
