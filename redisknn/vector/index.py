"""
Vector index interface and an in-process implementation.

The in-memory index mirrors the RediSearch semantics used by the Redis
backend (KNN candidate pool, distance ordering, paging) so the demo can run
without a server.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import uuid

import numpy as np

from ..core.errors import IgnorableIndexError, InvalidInputError, SchemaError
from ..util.logging import logger
from .types import Document, IndexSchema, SearchHit, SearchResult, VectorLike


class IVectorIndex(ABC):
    """Abstract interface for vector index operations."""

    schema: IndexSchema

    @abstractmethod
    def drop_index(self) -> Optional[IgnorableIndexError]:
        """Drop the index and its documents; failures are returned, not raised."""
        pass

    @abstractmethod
    def create_schema(self, schema: Optional[IndexSchema] = None) -> None:
        """Drop any existing index of the same name, then create it."""
        pass

    @abstractmethod
    def add_document(self, text: str, vector: VectorLike) -> str:
        """Store a (text, vector) pair under a fresh id and return the id."""
        pass

    @abstractmethod
    def get_document(self, doc_id: str) -> Optional[Document]:
        """Fetch a stored document by id."""
        pass

    @abstractmethod
    def search(self, query_vector: VectorLike, limit: int = 5) -> SearchResult:
        """KNN search, ascending by distance, at most `limit` hits."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of documents in the index."""
        pass


def check_limit(limit: int) -> None:
    if limit < 1:
        raise InvalidInputError(f"limit must be >= 1, got {limit}")


def vector_distance(metric: str, a: np.ndarray, b: np.ndarray) -> float:
    """Distance as RediSearch reports it for each metric."""
    if metric == "L2":
        diff = a - b
        return float(np.dot(diff, diff))
    if metric == "IP":
        return float(1.0 - np.dot(a, b))

    norm = np.linalg.norm(a) * np.linalg.norm(b)
    if norm == 0:  # zero vectors are treated as orthogonal
        return 1.0
    return float(1.0 - np.dot(a, b) / norm)


class InMemoryVectorIndex(IVectorIndex):
    """In-process implementation of IVectorIndex."""

    def __init__(self, schema: IndexSchema):
        schema.validate()
        self.schema = schema
        self._documents: Dict[str, Document] = {}
        self._vectors: Dict[str, np.ndarray] = {}
        self._created = False

    def drop_index(self) -> Optional[IgnorableIndexError]:
        if not self._created:
            return IgnorableIndexError(f"Unknown index name: {self.schema.name}")
        self._documents.clear()
        self._vectors.clear()
        self._created = False
        logger.log_index_operation("drop", self.schema.name)
        return None

    def create_schema(self, schema: Optional[IndexSchema] = None) -> None:
        schema = schema or self.schema
        schema.validate()

        ignored = self.drop_index()
        if ignored is not None:
            logger.debug(f"Ignoring drop failure before create: {ignored}")

        self.schema = schema
        self._created = True
        logger.log_index_operation("create", schema.name, {
            "backend": "memory",
            **schema.vector_attributes(),
        })

    def _require_index(self) -> None:
        if not self._created:
            raise SchemaError(f"Index {self.schema.name} has not been created")

    def add_document(self, text: str, vector: VectorLike) -> str:
        self._require_index()
        arr = self.schema.check_vector(vector)

        doc_id = str(uuid.uuid4())
        self._documents[doc_id] = Document(
            id=doc_id,
            score=1.0,
            fields={self.schema.text_field: text},
        )
        stored = arr.astype(np.float32)
        stored.flags.writeable = False
        self._vectors[doc_id] = stored
        return doc_id

    def get_document(self, doc_id: str) -> Optional[Document]:
        document = self._documents.get(doc_id)
        if document is None:
            return None
        fields = dict(document.fields)
        fields[self.schema.vector_field] = self._vectors[doc_id].copy()
        return Document(id=document.id, score=document.score, fields=fields)

    def search(self, query_vector: VectorLike, limit: int = 5) -> SearchResult:
        self._require_index()
        check_limit(limit)
        query = self.schema.check_vector(query_vector).astype(np.float32)

        distances = [
            (vector_distance(self.schema.distance_metric, query, stored), doc_id)
            for doc_id, stored in self._vectors.items()
        ]
        # KNN candidate pool first, then sort and page, as RediSearch does
        candidates = sorted(distances)[:self.schema.knn_candidates]

        hits = []
        for distance, doc_id in candidates[:limit]:
            document = self._documents[doc_id]
            fields = {
                self.schema.text_field: document.fields[self.schema.text_field],
                self.schema.distance_alias: distance,
            }
            hits.append(SearchHit(
                document=Document(id=doc_id, score=document.score, fields=fields),
                distance=distance,
            ))

        logger.log_search(self.schema.name, limit, len(candidates), len(hits))
        return SearchResult(total=len(candidates), hits=hits)

    def count(self) -> int:
        return len(self._documents)
