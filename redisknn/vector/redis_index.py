"""
RediSearch-backed vector index.

IndexManager owns the schema, DocumentWriter stores hashes, QueryEngine runs
KNN queries. RedisVectorIndex composes the three behind IVectorIndex.
"""

from typing import Optional
import uuid

import redis
from redis.commands.search.field import TextField, VectorField
from redis.commands.search.query import Query

from ..core.config import RedisSettings
from ..core.errors import (
    IgnorableIndexError,
    IndexConnectionError,
    IndexWriteError,
    SchemaError,
    SearchError,
)
from ..util.logging import logger
from .index import IVectorIndex, check_limit
from .types import (
    Document,
    IndexSchema,
    SearchHit,
    SearchResult,
    VectorLike,
    decode_vector,
    encode_vector,
)

SCORE_FIELD = "__score"
QUERY_VECTOR_PARAM = "query_vector"


def connect(settings: RedisSettings) -> redis.Redis:
    """
    Open the Redis connection used for the lifetime of the process.

    Responses are not decoded because vector fields hold binary blobs.
    """
    client = redis.Redis(
        host=settings.host,
        port=settings.port,
        password=settings.password,
        db=settings.db,
        socket_timeout=settings.socket_timeout,
        decode_responses=False,
    )
    try:
        client.ping()
    except redis.RedisError as e:
        raise IndexConnectionError(
            f"Failed to connect to Redis at {settings.host}:{settings.port}: {e}", e
        ) from e

    logger.log_operation("redis.connect", "success", {
        "host": settings.host,
        "port": settings.port,
        "db": settings.db,
    })
    return client


class IndexManager:
    """Creates and drops the named vector index."""

    def __init__(self, client: redis.Redis, schema: IndexSchema):
        self.client = client
        self.schema = schema

    def _ft(self):
        return self.client.ft(self.schema.name)

    def drop_index(self) -> Optional[IgnorableIndexError]:
        """
        Drop the index together with its documents.

        Returns:
            None on success, or an IgnorableIndexError describing why the
            drop failed (typically because the index does not exist yet)
        """
        try:
            self._ft().dropindex(delete_documents=True)
        except redis.RedisError as e:
            return IgnorableIndexError(f"Failed to drop index {self.schema.name}: {e}", e)

        logger.log_index_operation("drop", self.schema.name)
        return None

    def create_schema(self, schema: Optional[IndexSchema] = None) -> None:
        """
        Recreate the index: drop any existing one, then create it.

        Destructive: all previously stored documents are removed.

        Raises:
            SchemaError: if the schema is invalid or creation fails
        """
        if schema is not None:
            self.schema = schema
        self.schema.validate()

        ignored = self.drop_index()
        if ignored is not None:
            logger.debug(f"Ignoring drop failure before create: {ignored}")

        # RediSearch only accepts NOINDEX together with SORTABLE
        try:
            fields = [
                TextField(self.schema.text_field, no_stem=True, sortable=True, no_index=True),
                VectorField(
                    self.schema.vector_field,
                    self.schema.algorithm,
                    self.schema.vector_attributes(),
                ),
            ]
            self._ft().create_index(fields)
        except (ValueError, redis.RedisError) as e:
            logger.log_index_operation("create", self.schema.name, {"error": str(e)}, "failed")
            raise SchemaError(f"Failed to create index {self.schema.name}: {e}", e) from e

        logger.log_index_operation("create", self.schema.name, self.schema.vector_attributes())

    def count(self) -> int:
        try:
            info = self._ft().info()
        except redis.RedisError as e:
            raise SearchError(f"Failed to read index info for {self.schema.name}: {e}", e) from e
        return int(info["num_docs"])


class DocumentWriter:
    """Stores (text, vector) pairs as hashes picked up by the index."""

    def __init__(self, client: redis.Redis, schema: IndexSchema):
        self.client = client
        self.schema = schema

    def add_document(self, text: str, vector: VectorLike) -> str:
        """
        Write one document under a freshly generated id.

        Raises:
            VectorDimensionError: if the vector length does not match the schema
            IndexWriteError: if the write fails
        """
        arr = self.schema.check_vector(vector)
        doc_id = str(uuid.uuid4())

        mapping = {
            self.schema.text_field: text,
            self.schema.vector_field: encode_vector(arr, self.schema.element_type),
            SCORE_FIELD: 1.0,
        }
        try:
            self.client.hset(doc_id, mapping=mapping)
        except redis.RedisError as e:
            logger.log_index_operation("write", self.schema.name, {"doc_id": doc_id, "error": str(e)}, "failed")
            raise IndexWriteError(f"Failed to index document: {e}", e) from e

        logger.debug(f"Indexed document {doc_id} into {self.schema.name}")
        return doc_id

    def get_document(self, doc_id: str) -> Optional[Document]:
        try:
            raw = self.client.hgetall(doc_id)
        except redis.RedisError as e:
            raise IndexWriteError(f"Failed to read document {doc_id}: {e}", e) from e

        if not raw:
            return None

        data = {
            (k.decode("utf-8") if isinstance(k, bytes) else k): v
            for k, v in raw.items()
        }
        text = data.get(self.schema.text_field, b"")
        fields = {
            self.schema.text_field: text.decode("utf-8") if isinstance(text, bytes) else text,
        }
        if self.schema.vector_field in data:
            fields[self.schema.vector_field] = decode_vector(
                data[self.schema.vector_field], self.schema.element_type
            )
        score = data.get(SCORE_FIELD, 1.0)
        if isinstance(score, bytes):
            score = score.decode("utf-8")
        score = float(score)
        return Document(id=doc_id, score=score, fields=fields)


class QueryEngine:
    """Builds and runs KNN queries against the vector field."""

    def __init__(self, client: redis.Redis, schema: IndexSchema):
        self.client = client
        self.schema = schema

    def build_query(self, limit: int = 5) -> Query:
        """
        KNN over a fixed candidate pool, sorted by distance ascending and
        paged to `limit` results from offset 0.
        """
        check_limit(limit)
        knn = (
            f"(*)=>[KNN {self.schema.knn_candidates} @{self.schema.vector_field} "
            f"${QUERY_VECTOR_PARAM} AS {self.schema.distance_alias}]"
        )
        return (
            Query(knn)
            .sort_by(self.schema.distance_alias, asc=True)
            .return_fields(self.schema.text_field, self.schema.distance_alias)
            .paging(0, limit)
            .dialect(2)
        )

    def search(self, query_vector: VectorLike, limit: int = 5) -> SearchResult:
        """
        Raises:
            VectorDimensionError: if the query vector length does not match
            SearchError: if the search fails
        """
        arr = self.schema.check_vector(query_vector)
        query = self.build_query(limit)
        params = {QUERY_VECTOR_PARAM: encode_vector(arr, self.schema.element_type)}

        try:
            raw = self.client.ft(self.schema.name).search(query, query_params=params)
        except redis.RedisError as e:
            logger.log_search(self.schema.name, limit, 0, 0, "failed")
            raise SearchError(f"Failed to perform search: {e}", e) from e

        hits = []
        for doc in raw.docs:
            distance = float(getattr(doc, self.schema.distance_alias))
            fields = {
                self.schema.text_field: getattr(doc, self.schema.text_field, ""),
                self.schema.distance_alias: distance,
            }
            hits.append(SearchHit(
                document=Document(id=doc.id, score=1.0, fields=fields),
                distance=distance,
            ))

        logger.log_search(self.schema.name, limit, raw.total, len(hits))
        return SearchResult(total=raw.total, hits=hits)


class RedisVectorIndex(IVectorIndex):
    """IVectorIndex over a RediSearch index."""

    def __init__(self, client: redis.Redis, schema: IndexSchema):
        self.client = client
        self.schema = schema
        self.manager = IndexManager(client, schema)
        self.writer = DocumentWriter(client, schema)
        self.engine = QueryEngine(client, schema)

    def drop_index(self) -> Optional[IgnorableIndexError]:
        return self.manager.drop_index()

    def create_schema(self, schema: Optional[IndexSchema] = None) -> None:
        self.manager.create_schema(schema)
        self.schema = self.writer.schema = self.engine.schema = self.manager.schema

    def add_document(self, text: str, vector: VectorLike) -> str:
        return self.writer.add_document(text, vector)

    def get_document(self, doc_id: str) -> Optional[Document]:
        return self.writer.get_document(doc_id)

    def search(self, query_vector: VectorLike, limit: int = 5) -> SearchResult:
        return self.engine.search(query_vector, limit)

    def count(self) -> int:
        return self.manager.count()
