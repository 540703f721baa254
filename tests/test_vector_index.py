"""
Behavioural tests for the in-memory vector index: document counts, KNN
ordering, limits and drop-then-recreate semantics.
"""

import numpy as np
import pytest

from redisknn.core.errors import (
    InvalidInputError,
    SchemaError,
    VectorDimensionError,
)
from redisknn.vector.embeddings import DeterministicHashEmbedding
from redisknn.vector.index import IVectorIndex, InMemoryVectorIndex, vector_distance
from redisknn.vector.types import IndexSchema, SearchResult

DIM = 64


@pytest.fixture
def schema():
    return IndexSchema(name="TEST_INDEX", dimensions=DIM)


@pytest.fixture
def index(schema):
    idx = InMemoryVectorIndex(schema)
    idx.create_schema()
    return idx


@pytest.fixture
def embedder():
    return DeterministicHashEmbedding(dimension=DIM)


def random_vectors(n, seed=7):
    rng = np.random.default_rng(seed)
    return rng.normal(size=(n, DIM)).astype(np.float32)


def test_index_interface(index):
    assert isinstance(index, IVectorIndex)


def test_add_documents_count_and_lookup(index):
    """After N writes the index holds N documents, each retrievable by id."""
    vectors = random_vectors(12)
    ids = [index.add_document(f"text {i}", v) for i, v in enumerate(vectors)]

    assert index.count() == 12
    assert len(set(ids)) == 12
    for i, doc_id in enumerate(ids):
        doc = index.get_document(doc_id)
        assert doc is not None
        assert doc.score == 1.0
        assert doc.fields["chat"] == f"text {i}"
        assert np.allclose(doc.fields["chat_embeddings"], vectors[i])


def test_returned_vector_cannot_alter_index(index):
    """Writing to a fetched vector must not change what is stored."""
    doc_id = index.add_document("text", np.array([1.0] + [0.0] * (DIM - 1)))

    fetched = index.get_document(doc_id).fields["chat_embeddings"]
    fetched[:] = 0.0

    again = index.get_document(doc_id).fields["chat_embeddings"]
    assert again[0] == 1.0
    assert index.search(np.array([1.0] + [0.0] * (DIM - 1))).hits[0].distance == pytest.approx(0.0, abs=1e-6)


def test_get_unknown_document(index):
    assert index.get_document("missing") is None


def test_duplicate_texts_are_not_deduplicated(index, embedder):
    vec = embedder.embed("same text")
    first = index.add_document("same text", vec)
    second = index.add_document("same text", vec)

    assert first != second
    assert index.count() == 2


@pytest.mark.parametrize("limit", [1, 3, 5, 10, 20])
def test_search_respects_limit_and_order(index, limit):
    for i, v in enumerate(random_vectors(15)):
        index.add_document(f"text {i}", v)

    result = index.search(random_vectors(1, seed=99)[0], limit=limit)

    assert isinstance(result, SearchResult)
    assert len(result) <= limit
    assert len(result) <= index.schema.knn_candidates
    distances = [hit.distance for hit in result]
    assert distances == sorted(distances)
    # total reflects the KNN candidate pool, not the page
    assert result.total == 10


def test_round_trip_minimum_distance(index):
    vectors = random_vectors(8)
    ids = [index.add_document(f"text {i}", v) for i, v in enumerate(vectors)]

    result = index.search(vectors[3], limit=5)

    assert result.hits[0].document.id == ids[3]
    assert result.hits[0].distance == pytest.approx(0.0, abs=1e-6)
    assert all(result.hits[0].distance <= hit.distance for hit in result)


def test_search_returns_only_text_and_distance(index, embedder):
    index.add_document("hello world", embedder.embed("hello world"))

    hit = index.search(embedder.embed("hello world")).hits[0]

    assert set(hit.document.fields) == {"chat", "vector_dist"}


def test_create_schema_twice_leaves_empty_index(index):
    for i, v in enumerate(random_vectors(4)):
        index.add_document(f"text {i}", v)

    index.create_schema()
    index.create_schema()

    assert index.count() == 0
    assert len(index.search(random_vectors(1)[0])) == 0


def test_drop_before_create_is_ignorable(schema):
    idx = InMemoryVectorIndex(schema)

    ignored = idx.drop_index()

    assert ignored is not None
    idx.create_schema()
    assert idx.drop_index() is None


def test_operations_require_created_index(schema):
    idx = InMemoryVectorIndex(schema)

    with pytest.raises(SchemaError):
        idx.add_document("text", np.ones(DIM))
    with pytest.raises(SchemaError):
        idx.search(np.ones(DIM))


def test_dimension_mismatch(index):
    with pytest.raises(VectorDimensionError):
        index.add_document("text", np.ones(DIM + 1))
    with pytest.raises(VectorDimensionError):
        index.search(np.ones(DIM - 1))


def test_invalid_limit(index):
    with pytest.raises(InvalidInputError):
        index.search(np.ones(DIM), limit=0)


def test_invalid_schema_rejected():
    with pytest.raises(SchemaError):
        InMemoryVectorIndex(IndexSchema(name="BAD", dimensions=DIM, distance_metric="HAMMING"))
    with pytest.raises(SchemaError):
        InMemoryVectorIndex(IndexSchema(name="BAD", dimensions=0))


class TestDistanceMetrics:
    """Distances follow the RediSearch definitions."""

    def test_cosine(self):
        a = np.array([1.0, 0.0])
        assert vector_distance("COSINE", a, a) == pytest.approx(0.0)
        assert vector_distance("COSINE", a, np.array([0.0, 1.0])) == pytest.approx(1.0)
        assert vector_distance("COSINE", a, -a) == pytest.approx(2.0)

    def test_cosine_zero_vector(self):
        assert vector_distance("COSINE", np.zeros(2), np.array([1.0, 0.0])) == 1.0

    def test_l2_is_squared(self):
        assert vector_distance("L2", np.array([0.0, 0.0]), np.array([3.0, 4.0])) == pytest.approx(25.0)

    def test_inner_product(self):
        a = np.array([1.0, 0.0])
        assert vector_distance("IP", a, a) == pytest.approx(0.0)
        assert vector_distance("IP", a, np.array([0.5, 0.0])) == pytest.approx(0.5)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
