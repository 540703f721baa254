"""
Data types shared by the embedding client and the index backends.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Union

import numpy as np

from ..core.config import (
    IndexSettings,
    SUPPORTED_ALGORITHMS,
    SUPPORTED_DISTANCE_METRICS,
    SUPPORTED_VECTOR_TYPES,
)
from ..core.errors import SchemaError, VectorDimensionError

# Little-endian packing as expected by RediSearch vector fields
_DTYPES = {
    "FLOAT32": np.dtype("<f4"),
    "FLOAT64": np.dtype("<f8"),
}

VectorLike = Union[np.ndarray, Sequence[float]]


@dataclass(frozen=True)
class IndexSchema:
    """Declared structure of the vector index."""

    name: str
    dimensions: int
    distance_metric: str = "COSINE"
    element_type: str = "FLOAT32"
    algorithm: str = "FLAT"
    text_field: str = "chat"
    vector_field: str = "chat_embeddings"
    distance_alias: str = "vector_dist"
    knn_candidates: int = 10

    @classmethod
    def from_settings(cls, settings: IndexSettings) -> "IndexSchema":
        return cls(
            name=settings.name,
            dimensions=settings.dimensions,
            distance_metric=settings.distance_metric,
            element_type=settings.element_type,
            algorithm=settings.algorithm,
            knn_candidates=settings.knn_candidates,
        )

    def validate(self) -> None:
        """Raise SchemaError if any attribute is unsupported."""
        if not self.name:
            raise SchemaError("Index name must not be empty")
        if self.dimensions < 1:
            raise SchemaError(f"Invalid dimensions: {self.dimensions}")
        if self.distance_metric not in SUPPORTED_DISTANCE_METRICS:
            raise SchemaError(f"Unsupported distance metric: {self.distance_metric}")
        if self.element_type not in SUPPORTED_VECTOR_TYPES:
            raise SchemaError(f"Unsupported vector element type: {self.element_type}")
        if self.algorithm not in SUPPORTED_ALGORITHMS:
            raise SchemaError(f"Unsupported vector algorithm: {self.algorithm}")
        if self.knn_candidates < 1:
            raise SchemaError(f"Invalid KNN candidate pool size: {self.knn_candidates}")

    def vector_attributes(self) -> Dict[str, object]:
        return {
            "TYPE": self.element_type,
            "DIM": self.dimensions,
            "DISTANCE_METRIC": self.distance_metric,
        }

    def check_vector(self, vector: VectorLike) -> np.ndarray:
        """Return vector as a 1-D float array, enforcing the declared dimensionality."""
        arr = np.asarray(vector, dtype=_DTYPES[self.element_type]).reshape(-1)
        if arr.shape[0] != self.dimensions:
            raise VectorDimensionError(
                f"Vector dimension {arr.shape[0]} does not match expected dimension {self.dimensions}"
            )
        return arr


@dataclass(frozen=True)
class Document:
    """A stored record: generated id, fixed score and its fields."""

    id: str
    score: float
    fields: Dict[str, object]


@dataclass(frozen=True)
class SearchHit:
    document: Document
    distance: float


@dataclass(frozen=True)
class SearchResult:
    """Hits ordered by ascending distance, plus the total match count."""

    total: int
    hits: List[SearchHit] = field(default_factory=list)

    def __iter__(self) -> Iterator[SearchHit]:
        return iter(self.hits)

    def __len__(self) -> int:
        return len(self.hits)


def to_embedding(values: VectorLike) -> np.ndarray:
    """Freeze raw provider output into an immutable float32 vector."""
    vec = np.array(values, dtype=np.float32).reshape(-1)
    vec.flags.writeable = False
    return vec


def encode_vector(vector: VectorLike, element_type: str = "FLOAT32") -> bytes:
    """Pack a vector into the binary blob stored in the hash field."""
    return np.asarray(vector, dtype=_DTYPES[element_type]).tobytes()


def decode_vector(blob: bytes, element_type: str = "FLOAT32") -> np.ndarray:
    return np.frombuffer(blob, dtype=_DTYPES[element_type]).astype(np.float32)
