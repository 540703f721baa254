"""
Error taxonomy for the embedding and index layers.

Every component wraps the failure it receives with context and re-raises it
as one of these types. Nothing here retries.
"""


class RedisKnnError(Exception):
    """Base class for all errors raised by redisknn."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class ConfigError(RedisKnnError):
    """Configuration is missing or invalid."""


class InvalidInputError(RedisKnnError, ValueError):
    """Caller passed bad input (e.g. empty text)."""


class VectorDimensionError(InvalidInputError):
    """Vector length does not match the index dimensionality."""


# Embedding provider failures
class EmbeddingError(RedisKnnError):
    """Base class for embedding provider failures."""


class ProviderError(EmbeddingError):
    """Upstream embedding provider returned an error."""


class EmptyResultError(EmbeddingError):
    """Provider returned zero embeddings for a valid input."""


class EmbeddingTimeoutError(EmbeddingError, TimeoutError):
    """Embedding request exceeded its deadline."""


# Index service failures
class IndexServiceError(RedisKnnError):
    """Base class for index service failures."""


class IndexConnectionError(IndexServiceError):
    """Could not reach the index service."""


class SchemaError(IndexServiceError):
    """Index schema is malformed or could not be created."""


class IndexWriteError(IndexServiceError):
    """A document could not be written to or read from the index."""


class SearchError(IndexServiceError):
    """A search request against the index failed."""


class IgnorableIndexError(IndexServiceError):
    """
    Failure the caller may choose to discard, e.g. dropping an index that
    does not exist yet. Returned, never raised, by IndexManager.drop_index().
    """
