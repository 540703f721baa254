"""
Embedding providers and vector index backends.
"""

from .types import IndexSchema, Document, SearchHit, SearchResult, encode_vector, decode_vector
from .embeddings import (
    IEmbeddingProvider,
    DeterministicHashEmbedding,
    OpenAIEmbedding,
    get_embedding_provider,
)
from .index import IVectorIndex, InMemoryVectorIndex
from .redis_index import IndexManager, DocumentWriter, QueryEngine, RedisVectorIndex, connect


def get_vector_index(config, client=None) -> IVectorIndex:
    """Get configured vector index implementation.

    Args:
        config: AppConfig
        client: Optional pre-built redis client; one is opened otherwise
    """
    from ..core.errors import ConfigError

    schema = IndexSchema.from_settings(config.index)

    if config.vector_backend == "memory":
        return InMemoryVectorIndex(schema)
    if config.vector_backend == "redis":
        if client is None:
            client = connect(config.redis)
        return RedisVectorIndex(client, schema)
    raise ConfigError(f"Unknown vector backend: {config.vector_backend}")


__all__ = [
    'IndexSchema',
    'Document',
    'SearchHit',
    'SearchResult',
    'encode_vector',
    'decode_vector',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'OpenAIEmbedding',
    'get_embedding_provider',
    'IVectorIndex',
    'InMemoryVectorIndex',
    'IndexManager',
    'DocumentWriter',
    'QueryEngine',
    'RedisVectorIndex',
    'connect',
    'get_vector_index',
]
