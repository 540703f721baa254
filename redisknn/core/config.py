"""
Configuration for the KNN demo.

Values come from the environment (optionally a .env file) and are collected
into frozen dataclasses that are handed to each component at construction.
"""

import os
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv

SUPPORTED_EMBED_PROVIDERS = ("openai", "hash")
SUPPORTED_VECTOR_BACKENDS = ("redis", "memory")
SUPPORTED_DISTANCE_METRICS = ("COSINE", "L2", "IP")
SUPPORTED_VECTOR_TYPES = ("FLOAT32", "FLOAT64")
SUPPORTED_ALGORITHMS = ("FLAT", "HNSW")


@dataclass(frozen=True)
class RedisSettings:
    """Connection settings for the Redis search service."""

    host: str = "localhost"
    port: int = 6379
    password: Optional[str] = None
    db: int = 0
    socket_timeout: float = 30.0


@dataclass(frozen=True)
class IndexSettings:
    """Vector index layout."""

    name: str = "MY_INDEX"
    dimensions: int = 1536
    distance_metric: str = "COSINE"
    element_type: str = "FLOAT32"
    algorithm: str = "FLAT"
    knn_candidates: int = 10


@dataclass(frozen=True)
class EmbeddingSettings:
    """Embedding provider settings."""

    provider: str = "openai"  # openai|hash
    api_key: Optional[str] = None
    model: str = "text-embedding-ada-002"
    dimensions: int = 1536
    timeout: float = 30.0


@dataclass(frozen=True)
class AppConfig:
    redis: RedisSettings = field(default_factory=RedisSettings)
    index: IndexSettings = field(default_factory=IndexSettings)
    embedding: EmbeddingSettings = field(default_factory=EmbeddingSettings)
    min_embed_interval_sec: float = 2.0
    vector_backend: str = "redis"  # redis|memory
    debug: bool = False

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def _flag(env: Mapping[str, str], name: str, default: str) -> bool:
    return env.get(name, default).lower() == "true"


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build an AppConfig from environment variables.

    Args:
        env: Mapping to read from; defaults to os.environ after loading .env

    Raises:
        ConfigError: if a numeric variable cannot be parsed
    """
    from .errors import ConfigError

    if env is None:
        load_dotenv()
        env = os.environ

    try:
        dimensions = int(env.get("EMBED_DIM", "1536"))

        redis_settings = RedisSettings(
            host=env.get("REDIS_HOST", "localhost"),
            port=int(env.get("REDIS_PORT", "6379")),
            password=env.get("REDIS_PASSWORD") or None,
            db=int(env.get("REDIS_DB", "0")),
            socket_timeout=float(env.get("REDIS_SOCKET_TIMEOUT_SEC", "30")),
        )
        index_settings = IndexSettings(
            name=env.get("INDEX_NAME", "MY_INDEX"),
            dimensions=dimensions,
            distance_metric=env.get("DISTANCE_METRIC", "COSINE").upper(),
            element_type=env.get("VECTOR_TYPE", "FLOAT32").upper(),
            algorithm=env.get("VECTOR_ALGORITHM", "FLAT").upper(),
            knn_candidates=int(env.get("KNN_CANDIDATES", "10")),
        )
        embedding_settings = EmbeddingSettings(
            provider=env.get("EMBED_PROVIDER", "openai").lower(),
            api_key=env.get("OPENAI_API_KEY") or None,
            model=env.get("EMBED_MODEL", "text-embedding-ada-002"),
            dimensions=dimensions,
            timeout=float(env.get("EMBED_TIMEOUT_SEC", "30")),
        )
        min_interval = float(env.get("EMBED_MIN_INTERVAL_SEC", "2.0"))
    except ValueError as e:
        raise ConfigError(f"Invalid numeric configuration value: {e}", e) from e

    return AppConfig(
        redis=redis_settings,
        index=index_settings,
        embedding=embedding_settings,
        min_embed_interval_sec=min_interval,
        vector_backend=env.get("VECTOR_BACKEND", "redis").lower(),
        debug=_flag(env, "DEBUG", "false"),
    )


def validate_config(config: AppConfig) -> List[str]:
    """Validate configuration and return any issues."""
    issues = []

    if config.embedding.provider not in SUPPORTED_EMBED_PROVIDERS:
        issues.append(f"Invalid EMBED_PROVIDER: {config.embedding.provider}")

    if config.vector_backend not in SUPPORTED_VECTOR_BACKENDS:
        issues.append(f"Invalid VECTOR_BACKEND: {config.vector_backend}")

    if config.index.distance_metric not in SUPPORTED_DISTANCE_METRICS:
        issues.append(f"Invalid DISTANCE_METRIC: {config.index.distance_metric}")

    if config.index.element_type not in SUPPORTED_VECTOR_TYPES:
        issues.append(f"Invalid VECTOR_TYPE: {config.index.element_type}")

    if config.index.algorithm not in SUPPORTED_ALGORITHMS:
        issues.append(f"Invalid VECTOR_ALGORITHM: {config.index.algorithm}")

    if config.index.dimensions < 1:
        issues.append("EMBED_DIM must be >= 1")

    if config.index.knn_candidates < 1:
        issues.append("KNN_CANDIDATES must be >= 1")

    if config.embedding.provider == "openai" and not config.embedding.api_key:
        issues.append("EMBED_PROVIDER=openai requires OPENAI_API_KEY")

    if config.embedding.timeout <= 0:
        issues.append("EMBED_TIMEOUT_SEC must be > 0")

    if config.min_embed_interval_sec < 0:
        issues.append("EMBED_MIN_INTERVAL_SEC must be >= 0")

    return issues
