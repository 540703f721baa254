"""
Tests for configuration loading, validation and credential redaction.
"""

import pytest

from redisknn.core.config import AppConfig, EmbeddingSettings, load_config, validate_config
from redisknn.core.errors import ConfigError
from redisknn.util.logging import sanitize_config


def test_defaults():
    config = load_config({})

    assert config.redis.host == "localhost"
    assert config.redis.port == 6379
    assert config.redis.db == 0
    assert config.redis.password is None
    assert config.index.name == "MY_INDEX"
    assert config.index.dimensions == 1536
    assert config.index.distance_metric == "COSINE"
    assert config.index.element_type == "FLOAT32"
    assert config.index.algorithm == "FLAT"
    assert config.index.knn_candidates == 10
    assert config.embedding.provider == "openai"
    assert config.embedding.model == "text-embedding-ada-002"
    assert config.embedding.timeout == 30.0
    assert config.min_embed_interval_sec == 2.0
    assert config.vector_backend == "redis"
    assert config.debug is False


def test_overrides():
    config = load_config({
        "REDIS_HOST": "redis.internal",
        "REDIS_PORT": "6380",
        "REDIS_PASSWORD": "hunter2",
        "REDIS_DB": "3",
        "INDEX_NAME": "CHATS",
        "EMBED_DIM": "384",
        "DISTANCE_METRIC": "l2",
        "EMBED_PROVIDER": "HASH",
        "EMBED_MIN_INTERVAL_SEC": "0",
        "VECTOR_BACKEND": "memory",
        "DEBUG": "TRUE",
    })

    assert config.redis.host == "redis.internal"
    assert config.redis.port == 6380
    assert config.redis.password == "hunter2"
    assert config.redis.db == 3
    assert config.index.name == "CHATS"
    assert config.index.dimensions == 384
    assert config.embedding.dimensions == 384
    assert config.index.distance_metric == "L2"
    assert config.embedding.provider == "hash"
    assert config.min_embed_interval_sec == 0.0
    assert config.vector_backend == "memory"
    assert config.debug is True


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("INDEX_NAME", "FROM_ENV")
    monkeypatch.setattr("redisknn.core.config.load_dotenv", lambda: False)

    assert load_config().index.name == "FROM_ENV"


def test_bad_number_raises_config_error():
    with pytest.raises(ConfigError):
        load_config({"REDIS_PORT": "not-a-port"})


def test_valid_config_has_no_issues():
    config = load_config({"OPENAI_API_KEY": "sk-test"})
    assert validate_config(config) == []


def test_hash_provider_needs_no_key():
    config = load_config({"EMBED_PROVIDER": "hash", "VECTOR_BACKEND": "memory"})
    assert validate_config(config) == []


def test_validation_issues():
    config = load_config({
        "EMBED_PROVIDER": "cohere",
        "VECTOR_BACKEND": "sqlite",
        "DISTANCE_METRIC": "HAMMING",
        "VECTOR_TYPE": "INT8",
        "VECTOR_ALGORITHM": "IVF",
        "EMBED_DIM": "0",
        "KNN_CANDIDATES": "0",
        "EMBED_TIMEOUT_SEC": "0",
        "EMBED_MIN_INTERVAL_SEC": "-1",
    })

    issues = validate_config(config)

    assert len(issues) == 9
    assert any("EMBED_PROVIDER" in issue for issue in issues)
    assert any("VECTOR_BACKEND" in issue for issue in issues)


def test_openai_without_key_is_an_issue():
    issues = validate_config(AppConfig(embedding=EmbeddingSettings(provider="openai", api_key=None)))
    assert issues == ["EMBED_PROVIDER=openai requires OPENAI_API_KEY"]


def test_sanitize_redacts_credentials():
    config = load_config({"REDIS_PASSWORD": "hunter2", "OPENAI_API_KEY": "sk-secret"})

    sanitized = sanitize_config(config.to_dict())

    assert sanitized["redis"]["password"] == "[REDACTED]"
    assert sanitized["embedding"]["api_key"] == "[REDACTED]"
    assert sanitized["redis"]["host"] == "localhost"
    assert "hunter2" not in str(sanitized)


def test_sanitize_leaves_unset_credentials():
    sanitized = sanitize_config(AppConfig().to_dict())
    assert sanitized["redis"]["password"] is None
