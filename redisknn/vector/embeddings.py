"""
Embedding providers: text in, fixed-length float32 vector out.
"""

from abc import ABC, abstractmethod
import hashlib
import re
from typing import List, Optional

import numpy as np
import openai

from ..core.config import EmbeddingSettings
from ..core.errors import (
    ConfigError,
    EmbeddingTimeoutError,
    EmptyResultError,
    InvalidInputError,
    ProviderError,
    VectorDimensionError,
)
from ..util.logging import logger
from .types import to_embedding

_TOKEN_RE = re.compile(r"\w+")


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    name = "abstract"

    def embed(self, text: str) -> np.ndarray:
        """
        Embed a single text.

        Raises:
            InvalidInputError: if text is empty after stripping whitespace
            VectorDimensionError: if the provider returned the wrong length
        """
        if text is None or not text.strip():
            raise InvalidInputError("Input text must be a non-empty string.")

        vector = to_embedding(self._embed(text.strip()))
        if vector.shape[0] != self.get_dimension():
            raise VectorDimensionError(
                f"Provider {self.name} returned {vector.shape[0]} components, expected {self.get_dimension()}"
            )
        return vector

    @abstractmethod
    def _embed(self, text: str) -> List[float]:
        """Generate the raw embedding for already-validated text."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for offline runs and tests.

    Each word token is hashed to a bucket and a sign (feature hashing), so
    texts sharing vocabulary end up close under cosine distance without any
    model or network access.
    """

    name = "hash"

    def __init__(self, dimension: int = 1536):
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension

    def _embed(self, text: str) -> List[float]:
        tokens = _TOKEN_RE.findall(text.lower()) or [text]
        vector = np.zeros(self.dimension, dtype=np.float32)

        for token in tokens:
            digest = hashlib.md5(token.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:8], "little") % self.dimension
            sign = 1.0 if digest[8] & 1 else -1.0
            vector[bucket] += sign

        norm = np.linalg.norm(vector)
        if norm > 0:
            vector /= norm
        return vector.tolist()

    def get_dimension(self) -> int:
        return self.dimension


class OpenAIEmbedding(IEmbeddingProvider):
    """OpenAI embeddings API provider.

    One request per call with retries disabled on the SDK client. The
    configured timeout is handed to the SDK as an httpx timeout, which bounds
    each phase of the request (connect, write, read, pool) separately, not
    the request as a whole; a slow trickling response can exceed it in total.
    """

    name = "openai"

    def __init__(self, settings: EmbeddingSettings, client: Optional["openai.OpenAI"] = None):
        self.settings = settings
        if client is None:
            if not settings.api_key:
                raise ProviderError("Missing OPENAI_API_KEY")
            try:
                client = openai.OpenAI(
                    api_key=settings.api_key,
                    timeout=settings.timeout,
                    max_retries=0,
                )
            except openai.OpenAIError as e:
                raise ProviderError(f"Failed to initialize OpenAI client: {e}", e) from e
        self.client = client

    def _embed(self, text: str) -> List[float]:
        try:
            response = self.client.embeddings.create(
                model=self.settings.model,
                input=[text],
            )
        except openai.APITimeoutError as e:
            logger.log_embedding_request(self.name, self.settings.model, text, "timeout")
            raise EmbeddingTimeoutError(
                f"Embedding request timed out after {self.settings.timeout}s", e
            ) from e
        except openai.OpenAIError as e:
            logger.log_embedding_request(self.name, self.settings.model, text, "failed", {"error": str(e)})
            raise ProviderError(f"Error creating embeddings: {e}", e) from e

        if not response.data:
            logger.log_embedding_request(self.name, self.settings.model, text, "empty")
            raise EmptyResultError("No embeddings found for the input")

        logger.log_embedding_request(self.name, self.settings.model, text)
        return response.data[0].embedding

    def get_dimension(self) -> int:
        return self.settings.dimensions


def get_embedding_provider(settings: EmbeddingSettings) -> IEmbeddingProvider:
    """Get configured embedding provider implementation."""
    if settings.provider == "hash":
        return DeterministicHashEmbedding(settings.dimensions)
    if settings.provider == "openai":
        return OpenAIEmbedding(settings)
    raise ConfigError(f"Unknown embedding provider: {settings.provider}")
