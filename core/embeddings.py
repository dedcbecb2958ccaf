"""Embedding provider and vector similarity.

The provider is unreliable by nature (missing key, HTTP errors, odd payloads).
Every failure is logged and reported as ``None`` for the affected text so that
callers can keep scoring everything else and fall back to TF-IDF when the
question itself has no embedding.
"""

from __future__ import annotations
import logging
from dataclasses import replace
from numbers import Real
from typing import Any, List, Optional, Protocol, Sequence

import numpy as np
import requests

from .config import DEFAULT_EMBEDDING_URL
from .exceptions import EmbeddingProviderError
from .profile import Chunk

logger = logging.getLogger(__name__)

Vector = Sequence[float]


class EmbeddingProvider(Protocol):
    def embed(self, text: str) -> Optional[List[float]]: ...

    def embed_batch(self, texts: Sequence[str]) -> List[Optional[List[float]]]: ...


class NullEmbeddings:
    """Provider used when no credential is configured: never has a signal."""

    def embed(self, text: str) -> Optional[List[float]]:
        return None

    def embed_batch(self, texts: Sequence[str]) -> List[Optional[List[float]]]:
        return [None for _ in texts]


def _as_vector(value: Any) -> Optional[List[float]]:
    if (
        isinstance(value, list)
        and value
        and all(isinstance(v, Real) and not isinstance(v, bool) for v in value)
    ):
        return [float(v) for v in value]
    return None


class HuggingFaceEmbeddings:
    """Client for the Hugging Face feature-extraction inference endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        url: str = DEFAULT_EMBEDDING_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def _post(self, inputs: Any) -> Any:
        if not self.api_key:
            raise EmbeddingProviderError("embedding provider has no API key")
        try:
            resp = self.session.post(
                self.url,
                json={"inputs": inputs},
                headers={"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EmbeddingProviderError("embedding request failed", {"error": str(e)}) from e
        if not resp.ok:
            raise EmbeddingProviderError("embedding request rejected", {"status": resp.status_code})
        try:
            return resp.json()
        except ValueError as e:
            raise EmbeddingProviderError("embedding response is not JSON") from e

    def embed(self, text: str) -> Optional[List[float]]:
        if not self.api_key:
            return None
        try:
            data = self._post(text)
        except EmbeddingProviderError as e:
            logger.warning("Embedding unavailable, falling back to TF-IDF: %s", e)
            return None
        # single input may come back as [vector] or as the bare vector
        vec = _as_vector(data)
        if vec is None and isinstance(data, list) and data:
            vec = _as_vector(data[0])
        if vec is None:
            logger.warning("Embedding response had an unexpected shape")
        return vec

    def embed_batch(self, texts: Sequence[str]) -> List[Optional[List[float]]]:
        texts = list(texts)
        if not self.api_key or not texts:
            return [None for _ in texts]
        try:
            data = self._post(texts)
        except EmbeddingProviderError as e:
            logger.warning("Batch embedding unavailable: %s", e)
            return [None for _ in texts]
        if not isinstance(data, list) or len(data) != len(texts):
            logger.warning("Batch embedding response does not match the %d inputs", len(texts))
            return [None for _ in texts]
        return [_as_vector(item) for item in data]


def embedding_similarity(a: Optional[Vector], b: Optional[Vector]) -> float:
    """Cosine similarity of two embeddings; 0.0 for missing, mismatched or zero vectors."""
    if a is None or b is None:
        return 0.0
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    if va.ndim != 1 or va.shape != vb.shape or va.size == 0:
        return 0.0
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denom)


def embed_corpus(corpus: Sequence[Chunk], provider: EmbeddingProvider) -> List[Chunk]:
    """Return the corpus with embeddings attached where the provider produced one."""
    vectors = provider.embed_batch([c.text for c in corpus])
    if len(vectors) != len(corpus):
        return list(corpus)
    return [
        replace(c, embedding=tuple(v)) if v is not None else c
        for c, v in zip(corpus, vectors)
    ]
