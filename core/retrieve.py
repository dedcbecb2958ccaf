"""Retrieval strategies: TF-IDF with cosine similarity, and embedding similarity.

Both strategies rank the same corpus of chunks. ``retrieve`` returns the
candidates that clear the strategy's threshold, or ``None`` when the strategy
has no signal at all for the question (e.g. the question could not be
embedded), which tells the orchestrator to try the next strategy.
"""

from __future__ import annotations
import asyncio
import logging
import math
from collections import Counter
from dataclasses import replace
from typing import Dict, List, Optional, Sequence

from sklearn.feature_extraction import DictVectorizer
from sklearn.metrics.pairwise import cosine_similarity as _pairwise_cosine

from .embeddings import EmbeddingProvider, embedding_similarity
from .normalize_text import tokenize
from .profile import Chunk, ScoredChunk

logger = logging.getLogger(__name__)

TermVector = Dict[str, float]


def term_frequencies(tokens: Sequence[str]) -> TermVector:
    n = len(tokens) or 1
    return {t: c / n for t, c in Counter(tokens).items()}


def inverse_document_frequencies(docs: Sequence[Sequence[str]]) -> TermVector:
    """``ln(1 + N / (1 + df))`` per term; finite even for terms in every document."""
    df: Counter = Counter()
    for doc_tokens in docs:
        df.update(set(doc_tokens))
    n = len(docs) or 1
    return {t: math.log(1 + n / (1 + d)) for t, d in df.items()}


def tfidf_vector(tf: TermVector, idf: TermVector) -> TermVector:
    return {t: v * idf.get(t, 0.0) for t, v in tf.items()}


def cosine_similarity(a: TermVector, b: TermVector) -> float:
    """Cosine of two sparse term vectors.

    ``LexicalIndex.rank`` computes the same score in bulk with scikit-learn;
    this pairwise form is the reference its results are checked against.
    """
    a2 = sum(v * v for v in a.values())
    b2 = sum(v * v for v in b.values())
    if a2 == 0 or b2 == 0:
        return 0.0
    small, big = (a, b) if len(a) < len(b) else (b, a)
    dot = sum(v * big.get(k, 0.0) for k, v in small.items())
    return dot / (math.sqrt(a2) * math.sqrt(b2))


def _sorted(scored: List[ScoredChunk]) -> List[ScoredChunk]:
    # stable: equal scores keep corpus order
    return sorted(scored, key=lambda s: s.score, reverse=True)


class LexicalIndex:
    """TF-IDF model over a fixed corpus."""

    def __init__(self, corpus: Sequence[Chunk]) -> None:
        self.corpus = list(corpus)
        self.doc_tokens = [tokenize(c.text) for c in self.corpus]
        self.idf = inverse_document_frequencies(self.doc_tokens)
        self.doc_vectors = [tfidf_vector(term_frequencies(t), self.idf) for t in self.doc_tokens]
        self._vectoriser: Optional[DictVectorizer] = None
        self._matrix = None
        if self.idf:
            self._vectoriser = DictVectorizer()
            self._matrix = self._vectoriser.fit_transform(self.doc_vectors)

    def query_vector(self, question: str) -> TermVector:
        return tfidf_vector(term_frequencies(tokenize(question)), self.idf)

    def rank(self, question: str) -> List[ScoredChunk]:
        """Every chunk with its cosine score against `question`, best first."""
        if self._vectoriser is None:
            return [ScoredChunk(c, 0.0) for c in self.corpus]
        q = self._vectoriser.transform([self.query_vector(question)])
        similarities = _pairwise_cosine(q, self._matrix).flatten()
        return _sorted([ScoredChunk(c, float(s)) for c, s in zip(self.corpus, similarities)])


def select_top(ranked: Sequence[ScoredChunk], top_k: int, min_score: float) -> List[ScoredChunk]:
    return [s for s in list(ranked)[:top_k] if s.score > min_score]


class LexicalRetriever:
    name = "lexical"

    def __init__(self, min_score: float = 0.02, top_k: int = 5) -> None:
        self.min_score = min_score
        self.top_k = top_k

    def retrieve(self, question: str, corpus: Sequence[Chunk]) -> Optional[List[ScoredChunk]]:
        return select_top(LexicalIndex(corpus).rank(question), self.top_k, self.min_score)

    async def aretrieve(self, question: str, corpus: Sequence[Chunk]) -> Optional[List[ScoredChunk]]:
        return self.retrieve(question, corpus)


class SemanticRetriever:
    name = "semantic"

    def __init__(
        self,
        provider: EmbeddingProvider,
        min_score: float = 0.3,
        top_k: int = 5,
        timeout: float = 10.0,
    ) -> None:
        self.provider = provider
        self.min_score = min_score
        self.top_k = top_k
        self.timeout = timeout

    async def _call(self, fn, arg):
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn, arg), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.warning("Embedding call timed out after %.1fs", self.timeout)
            return None

    async def embed_missing(self, corpus: Sequence[Chunk]) -> List[Chunk]:
        """Fill in embeddings for chunks that do not carry one yet (one batch call)."""
        chunks = list(corpus)
        missing = [i for i, c in enumerate(chunks) if c.embedding is None]
        if not missing:
            return chunks
        vectors = await self._call(self.provider.embed_batch, [chunks[i].text for i in missing])
        if not vectors or len(vectors) != len(missing):
            return chunks
        for i, vec in zip(missing, vectors):
            if vec is not None:
                chunks[i] = replace(chunks[i], embedding=tuple(vec))
        return chunks

    async def rank(self, question: str, corpus: Sequence[Chunk]) -> Optional[List[ScoredChunk]]:
        query_vec = await self._call(self.provider.embed, question)
        if query_vec is None:
            return None
        chunks = await self.embed_missing(corpus)
        return _sorted([ScoredChunk(c, embedding_similarity(query_vec, c.embedding)) for c in chunks])

    async def aretrieve(self, question: str, corpus: Sequence[Chunk]) -> Optional[List[ScoredChunk]]:
        ranked = await self.rank(question, corpus)
        if ranked is None:
            return None
        return select_top(ranked, self.top_k, self.min_score)
