"""Question answering entry points.

Retrieval strategies are tried in order. A strategy that has no signal
(returns ``None``), that leaves no candidates once the intent's filters are
applied, or that raises, hands over to the next one; TF-IDF is always last, so
every question gets an answer.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Callable, List, Optional, Protocol, Sequence

from .answer import filter_candidates, synthesize_answer
from .cache import AsyncCache
from .config import Settings, get_settings
from .corpus import build_corpus
from .document import extract_text_from_pdf
from .embeddings import EmbeddingProvider, HuggingFaceEmbeddings, NullEmbeddings, embed_corpus
from .intents import Intent, classify_intent
from .profile import ChatAnswer, Chunk, Profile, ScoredChunk
from .retrieve import LexicalRetriever, SemanticRetriever
from .sectionizer import build_document_corpus

logger = logging.getLogger(__name__)


class Retriever(Protocol):
    name: str

    async def aretrieve(self, question: str, corpus: Sequence[Chunk]) -> Optional[List[ScoredChunk]]: ...


def provider_from_settings(settings: Settings) -> EmbeddingProvider:
    if not settings.hf_api_key:
        return NullEmbeddings()
    return HuggingFaceEmbeddings(
        settings.hf_api_key, url=settings.hf_embedding_url, timeout=settings.embedding_timeout
    )


def build_retrievers(provider: Optional[EmbeddingProvider], settings: Settings) -> List[Retriever]:
    retrievers: List[Retriever] = []
    if provider is not None and not isinstance(provider, NullEmbeddings):
        retrievers.append(SemanticRetriever(
            provider,
            min_score=settings.semantic_min_score,
            top_k=settings.top_k,
            timeout=settings.embedding_timeout,
        ))
    retrievers.append(LexicalRetriever(min_score=settings.lexical_min_score, top_k=settings.top_k))
    return retrievers


async def _retrieve_candidates(
    intent: Intent, question: str, corpus: Sequence[Chunk], retrievers: Sequence[Retriever]
) -> List[ScoredChunk]:
    for retriever in retrievers:
        try:
            ranked = await retriever.aretrieve(question, corpus)
        except Exception:
            logger.warning("%s retrieval failed, trying the next strategy", retriever.name, exc_info=True)
            continue
        if ranked is None:
            logger.info("%s retrieval has no signal for this question", retriever.name)
            continue
        candidates = filter_candidates(intent, ranked)
        if candidates:
            logger.debug("Using %d %s candidates", len(candidates), retriever.name)
            return candidates
    return []


def answer_question(question: str, profile: Profile, corpus: Optional[Sequence[Chunk]] = None) -> ChatAnswer:
    """Answer with TF-IDF retrieval only (no network)."""
    settings = get_settings()
    intent = classify_intent(question, profile)
    corpus = list(corpus) if corpus is not None else build_corpus(profile)
    candidates: List[ScoredChunk] = []
    if intent.kind.needs_retrieval:
        retriever = LexicalRetriever(min_score=settings.lexical_min_score, top_k=settings.top_k)
        candidates = filter_candidates(intent, retriever.retrieve(question, corpus) or [])
    return synthesize_answer(intent, question, profile, candidates, corpus)


async def answer_question_async(
    question: str,
    profile: Profile,
    provider: Optional[EmbeddingProvider] = None,
    corpus: Optional[Sequence[Chunk]] = None,
) -> ChatAnswer:
    """Answer with embedding retrieval when a provider is available, TF-IDF otherwise.

    Without an explicit `provider` the one configured in the settings is used.
    """
    settings = get_settings()
    if provider is None:
        provider = provider_from_settings(settings)
    intent = classify_intent(question, profile)
    corpus = list(corpus) if corpus is not None else build_corpus(profile)
    candidates: List[ScoredChunk] = []
    if intent.kind.needs_retrieval:
        candidates = await _retrieve_candidates(
            intent, question, corpus, build_retrievers(provider, settings)
        )
    return synthesize_answer(intent, question, profile, candidates, corpus)


class ResumeChatService:
    """Long-lived answerer for one profile with a cached corpus.

    The corpus is built once, from the resume document when a URL is given
    and extraction succeeds, otherwise from the structured profile. With an
    embedding provider the chunk embeddings are computed during that same
    build.
    """

    def __init__(
        self,
        profile: Profile,
        provider: Optional[EmbeddingProvider] = None,
        document_url: Optional[str] = None,
        extractor: Callable[[str], str] = extract_text_from_pdf,
        settings: Optional[Settings] = None,
    ) -> None:
        self.profile = profile
        self.settings = settings or get_settings()
        self.provider = provider if provider is not None else provider_from_settings(self.settings)
        self.document_url = document_url
        self.extractor = extractor
        self.retrievers = build_retrievers(self.provider, self.settings)
        self.corpus_cache: AsyncCache[List[Chunk]] = AsyncCache(self._load_corpus)

    async def _document_chunks(self) -> List[Chunk]:
        if not self.document_url:
            return []
        try:
            text = await asyncio.to_thread(self.extractor, self.document_url)
        except Exception as e:
            logger.warning("Resume document unavailable, using the structured profile: %s", e)
            return []
        return build_document_corpus(text)

    async def _load_corpus(self) -> List[Chunk]:
        corpus = await self._document_chunks()
        source = "document"
        if not corpus:
            corpus = build_corpus(self.profile)
            source = "profile"
        if not isinstance(self.provider, NullEmbeddings):
            try:
                corpus = await asyncio.wait_for(
                    asyncio.to_thread(embed_corpus, corpus, self.provider),
                    timeout=self.settings.embedding_timeout,
                )
            except asyncio.TimeoutError:
                logger.warning("Corpus embedding timed out; chunks will be embedded on demand")
            except Exception as e:
                logger.warning("Corpus embedding failed, keeping chunks without embeddings: %s", e)
        logger.info("Built %d corpus chunks from the %s", len(corpus), source)
        return corpus

    async def corpus(self) -> List[Chunk]:
        return await self.corpus_cache.get()

    async def answer(self, question: str) -> ChatAnswer:
        intent = classify_intent(question, self.profile)
        corpus = await self.corpus()
        candidates: List[ScoredChunk] = []
        if intent.kind.needs_retrieval:
            candidates = await _retrieve_candidates(intent, question, corpus, self.retrievers)
        return synthesize_answer(intent, question, self.profile, candidates, corpus)
