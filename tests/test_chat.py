import pytest

from conftest import FakeEmbeddings
from core import chat
from core.cache import CacheState
from core.chat import ResumeChatService, answer_question, answer_question_async, build_retrievers
from core.config import Settings
from core.embeddings import NullEmbeddings
from core.exceptions import DocumentExtractionError
from core.lexicon import NOT_FOUND_ANSWER

RESUME_TEXT = """Jane Doe
Software Engineer
Work Experience
Globex — Senior Engineer. Led a redesign of the checkout flow.
Skills
Languages: Python, Go
"""


def test_lexical_is_always_the_last_strategy():
    assert [r.name for r in build_retrievers(NullEmbeddings(), Settings())] == ["lexical"]
    assert [r.name for r in build_retrievers(FakeEmbeddings(), Settings())] == ["semantic", "lexical"]


@pytest.mark.asyncio
async def test_semantic_answers_general_questions(profile, fake_embeddings):
    result = await answer_question_async("Which dashboard was built for reporting?", profile, provider=fake_embeddings)
    assert result.answer != NOT_FOUND_ANSWER
    assert result.sources


@pytest.mark.asyncio
@pytest.mark.parametrize("provider", [FakeEmbeddings(fail_query=True), FakeEmbeddings(raise_error=True), None])
async def test_falls_back_to_lexical(profile, provider):
    question = "Which dashboard was built for reporting?"
    result = await answer_question_async(question, profile, provider=provider)
    assert result == answer_question(question, profile)


@pytest.mark.asyncio
async def test_gibberish_without_embeddings(profile):
    result = await answer_question_async("asdkjasdlk", profile, provider=FakeEmbeddings(fail_query=True))
    assert result.answer == NOT_FOUND_ANSWER
    assert result.sources == []


@pytest.mark.asyncio
async def test_semantic_role_answer_skips_goals(acme_profile, fake_embeddings):
    result = await answer_question_async("Tell me about the role at Acme", acme_profile, provider=fake_embeddings)
    assert "looking for" not in result.answer
    assert result.answer.startswith("Engineer at Acme")


def _service(profile, extractor, provider=None, url="https://example.com/cv.pdf"):
    return ResumeChatService(
        profile,
        provider=provider or NullEmbeddings(),
        document_url=url,
        extractor=extractor,
        settings=Settings(),
    )


@pytest.mark.asyncio
async def test_service_prefers_the_document(profile):
    service = _service(profile, lambda url: RESUME_TEXT)
    corpus = await service.corpus()
    assert corpus and all(c.id.startswith("doc-") for c in corpus)
    result = await service.answer("What programming languages does Jane know?")
    assert result.answer.startswith("Programming languages include: Python, Go.")


@pytest.mark.asyncio
async def test_service_falls_back_to_the_profile(profile):
    def broken(url):
        raise DocumentExtractionError("failed to fetch PDF", {"url": url})

    service = _service(profile, broken)
    ids = [c.id for c in await service.corpus()]
    assert "basics" in ids


@pytest.mark.asyncio
async def test_service_without_document_url_uses_profile(profile):
    service = _service(profile, lambda url: pytest.fail("extractor must not run"), url=None)
    assert (await service.corpus())[0].id == "basics"


@pytest.mark.asyncio
async def test_service_builds_the_corpus_once(profile):
    calls = []

    def extractor(url):
        calls.append(url)
        return RESUME_TEXT

    service = _service(profile, extractor)
    await service.answer("Tell me about the checkout redesign")
    await service.answer("What programming languages does Jane know?")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_service_embeds_the_corpus(profile, fake_embeddings):
    service = _service(profile, lambda url: RESUME_TEXT, provider=fake_embeddings)
    corpus = await service.corpus()
    assert all(c.embedding is not None for c in corpus)
    assert fake_embeddings.batch_calls == 1


@pytest.mark.asyncio
async def test_service_answers_when_corpus_embedding_fails(profile):
    provider = FakeEmbeddings(fail_batch=True)
    service = _service(profile, None, provider=provider, url=None)
    question = "Which dashboard was built for reporting?"
    result = await service.answer(question)
    assert result == answer_question(question, profile)
    assert all(c.embedding is None for c in await service.corpus())
    assert service.corpus_cache.state is CacheState.READY


@pytest.mark.asyncio
async def test_async_entry_point_uses_the_configured_provider(profile, monkeypatch, fake_embeddings):
    monkeypatch.setattr(chat, "provider_from_settings", lambda settings: fake_embeddings)
    await answer_question_async("Which dashboard was built for reporting?", profile)
    assert fake_embeddings.batch_calls == 1
