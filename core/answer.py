"""Answer synthesis.

Turns a classified question plus retrieved candidates into the final answer
text, its sources and the suggested follow-up questions. Answers are built
only from profile facts and corpus text; nothing is generated.
"""

from __future__ import annotations
import re
from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence

from . import lexicon
from .clean import clean_snippet, is_bare_label
from .corpus import job_title
from .intents import Intent, IntentKind
from .normalize_text import tokenize
from .profile import ChatAnswer, Chunk, Experience, Profile, ScoredChunk, Source
from .sentences import extract_relevant_sentences, split_sentences

MAX_SNIPPET_SENTENCES = 3


# ---------------------------
# Shared helpers
# ---------------------------
def suggested_questions(profile: Profile) -> List[str]:
    """Four follow-up questions built from the name, top technology and latest role."""
    name = profile.basics.name
    techs = [t for j in profile.experience for t in j.tech] + [t for p in profile.projects for t in p.tech]
    tech_counts = Counter(techs)
    top_tech = tech_counts.most_common(1)[0][0] if tech_counts else None
    recent = profile.experience[0] if profile.experience else None
    return [
        f"What is {name}'s background and experience?",
        f"What experience does {name} have with {top_tech}?"
        if top_tech else f"What technologies has {name} worked with?",
        f"Tell me about the role at {recent.company}"
        if recent else f"What is {name}'s most recent work experience?",
        f"What are {name}'s key skills and strengths?",
    ]


def not_found(profile: Profile) -> ChatAnswer:
    return ChatAnswer(lexicon.NOT_FOUND_ANSWER, [], suggested_questions(profile))


def dedupe_sources(sources: Sequence[Source]) -> List[Source]:
    """Drop sources whose snippet text was already seen, whatever their title."""
    seen = set()
    out: List[Source] = []
    for s in sources:
        if s.snippet and s.snippet not in seen:
            seen.add(s.snippet)
            out.append(s)
    return out


def section_of(title: str) -> Optional[str]:
    for section, pattern in lexicon.SECTION_TITLE_PATTERNS.items():
        if pattern.match(title or ""):
            return section
    return None


def _is_identity_line(sentence: str, profile: Profile) -> bool:
    name = re.escape(profile.basics.name)
    return bool(re.match(rf"^{name}\s*[—–-]", sentence, re.I))


def filter_candidates(intent: Intent, candidates: Sequence[ScoredChunk]) -> List[ScoredChunk]:
    """Drop candidates that must never feed this kind of answer."""
    if intent.kind is IntentKind.ROLE and intent.job is not None:
        title = job_title(intent.job)
        return [
            c for c in candidates
            if c.chunk.title == title and not lexicon.GOAL_PATTERN.search(c.chunk.text)
        ]
    if intent.kind is IntentKind.SKILLS:
        return [c for c in candidates if not _is_education_or_contact(c.chunk)]
    return list(candidates)


def _is_education_or_contact(chunk: Chunk) -> bool:
    return bool(
        lexicon.EDUCATION_PATTERN.search(chunk.title)
        or lexicon.EDUCATION_PATTERN.search(chunk.text)
        or lexicon.CONTACT_PATTERN.search(chunk.text)
    )


# ---------------------------
# General answers
# ---------------------------
def _is_record_line(sentence: str, position: int, profile: Profile) -> bool:
    """Headers and metadata that restate the record rather than describe it."""
    return bool(
        _is_identity_line(sentence, profile)
        or lexicon.META_LINE_PATTERN.match(sentence)
        or lexicon.TECH_USAGE_PATTERN.match(sentence)
        or (position == 0 and lexicon.RECORD_HEADER_PATTERN.match(sentence))
    )


def build_sources(question: str, profile: Profile, candidates: Sequence[ScoredChunk]) -> List[Source]:
    """One cleaned snippet per candidate; a sentence already shown by an earlier source is skipped."""
    q_tokens = tokenize(question)
    seen = set()
    sources: List[Source] = []
    for cand in candidates:
        body = [
            s for i, s in enumerate(split_sentences(cand.chunk.text))
            if not _is_record_line(s, i, profile)
        ]
        picked = extract_relevant_sentences("\n".join(body), q_tokens, MAX_SNIPPET_SENTENCES)
        if not picked:
            picked = body[:MAX_SNIPPET_SENTENCES]
        kept: List[str] = []
        for sentence in picked:
            # cleaned one at a time so a stripped contact value cannot leave its label behind
            cleaned = clean_snippet(sentence)
            if not cleaned or is_bare_label(cleaned) or cleaned.lower() in seen:
                continue
            seen.add(cleaned.lower())
            kept.append(cleaned)
        snippet = clean_snippet(" ".join(kept))
        if snippet:
            sources.append(Source(cand.chunk.title, snippet))
    return dedupe_sources(sources)


def compose_answer_text(sources: Sequence[Source]) -> str:
    """Narrative per recognised section, or one paragraph per source title."""
    if len(sources) == 1:
        return sources[0].snippet

    sections = [section_of(s.title) for s in sources]
    if all(sections) and len(set(sections)) >= 2:
        paragraphs = []
        for section in lexicon.SECTION_ORDER:
            snippets = [s.snippet for s, sec in zip(sources, sections) if sec == section]
            if snippets:
                paragraphs.append(lexicon.SECTION_SUMMARY_TEMPLATES[section].format(" ".join(snippets)))
        return "\n\n".join(paragraphs)

    grouped: Dict[str, List[str]] = {}
    for s in sources:
        grouped.setdefault(s.title, []).append(s.snippet)
    return "\n\n".join(" ".join(snippets) for snippets in grouped.values())


def answer_general(
    intent: Intent, question: str, profile: Profile,
    candidates: Sequence[ScoredChunk], corpus: Sequence[Chunk],
) -> ChatAnswer:
    sources = build_sources(question, profile, candidates)
    if not sources:
        return not_found(profile)
    return ChatAnswer(compose_answer_text(sources), sources, suggested_questions(profile))


# ---------------------------
# Technology answers
# ---------------------------
def _job_line(job: Experience) -> str:
    return f"{job.role} at {job.company}" + (f" ({job.dates})" if job.dates else "")


def answer_technology(
    intent: Intent, question: str, profile: Profile,
    candidates: Sequence[ScoredChunk], corpus: Sequence[Chunk],
) -> ChatAnswer:
    blocks: List[str] = []
    sources: List[Source] = []
    if intent.jobs:
        blocks.append("\n".join(["Experience:", *(f"• {_job_line(j)}" for j in intent.jobs)]))
        sources += [Source(job_title(j), clean_snippet(_job_line(j))) for j in intent.jobs]
    if intent.projects:
        blocks.append("\n".join(["Projects:", *(f"• {p.name}" for p in intent.projects)]))
        sources += [
            Source(f"Project: {p.name}", clean_snippet(f"{p.name}: {p.description}" if p.description else p.name))
            for p in intent.projects
        ]
    if not blocks:
        return answer_general(intent, question, profile, candidates, corpus)
    return ChatAnswer("\n\n".join(blocks), dedupe_sources(sources), suggested_questions(profile))


# ---------------------------
# Background answers
# ---------------------------
def answer_background(
    intent: Intent, question: str, profile: Profile,
    candidates: Sequence[ScoredChunk], corpus: Sequence[Chunk],
) -> ChatAnswer:
    blocks: List[str] = []
    sources: List[Source] = []
    education = [e for e in (clean_snippet(h) for h in profile.highlights) if e]
    if education:
        blocks.append("\n".join(["Education:", *(f"• {e}" for e in education)]))
        sources += [Source("Education", e) for e in education]
    if profile.experience:
        blocks.append("\n".join(["Work Experience:", *(f"• {_job_line(j)}" for j in profile.experience)]))
        sources += [Source(job_title(j), clean_snippet(_job_line(j))) for j in profile.experience]
    if not blocks:
        return not_found(profile)
    return ChatAnswer("\n\n".join(blocks), dedupe_sources(sources), suggested_questions(profile))


# ---------------------------
# Role / company answers
# ---------------------------
def _is_meta_sentence(sentence: str, job: Experience) -> bool:
    return bool(
        lexicon.META_LINE_PATTERN.match(sentence)
        or sentence.startswith(f"{job.company} — ")
        or sentence.startswith(f"At {job.company} as {job.role}, used ")
    )


def _job_sentences(chunk: Chunk, job: Experience) -> List[str]:
    out = []
    for s in split_sentences(chunk.text):
        if _is_meta_sentence(s, job) or lexicon.GOAL_PATTERN.search(s):
            continue
        s = clean_snippet(s)
        if s:
            out.append(s)
    return out


def answer_role(
    intent: Intent, question: str, profile: Profile,
    candidates: Sequence[ScoredChunk], corpus: Sequence[Chunk],
) -> ChatAnswer:
    job = intent.job
    title = job_title(job)
    chunks = [c.chunk for c in filter_candidates(intent, candidates)]
    if not chunks:
        chunks = [c for c in corpus if c.title == title and not lexicon.GOAL_PATTERN.search(c.text)]

    sentences: List[str] = []
    sources: List[Source] = []
    for chunk in chunks:
        picked = _job_sentences(chunk, job)
        for s in picked:
            if s not in sentences:
                sentences.append(s)
        if picked:
            sources.append(Source(chunk.title, clean_snippet(" ".join(picked))))

    header = [f"{job.role} at {job.company}"]
    when_where = " • ".join(x for x in [job.dates, job.location] if x)
    if when_where:
        header.append(when_where)
    blocks = ["\n".join(header)]
    accomplishments = [s for s in sentences if lexicon.ACCOMPLISHMENT_PATTERN.search(s)]
    if accomplishments:
        blocks.append("\n".join(["Key accomplishments:", *(f"• {s}" for s in accomplishments)]))
    elif sentences:
        blocks.append("\n".join(["Responsibilities:", *(f"{i}. {s}" for i, s in enumerate(sentences, 1))]))
    else:
        raw = clean_snippet(" ".join(h for h in job.highlights if not lexicon.GOAL_PATTERN.search(h)))
        if raw:
            blocks.append(raw)
            sources.append(Source(title, raw))
    if job.tech:
        blocks.append(f"Technologies: {', '.join(job.tech)}")
    if not sources:
        sources.append(Source(title, clean_snippet(_job_line(job))))
    return ChatAnswer("\n\n".join(blocks), dedupe_sources(sources), suggested_questions(profile))


# ---------------------------
# Skills / languages answers
# ---------------------------
def _language_regex(name: str) -> "re.Pattern[str]":
    flags = 0 if len(name) <= 2 else re.I
    return re.compile(rf"(?<![A-Za-z0-9+#]){re.escape(name)}(?![A-Za-z0-9+#])", flags)


_LANGUAGE_REGEXES = [(n, _language_regex(n)) for n in lexicon.KNOWN_LANGUAGES if len(n) > 1]


def find_languages(texts: Sequence[str]) -> List[str]:
    """Known language names mentioned in `texts`, plus any explicit "Languages: a, b" list."""
    found: List[str] = []
    seen = set()

    def add(name: str) -> None:
        if name and name.lower() not in seen:
            seen.add(name.lower())
            found.append(name)

    for text in texts:
        for name, rx in _LANGUAGE_REGEXES:
            if rx.search(text):
                add(name)
    known = {n.lower(): n for n in lexicon.KNOWN_LANGUAGES}
    for text in texts:
        for m in lexicon.LANGUAGES_LIST_PATTERN.finditer(text):
            listed = lexicon.LIST_END_PATTERN.split(m.group(1), 1)[0]
            for item in re.split(r",|;|/|\band\b", listed):
                item = item.strip().rstrip(".").strip()
                if 0 < len(item) <= 30 and ":" not in item and ". " not in item:
                    add(known.get(item.lower(), item))
    return found


def answer_skills(
    intent: Intent, question: str, profile: Profile,
    candidates: Sequence[ScoredChunk], corpus: Sequence[Chunk],
) -> ChatAnswer:
    pool = filter_candidates(intent, candidates)
    chunks = [c.chunk for c in pool]
    languages = find_languages([c.text for c in chunks])
    if not languages:
        chunks = [
            c for c in corpus
            if section_of(c.title) == "skills" and not _is_education_or_contact(c)
        ]
        languages = find_languages([c.text for c in chunks])
    if not languages:
        return answer_general(intent, question, profile, pool, corpus)

    sources: List[Source] = []
    for chunk in chunks:
        hits = [s for s in split_sentences(chunk.text) if find_languages([s])]
        snippet = clean_snippet(" ".join(hits))
        if snippet:
            sources.append(Source(chunk.title, snippet))

    answer = f"Programming languages include: {', '.join(languages)}."
    if not lexicon.LANGUAGE_QUESTION_PATTERN.search(question):
        extra = build_sources(question, profile, pool)
        if extra:
            answer = f"{answer}\n\n{compose_answer_text(extra)}"
            sources += extra
    return ChatAnswer(answer, dedupe_sources(sources), suggested_questions(profile))


Handler = Callable[[Intent, str, Profile, Sequence[ScoredChunk], Sequence[Chunk]], ChatAnswer]

HANDLERS: Dict[IntentKind, Handler] = {
    IntentKind.TECHNOLOGY: answer_technology,
    IntentKind.BACKGROUND: answer_background,
    IntentKind.ROLE: answer_role,
    IntentKind.SKILLS: answer_skills,
    IntentKind.GENERAL: answer_general,
}


def synthesize_answer(
    intent: Intent,
    question: str,
    profile: Profile,
    candidates: Sequence[ScoredChunk],
    corpus: Sequence[Chunk],
) -> ChatAnswer:
    handler = HANDLERS.get(intent.kind, answer_general)
    return handler(intent, question, profile, candidates, corpus)
