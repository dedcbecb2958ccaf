from __future__ import annotations
import re
from typing import List, Sequence

from .normalize_text import tokenize

_LINE_BREAKS = re.compile(r"\n+")
_SENTENCE_END = re.compile(r"(?<=[.!?])\s+")


def split_sentences(text: str) -> List[str]:
    """Split on line breaks first, then on sentence-ending punctuation."""
    out: List[str] = []
    for line in _LINE_BREAKS.split(text or ""):
        for s in _SENTENCE_END.split(line):
            s = s.strip()
            if s:
                out.append(s)
    return out


def extract_relevant_sentences(
    chunk_text: str, query_tokens: Sequence[str], max_sentences: int = 3
) -> List[str]:
    """Return up to `max_sentences` sentences of `chunk_text` most relevant to the query.

    A sentence scores one point per token shared with the query plus a length
    bonus capped at 0.5, so a longer sentence only wins among equally relevant
    ones. Without query tokens the lead sentences are returned unchanged.
    """
    sentences = split_sentences(chunk_text)
    if not query_tokens:
        return sentences[:max_sentences]

    q = set(query_tokens)
    scored = []
    for s in sentences:
        toks = tokenize(s)
        hits = sum(1 for t in toks if t in q)
        scored.append((hits + min(len(toks) / 10, 0.5), s))
    # sorted() is stable, so ties keep their original order
    ranked = sorted((x for x in scored if x[0] > 0), key=lambda x: x[0], reverse=True)
    return [s for _, s in ranked[:max_sentences]]
