"""Text normalisation and tokenisation shared by every scorer.

Corpus text and questions must go through exactly the same steps, otherwise the
term vectors built for them are not comparable.
"""

from __future__ import annotations
import re
from typing import List

STOPWORDS = frozenset([
    "a", "about", "after", "all", "also", "am", "an", "and", "any", "are", "as",
    "at", "be", "been", "being", "but", "by", "can", "could", "did", "do", "does",
    "for", "from", "had", "has", "have", "he", "her", "hers", "him", "his", "how",
    "i", "if", "in", "into", "is", "it", "its", "just", "me", "more", "most", "my",
    "no", "not", "of", "on", "only", "or", "our", "ours", "out", "over", "she",
    "should", "so", "some", "such", "than", "that", "the", "their", "them", "then",
    "there", "these", "they", "this", "those", "to", "too", "up", "us", "very",
    "was", "we", "were", "what", "when", "where", "which", "who", "why", "will",
    "with", "would", "you", "your",
])

_APOSTROPHE = re.compile(r"[’']")
_DISALLOWED = re.compile(r"[^a-z0-9\s'-]")
_ws = re.compile(r"\s+")


def normalize(text: str) -> str:
    """Lower-case, keep only ``[a-z0-9 '-]`` and collapse whitespace."""
    s = (text or "").lower()
    s = _APOSTROPHE.sub("'", s)
    s = _DISALLOWED.sub(" ", s)
    return _ws.sub(" ", s).strip()


def tokenize(text: str) -> List[str]:
    """Split normalised text into content tokens (no stop-words, no 1-char tokens)."""
    return [t for t in normalize(text).split(" ") if len(t) > 1 and t not in STOPWORDS]
