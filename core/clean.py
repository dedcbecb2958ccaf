"""Snippet cleaning.

Every snippet passes through ``clean_snippet`` before it is shown as a source or
folded into an answer, so contact details and rendering debris never reach the
chat. The transforms below run in a fixed order: removals first, spacing
repairs after, whitespace collapse last.
"""

from __future__ import annotations
import re
from typing import Callable, List

_ZERO_WIDTH = re.compile(r"[\u200b-\u200d\u2060\ufeff]")
_CONTROL = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")

_URL = re.compile(r"(?:https?://|www\.)\S+", re.I)
# bare domains only with a path ("jane.dev/work") or on a known profile host;
# "Socket.io" or "ASP.NET" alone are technology names
_BARE_DOMAIN = re.compile(r"\b[\w-]+(?:\.[\w-]+)*\.(?:com|io|dev|net|org|me|app|ai|co|edu)/\S*")
_PROFILE_HOST = re.compile(
    r"\b(?:[\w-]+\.)*(?:github|gitlab|linkedin|twitter|medium|behance|dribbble|bitbucket)\.com\b\S*",
    re.I,
)
_EMAIL = re.compile(r"[\w.+-]+\s*@\s*[\w-]+(?:\.[\w-]+)+")
_AT_TOKEN = re.compile(r"\S*@\S*")
_PHONE = re.compile(r"(?:(?<!\d)\+?\d{1,3}[\s.-]?)?(?:\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}")

_PLATFORM = r"(?:LinkedIn|GitHub|Portfolio|Website)"
_PLATFORM_LABEL = re.compile(rf"\b{_PLATFORM}\s*:", re.I)
_SEPARATORS = r"[|,\u2022\u00b7]"
_PLATFORM_STRANDED = re.compile(
    rf"(?:^|(?<={_SEPARATORS}))\s*{_PLATFORM}\s*(?={_SEPARATORS}|$)", re.I | re.M
)
# "Tools: Git, GitHub" lists a skill; "Links: GitHub | LinkedIn" does not
_LINE_LABEL = re.compile(r"([A-Za-z][\w/&+ -]{0,30}):")
_CONTACT_LABELS = frozenset([
    "contact", "contacts", "links", "profiles", "social", "online",
    "email", "e-mail", "phone", "mobile", "tel", "website", "portfolio",
])
_BARE_LABEL = re.compile(
    r"(?:e-?mail|phone|mobile|tel|contact|linkedin|github|portfolio|website|links?)\s*:?", re.I
)
_BULLETS = re.compile(r"[\u2022\u25cf\u25aa\u25e6\u25a0\u2023\u00a7\u00b7]")
_SPLIT_WORD = re.compile(r"\b(?:[A-Za-z] ){2,}[A-Za-z]\b")

_SPACE_BEFORE_PUNCT = re.compile(r"\s+([.,;:!?])")
_REPEATED_PUNCT = re.compile(r"([,;:])(?:\s*[,;:])+")
_NO_SPACE_AFTER_SEP = re.compile(r"([,;:])(?=[A-Za-z])")
_NO_SPACE_AFTER_END = re.compile(r"(?<=[a-z]{2})([.!?])(?=[A-Z][a-z])")
_EMPTY_PARENS = re.compile(r"\(\s*\)|\[\s*\]")
_REPEATED_SEP = re.compile(r"(?:\s*\|\s*){2,}")
_EDGE_JUNK = re.compile(r"^[\s|,;:\-\u2013\u2014]+|[\s|,;:\-\u2013\u2014]+$")
_ws = re.compile(r"\s+")

MAX_PASSES = 5


def strip_control_chars(text: str) -> str:
    return _CONTROL.sub("", _ZERO_WIDTH.sub("", text))


def strip_urls(text: str) -> str:
    text = _URL.sub(" ", text)
    text = _PROFILE_HOST.sub(" ", text)
    return _BARE_DOMAIN.sub(" ", text)


def strip_emails(text: str) -> str:
    return _AT_TOKEN.sub(" ", _EMAIL.sub(" ", text))


def strip_phone_numbers(text: str) -> str:
    return _PHONE.sub(" ", text)


def _drop_stranded(m: "re.Match[str]") -> str:
    line_start = m.string.rfind("\n", 0, m.start()) + 1
    labels = _LINE_LABEL.findall(m.string, line_start, m.start())
    if labels and labels[-1].strip().lower() not in _CONTACT_LABELS:
        return m.group(0)
    return " "


def strip_platform_artifacts(text: str) -> str:
    return _PLATFORM_STRANDED.sub(_drop_stranded, _PLATFORM_LABEL.sub(" ", text))


def strip_bullets(text: str) -> str:
    return _BULLETS.sub(" ", text)


def repair_split_words(text: str) -> str:
    """Join letters spread out by extraction: ``"P y t h o n"`` -> ``"Python"``."""
    return _SPLIT_WORD.sub(lambda m: m.group(0).replace(" ", ""), text)


def fix_punctuation_spacing(text: str) -> str:
    text = _EMPTY_PARENS.sub(" ", text)
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    text = _REPEATED_PUNCT.sub(r"\1", text)
    text = _NO_SPACE_AFTER_SEP.sub(r"\1 ", text)
    text = _NO_SPACE_AFTER_END.sub(r"\1 ", text)
    text = _REPEATED_SEP.sub(" | ", text)
    return _EDGE_JUNK.sub("", text)


def collapse_whitespace(text: str) -> str:
    return _ws.sub(" ", text).strip()


PIPELINE: List[Callable[[str], str]] = [
    strip_control_chars,
    strip_urls,
    strip_emails,
    strip_phone_numbers,
    strip_platform_artifacts,
    strip_bullets,
    repair_split_words,
    fix_punctuation_spacing,
    collapse_whitespace,
]


def _apply(text: str) -> str:
    for step in PIPELINE:
        text = step(text)
    return text


def clean_snippet(text: str) -> str:
    """Run the cleaning pipeline until the text stops changing."""
    out = text or ""
    for _ in range(MAX_PASSES):
        cleaned = _apply(out)
        if cleaned == out:
            break
        out = cleaned
    return out


def is_bare_label(text: str) -> bool:
    """True for what is left of a contact line once its value is stripped ("Email:")."""
    return bool(_BARE_LABEL.fullmatch((text or "").strip()))


def clean_extracted_text(text: str) -> str:
    """Line-preserving clean-up for raw text pulled out of a PDF."""
    text = strip_control_chars(text or "")
    text = re.sub(r"\s+@\s+|@\s+", "@", text)
    text = re.sub(r"(\d)\s+-\s+(\d)", r"\1-\2", text)
    text = re.sub(r"[^\S\n]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    lines = []
    for line in text.split("\n"):
        line = line.strip()
        if re.fullmatch(r"[\u2022\u25cf\u00a7#\s]*", line):
            continue
        line = repair_split_words(line)
        if len(line) > 2:
            lines.append(line)
    return "\n".join(lines).strip()
