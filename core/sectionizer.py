# core/sectionizer.py
from __future__ import annotations
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .profile import Chunk
from .sentences import split_sentences

CANON = {
    "Summary": ["summary", "professional summary"],
    "About": ["about", "about me"],
    "Education": ["education"],
    "Skills": ["skills", "technical skills"],
    "Work Experience": ["work experience", "experience", "professional experience"],
    "Projects": ["projects", "project"],
    "Contact": ["contact", "contact information"],
    "Languages": ["languages", "programming languages"],
    "Frameworks": ["frameworks"],
    "Technologies": ["technologies"],
}

HEADER_MAP: Dict[str, str] = {}
for canon, aliases in CANON.items():
    for a in aliases:
        HEADER_MAP[a] = canon

LEAD_SECTION = "Overview"
MAX_HEADER_LEN = 40
_ws = re.compile(r"\s+")


@dataclass
class Section:
    title: str
    lines: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines).strip()


def _norm(s: str) -> str:
    return _ws.sub(" ", s.strip())


def header_to_canon(line: str) -> Optional[str]:
    """Canonical section name if `line` is a heading, else None."""
    text = _norm(line)
    if not text or len(text) > MAX_HEADER_LEN:
        return None
    key = text.rstrip(":：").strip().lower()
    return HEADER_MAP.get(key)


def sectionize_document(text: str) -> List[Section]:
    """Group the lines of an extracted document under their headings.

    Lines before the first heading go to an "Overview" section. Sections with
    no body text are dropped.
    """
    text = (text or "").replace("\r\n", "\n")
    sections: List[Section] = [Section(LEAD_SECTION)]
    for raw in text.split("\n"):
        ln = _norm(raw)
        if not ln:
            continue
        canon = header_to_canon(ln)
        if canon:
            sections.append(Section(canon))
            continue
        sections[-1].lines.append(ln)
    return [s for s in sections if s.text]


def build_document_corpus(text: str) -> List[Chunk]:
    """One chunk per section plus one sub-chunk per sentence of that section."""
    chunks: List[Chunk] = []
    for idx, section in enumerate(sectionize_document(text)):
        chunks.append(Chunk(id=f"doc-{idx}", title=section.title, text=section.text))
        for s_idx, sentence in enumerate(split_sentences(section.text)):
            chunks.append(Chunk(id=f"doc-{idx}-s{s_idx}", title=section.title, text=sentence))
    return chunks
