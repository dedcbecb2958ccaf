"""Technology name normalisation.

Profiles and questions spell the same technology differently ("Golang" vs
"Go", "Node.js" vs "nodejs"). Names are reduced with the shared text
normaliser and a small alias map so that matching can be a plain whole-word
comparison.
"""

import re
from typing import Dict, Iterable, List, Optional

from .normalize_text import normalize

# Map variants to canonical (normalised) names
_CANONICAL_MAP = {
    "golang": "go",
    "js": "javascript",
    "ts": "typescript",
    "nodejs": "node js",
    "node": "node js",
    "reactjs": "react",
    "react js": "react",
    "nextjs": "next js",
    "vuejs": "vue",
    "postgres": "postgresql",
    "k8s": "kubernetes",
    "py": "python",
    "python3": "python",
    "sklearn": "scikit-learn",
    "scikit learn": "scikit-learn",
    "py torch": "pytorch",
    "tf": "tensorflow",
    "aws cloud": "aws",
}

_CANONICAL_NAMES = frozenset(_CANONICAL_MAP.values())
MIN_TECH_LEN = 2


def normalise_skill(term: str) -> str:
    """Normalise a single technology name to its canonical form."""
    t = normalize(term)
    return _CANONICAL_MAP.get(t, t)


def normalise_question(question: str) -> str:
    """Normalised question with aliases rewritten; known two-word names are kept whole."""
    words = normalize(question).split(" ")
    out: List[str] = []
    i = 0
    while i < len(words):
        pair = " ".join(words[i:i + 2])
        if i + 1 < len(words) and (pair in _CANONICAL_MAP or pair in _CANONICAL_NAMES):
            out.append(_CANONICAL_MAP.get(pair, pair))
            i += 2
            continue
        out.append(_CANONICAL_MAP.get(words[i], words[i]))
        i += 1
    return " ".join(out)


def canonical_tech_map(techs: Iterable[str]) -> Dict[str, str]:
    """Canonical name -> first original spelling, skipping names too short to match safely."""
    out: Dict[str, str] = {}
    for tech in techs:
        key = normalise_skill(tech)
        if len(key) >= MIN_TECH_LEN and key not in out:
            out[key] = tech
    return out


def find_technology(question: str, techs: Iterable[str]) -> Optional[str]:
    """Longest technology whose canonical name occurs as whole words in the question."""
    known = canonical_tech_map(techs)
    q = f" {normalise_question(question)} "
    matches: List[str] = [
        key for key in known
        if re.search(rf"(?<![a-z0-9]){re.escape(key)}(?![a-z0-9])", q)
    ]
    if not matches:
        return None
    best = max(matches, key=len)
    return known[best]


def same_tech(a: str, b: str) -> bool:
    return normalise_skill(a) == normalise_skill(b)
