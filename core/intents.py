"""Question intent classification.

Detectors run in a fixed priority order and the first one that recognises the
question wins; anything unrecognised is a general question.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from . import lexicon
from .normalize_skills import find_technology, same_tech
from .normalize_text import normalize
from .profile import Experience, Profile, Project

logger = logging.getLogger(__name__)


class IntentKind(str, Enum):
    TECHNOLOGY = "technology"
    BACKGROUND = "background"
    ROLE = "role"
    SKILLS = "skills"
    GENERAL = "general"

    @property
    def needs_retrieval(self) -> bool:
        return self in (IntentKind.ROLE, IntentKind.SKILLS, IntentKind.GENERAL)


@dataclass(frozen=True)
class Intent:
    kind: IntentKind
    technology: Optional[str] = None
    job: Optional[Experience] = None
    jobs: List[Experience] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)


def all_technologies(profile: Profile) -> List[str]:
    techs: List[str] = []
    for job in profile.experience:
        techs.extend(job.tech)
    for project in profile.projects:
        techs.extend(project.tech)
    for group in profile.skills:
        techs.extend(group.items)
    return techs


def detect_technology(question: str, profile: Profile) -> Optional[Intent]:
    if not any(p.search(question) for p in lexicon.TECH_FOCUS_PATTERNS):
        return None
    tech = find_technology(question, all_technologies(profile))
    if tech is None:
        return None
    jobs = [j for j in profile.experience if any(same_tech(t, tech) for t in j.tech)]
    projects = [p for p in profile.projects if any(same_tech(t, tech) for t in p.tech)]
    if not jobs and not projects:
        return None
    return Intent(IntentKind.TECHNOLOGY, technology=tech, jobs=jobs, projects=projects)


def mentions_subject(question: str, profile: Profile) -> bool:
    q = normalize(question)
    name = normalize(profile.basics.name)
    if name and name in q:
        return True
    first = name.split(" ")[0] if name else ""
    return len(first) > 2 and f" {first} " in f" {q} "


def detect_background(question: str, profile: Profile) -> Optional[Intent]:
    if lexicon.BACKGROUND_PATTERN.search(question) and mentions_subject(question, profile):
        return Intent(IntentKind.BACKGROUND)
    return None


def match_company(question: str, profile: Profile) -> Optional[Experience]:
    q = f" {normalize(question)} "
    for job in profile.experience:
        company = normalize(job.company)
        if company and f" {company} " in q:
            return job
    for job in profile.experience:
        words = [
            w for w in normalize(job.company).split(" ")
            if len(w) > 3 and w not in lexicon.GENERIC_COMPANY_WORDS
        ]
        if any(f" {w} " in q for w in words):
            return job
    return None


def detect_role(question: str, profile: Profile) -> Optional[Intent]:
    if not lexicon.COMPANY_INQUIRY_PATTERN.search(question):
        return None
    job = match_company(question, profile)
    if job is None:
        return None
    return Intent(IntentKind.ROLE, job=job)


def detect_skills(question: str, profile: Profile) -> Optional[Intent]:
    if lexicon.SKILLS_QUESTION_PATTERN.search(question):
        return Intent(IntentKind.SKILLS)
    return None


DETECTORS: List[Callable[[str, Profile], Optional[Intent]]] = [
    detect_technology,
    detect_background,
    detect_role,
    detect_skills,
]


def classify_intent(question: str, profile: Profile) -> Intent:
    for detect in DETECTORS:
        intent = detect(question, profile)
        if intent is not None:
            logger.debug("Question %r classified as %s", question, intent.kind.value)
            return intent
    return Intent(IntentKind.GENERAL)
