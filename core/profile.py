# core/profile.py
"""Typed records passed through the pipeline.

The profile models describe the caller-owned resume record. Chunks, scored
candidates and answers are the pipeline's own derived records.
"""
from __future__ import annotations
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Links(_Frozen):
    website: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    resume_url: Optional[str] = Field(None, alias="resumeUrl")


class Basics(_Frozen):
    name: str
    title: str = ""
    location: str = ""
    email: str = ""
    availability: str = ""
    summary: str = ""
    links: Links = Field(default_factory=Links)


class About(_Frozen):
    tagline: str = ""
    bio: str = ""
    goals: str = ""


class SkillGroup(_Frozen):
    category: str
    items: List[str] = Field(default_factory=list)


class ProjectLinks(_Frozen):
    demo: Optional[str] = None
    repo: Optional[str] = None


class Project(_Frozen):
    name: str
    description: str = ""
    tech: List[str] = Field(default_factory=list)
    links: ProjectLinks = Field(default_factory=ProjectLinks)


class Experience(_Frozen):
    company: str
    role: str
    location: str = ""
    dates: str = ""
    highlights: List[str] = Field(default_factory=list)
    tech: List[str] = Field(default_factory=list)


class Profile(_Frozen):
    basics: Basics
    highlights: List[str] = Field(default_factory=list)
    about: About = Field(default_factory=About)
    skills: List[SkillGroup] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    experience: List[Experience] = Field(default_factory=list)


def load_profile(path: Union[str, Path]) -> Profile:
    with open(path, "r", encoding="utf-8") as f:
        return Profile.model_validate(json.load(f))


@dataclass(frozen=True)
class Chunk:
    id: str
    title: str
    text: str
    embedding: Optional[Tuple[float, ...]] = None


@dataclass(frozen=True)
class ScoredChunk:
    chunk: Chunk
    score: float


@dataclass(frozen=True)
class Source:
    title: str
    snippet: str


@dataclass
class ChatAnswer:
    answer: str
    sources: List[Source] = field(default_factory=list)
    suggested_questions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "answer": self.answer,
            "sources": [asdict(s) for s in self.sources],
            "suggestedQuestions": list(self.suggested_questions),
        }
