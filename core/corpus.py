"""Corpus construction from a structured profile.

Each profile section yields several chunks at different granularities: a full
record plus one chunk per sub-item (technology, highlight, skill). The small
chunks let narrow questions ("What about Python?") hit an exact term without
being diluted by the rest of the record.
"""

from __future__ import annotations
from typing import List

from .profile import Chunk, Experience, Profile


def job_title(job: Experience) -> str:
    """Chunk title shared by every chunk derived from one experience entry."""
    return f"Experience: {job.role} @ {job.company}"


def _lines(*parts: str) -> str:
    return "\n".join(p for p in parts if p)


def build_corpus(profile: Profile) -> List[Chunk]:
    chunks: List[Chunk] = []
    basics = profile.basics

    chunks.append(Chunk(
        id="basics",
        title="Basics",
        text=_lines(
            f"{basics.name} — {basics.title}" if basics.title else basics.name,
            basics.location,
            basics.summary,
            basics.availability,
            f"Email: {basics.email}" if basics.email else "",
        ),
    ))

    if profile.highlights:
        chunks.append(Chunk(id="highlights", title="Highlights", text="\n".join(profile.highlights)))

    about = profile.about
    if about.tagline:
        chunks.append(Chunk(id="about-tagline", title="About", text=about.tagline))
    if about.bio:
        chunks.append(Chunk(id="about-bio", title="About", text=about.bio))
    if about.goals:
        chunks.append(Chunk(id="about-goals", title="Career Goals", text=about.goals))

    chunks.append(Chunk(
        id="skills-overview",
        title="Skills Overview",
        text="\n".join(f"{g.category}: {', '.join(g.items)}" for g in profile.skills),
    ))
    for idx, group in enumerate(profile.skills):
        chunks.append(Chunk(
            id=f"skills-{idx}",
            title=f"Skills: {group.category}",
            text=f"{group.category}: {', '.join(group.items)}",
        ))
        for item_idx, item in enumerate(group.items):
            chunks.append(Chunk(
                id=f"skill-item-{idx}-{item_idx}",
                title=f"Skill: {item}",
                text=f"{item} is part of {group.category} skills.",
            ))

    for idx, project in enumerate(profile.projects):
        title = f"Project: {project.name}"
        chunks.append(Chunk(
            id=f"project-{idx}",
            title=title,
            text=_lines(
                f"Project: {project.name}",
                project.description,
                f"Technologies used: {', '.join(project.tech)}" if project.tech else "",
            ),
        ))
        for tech_idx, tech in enumerate(project.tech):
            chunks.append(Chunk(
                id=f"project-{idx}-tech-{tech_idx}",
                title=title,
                text=f"{project.name} uses {tech}. {project.description}".strip(),
            ))

    for idx, job in enumerate(profile.experience):
        title = job_title(job)
        tech_line = f"Technologies: {', '.join(job.tech)}" if job.tech else ""
        chunks.append(Chunk(
            id=f"job-{idx}",
            title=title,
            text=_lines(
                f"{job.company} — {job.role}",
                f"Location: {job.location}" if job.location else "",
                f"Dates: {job.dates}" if job.dates else "",
                *job.highlights,
                tech_line,
            ),
        ))
        header = f"{job.company} — {job.role}" + (f" ({job.dates})" if job.dates else "")
        for h_idx, highlight in enumerate(job.highlights):
            chunks.append(Chunk(
                id=f"job-{idx}-highlight-{h_idx}",
                title=title,
                text=_lines(header, highlight, tech_line),
            ))
        for tech_idx, tech in enumerate(job.tech):
            chunks.append(Chunk(
                id=f"job-{idx}-tech-{tech_idx}",
                title=title,
                text=f"At {job.company} as {job.role}, used {tech}. {' '.join(job.highlights)}".strip(),
            ))

    return chunks
