import pytest

from core.config import DEFAULT_PROFILE_PATH
from core.profile import Profile, load_profile


@pytest.fixture
def profile() -> Profile:
    return Profile.model_validate({
        "basics": {
            "name": "Jane Doe",
            "title": "Software Engineer",
            "location": "Berlin, Germany",
            "email": "jane@example.com",
            "availability": "Available from June",
            "summary": "I build fast, accessible web apps and ship features end-to-end.",
            "links": {"github": "https://github.com/janedoe", "resumeUrl": "https://example.com/cv.pdf"},
        },
        "highlights": ["B.Sc. Computer Science, TU Berlin (2016 — 2019)"],
        "about": {
            "tagline": "A product-minded engineer who likes shipping.",
            "bio": "I enjoy turning ambiguous problems into simple experiences.",
            "goals": "I'm looking for a role at Globex where I can own features and mentor others.",
        },
        "skills": [
            {"category": "Frontend", "items": ["React", "TypeScript", "CSS"]},
            {"category": "Backend", "items": ["Node.js", "PostgreSQL", "Python"]},
        ],
        "projects": [
            {
                "name": "Project Alpha",
                "description": "A responsive SaaS dashboard with role-based access and charts.",
                "tech": ["React", "TypeScript"],
                "links": {"demo": "https://alpha.example.com"},
            },
            {
                "name": "Project Gamma",
                "description": "An internal tool that automated reporting for the ops team.",
                "tech": ["Node.js", "PostgreSQL"],
            },
        ],
        "experience": [
            {
                "company": "Globex",
                "role": "Senior Software Engineer",
                "location": "Remote",
                "dates": "2022 — Present",
                "highlights": [
                    "Led a redesign that improved conversion by 12%.",
                    "Built shared UI components used across core flows.",
                ],
                "tech": ["React", "TypeScript"],
            },
            {
                "company": "Initech",
                "role": "Software Engineer",
                "location": "Berlin, Germany",
                "dates": "2019 — 2022",
                "highlights": [
                    "Maintained the billing service.",
                    "Wrote API documentation for partner teams.",
                ],
                "tech": ["Node.js", "PostgreSQL", "React"],
            },
        ],
    })


@pytest.fixture
def acme_profile() -> Profile:
    return Profile.model_validate({
        "basics": {"name": "Sam Rivera", "title": "Engineer"},
        "about": {"goals": "I'm looking for a role at Acme where I can grow as an engineer."},
        "experience": [
            {
                "company": "Acme",
                "role": "Engineer",
                "dates": "2020–2021",
                "highlights": ["Maintained deployment scripts for the payments team."],
                "tech": ["Go"],
            },
        ],
    })


@pytest.fixture
def sample_profile() -> Profile:
    return load_profile(DEFAULT_PROFILE_PATH)


class FakeEmbeddings:
    """Deterministic provider: bag-of-letters vectors, optionally failing."""

    def __init__(self, fail_query: bool = False, raise_error: bool = False, fail_batch: bool = False):
        self.fail_query = fail_query
        self.raise_error = raise_error
        self.fail_batch = fail_batch
        self.batch_calls = 0

    @staticmethod
    def _vec(text):
        v = [0.0] * 26
        for ch in text.lower():
            if "a" <= ch <= "z":
                v[ord(ch) - ord("a")] += 1.0
        return v

    def embed(self, text):
        if self.raise_error:
            raise RuntimeError("provider exploded")
        if self.fail_query:
            return None
        return self._vec(text)

    def embed_batch(self, texts):
        self.batch_calls += 1
        if self.fail_batch:
            raise RuntimeError("batch endpoint exploded")
        return [self._vec(t) for t in texts]


@pytest.fixture
def fake_embeddings():
    return FakeEmbeddings()
