import re

import pytest

from core.clean import (
    PIPELINE,
    clean_extracted_text,
    clean_snippet,
    collapse_whitespace,
    fix_punctuation_spacing,
    repair_split_words,
    strip_control_chars,
)

PHONE_LIKE = re.compile(r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}")

SAMPLES = [
    "Contact me at jane.doe@example.com for details",
    "Call 555-123-4567 or (555) 123 4567 today",
    "Jane Doe | LinkedIn | GitHub",
    "See https://github.com/jane and www.example.org/x now",
    "• Built APIs ● Led team",
    "Skilled in P y t h o n and Go",
    "Built APIs , improved speed .",
    "Led a redesign (2022 — 2024) that improved conversion by 12%.",
]


def test_emails_are_removed():
    out = clean_snippet("Contact me at jane.doe@example.com for details")
    assert out == "Contact me at for details"


def test_phone_numbers_are_removed():
    for text in ["Call 555-123-4567 or (555) 123 4567 today", "Mobile: +1 416.555.0199"]:
        out = clean_snippet(text)
        assert not PHONE_LIKE.search(out)


def test_years_and_metrics_survive():
    text = "Led a redesign (2022 — 2024) that improved conversion by 12%."
    assert clean_snippet(text) == text


def test_urls_and_domains_are_removed():
    out = clean_snippet("See https://github.com/jane and www.example.org/x now")
    assert out == "See and now"
    assert clean_snippet("Portfolio at jane.dev/work today") == "Portfolio at today"
    out = clean_snippet("Profiles on linkedin.com/in/jane and github.com")
    assert "linkedin" not in out.lower() and "github" not in out.lower()


def test_dotted_technology_names_are_kept():
    assert clean_snippet("Built with ASP.NET and Node.js") == "Built with ASP.NET and Node.js"
    assert clean_snippet("Built live dashboards with Socket.io and React.") == (
        "Built live dashboards with Socket.io and React."
    )
    assert clean_snippet("Ported asp.net services and trained models for x.ai") == (
        "Ported asp.net services and trained models for x.ai"
    )


def test_platform_listed_as_a_skill_is_kept():
    assert clean_snippet("Tools: Git, GitHub, Docker") == "Tools: Git, GitHub, Docker"
    assert clean_snippet("Links: jane.dev/work | GitHub") == "Links"


def test_stranded_platform_names_are_removed():
    assert clean_snippet("Jane Doe | LinkedIn | GitHub") == "Jane Doe"
    assert clean_snippet("Automated builds with GitHub Actions") == "Automated builds with GitHub Actions"


def test_bullets_and_zero_width_characters_are_removed():
    assert clean_snippet("• Built APIs ● Led team") == "Built APIs Led team"
    assert strip_control_chars("Py\u200bthon\x07") == "Python"


def test_split_words_are_repaired():
    assert repair_split_words("Skilled in P y t h o n and Go") == "Skilled in Python and Go"
    assert repair_split_words("a b") == "a b"


def test_punctuation_spacing():
    assert fix_punctuation_spacing("Built APIs , improved speed .") == "Built APIs, improved speed."
    assert fix_punctuation_spacing("Languages:Python") == "Languages: Python"
    assert collapse_whitespace("  a \n\t b  ") == "a b"


@pytest.mark.parametrize("text", SAMPLES)
def test_clean_snippet_is_idempotent(text):
    once = clean_snippet(text)
    assert clean_snippet(once) == once


def test_pipeline_order():
    assert PIPELINE[0] is strip_control_chars
    assert PIPELINE[-1] is collapse_whitespace


def test_clean_extracted_text_keeps_lines():
    raw = "Jane Doe\n\n\n\n•\nEmail: jane @ example.com\nab\nP y t h o n developer"
    assert clean_extracted_text(raw) == "Jane Doe\nEmail: jane@example.com\nPython developer"


def test_missing_space_after_sentence_end():
    assert clean_snippet("Shipped features.Led the team") == "Shipped features. Led the team"
    assert clean_snippet("B.Sc. Computer Science") == "B.Sc. Computer Science"
