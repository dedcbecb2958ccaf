"""Patterns and reference lists used to classify questions and shape answers.

Kept as plain data so that the lists can be extended and tested without
touching the dispatch logic in ``core.intents`` and ``core.answer``.
"""

from __future__ import annotations
import re

# ---------------------------
# Question intent patterns
# ---------------------------
TECH_FOCUS_PATTERNS = [
    re.compile(r"(?:experience|worked|work|used|use|using|projects?|jobs?|roles?)\s+(?:with|using|in|on)\b", re.I),
    re.compile(r"(?:what|which|where|list).*(?:experience|projects?|jobs?|roles?).*\s(?:with|using)\b", re.I),
]

BACKGROUND_PATTERN = re.compile(
    r"\b(?:background|summary|overview|tell me about|who is|introduce)\b", re.I
)

COMPANY_INQUIRY_PATTERN = re.compile(
    r"(?:tell me about|what\b.*\bat\b|\b(?:role|work|worked|experience|job|position|time|do|did)\s+at\b)",
    re.I,
)

SKILLS_QUESTION_PATTERN = re.compile(
    r"\b(?:programming languages?|languages?|coding|code in|program in|tech stack|skills?|skillset)\b",
    re.I,
)
LANGUAGE_QUESTION_PATTERN = re.compile(r"\b(?:languages?|coding|code in|program in)\b", re.I)

# Words in company names that are too generic to identify one employer
GENERIC_COMPANY_WORDS = frozenset([
    "company", "corp", "corporation", "inc", "incorporated", "group", "holdings",
    "limited", "ltd", "llc", "labs", "systems", "solutions", "technologies",
    "technology", "services", "international", "global", "the",
])

# ---------------------------
# Content filters
# ---------------------------
# Career-goal language: presentation copy, never a job fact
GOAL_PATTERN = re.compile(
    r"\b(?:looking for|seeking|career goals?|my goals?|leverage my|aspire|aspiring|"
    r"hoping to|eager to|next role|open to (?:new )?opportunities)\b",
    re.I,
)

ACCOMPLISHMENT_PATTERN = re.compile(
    r"\b(?:increased|improved|built|led|optimi[sz]ed|reduced|launched|shipped|delivered|"
    r"designed|automated|scaled|grew|cut|saved|achieved|migrated|created|drove)\b",
    re.I,
)

EDUCATION_PATTERN = re.compile(
    r"\b(?:education|university|college|institute|bachelor'?s?|master'?s?|ph\.?d|degree|"
    r"gpa|graduat\w*|coursework|b\.?sc?|m\.?sc?)\b",
    re.I,
)

CONTACT_PATTERN = re.compile(
    r"(?:@|\bemail\b|\bphone\b|\bcontact\b|linkedin\.com|github\.com|\bhttps?://)", re.I
)

# Lines inside experience chunks that only restate metadata
META_LINE_PATTERN = re.compile(r"^(?:location|dates|technologies(?: used)?)\s*:", re.I)
# "Company — Role (dates)" record headers and "At Company as Role, used Tech." lines
RECORD_HEADER_PATTERN = re.compile(r"^[^.!?\n]{1,80} — [^.!?\n]{1,80}$")
TECH_USAGE_PATTERN = re.compile(r"^At .+ as .+, used [^.]+\.$")

# ---------------------------
# Languages
# ---------------------------
KNOWN_LANGUAGES = [
    "Python", "JavaScript", "TypeScript", "Java", "Kotlin", "Swift", "Objective-C",
    "C++", "C#", "Go", "Rust", "Ruby", "PHP", "Scala", "R", "MATLAB", "Julia",
    "Dart", "Elixir", "Haskell", "Perl", "Lua", "SQL", "Bash", "Shell",
    "PowerShell", "HTML", "CSS", "Solidity", "Clojure", "F#", "Fortran", "COBOL",
    "Assembly", "Groovy", "C",
]

LANGUAGES_LIST_PATTERN = re.compile(r"\b(?:programming\s+)?languages?\s*:\s*([^\n]+)", re.I)
# where an explicit list ends: a sentence end or the next "Label:" on the line
LIST_END_PATTERN = re.compile(r"\.(?:\s|$)|\s+[A-Z][\w+#-]*\s*:")

# ---------------------------
# Section recognition (chunk titles)
# ---------------------------
SECTION_ORDER = ["education", "skills", "experience", "projects"]

SECTION_TITLE_PATTERNS = {
    "education": re.compile(r"^(?:education|highlights)\b", re.I),
    "skills": re.compile(r"^(?:skills?|languages|frameworks|technologies)\b", re.I),
    "experience": re.compile(r"^(?:experience|work experience)\b", re.I),
    "projects": re.compile(r"^projects?\b", re.I),
}

SECTION_SUMMARY_TEMPLATES = {
    "education": "On the education side: {}",
    "skills": "Relevant skills: {}",
    "experience": "From work experience: {}",
    "projects": "From projects: {}",
}

NOT_FOUND_ANSWER = (
    "I couldn't find that information in the resume. Try asking about skills, "
    "projects, experience, technologies, or background."
)
