from core.sectionizer import build_document_corpus, header_to_canon, sectionize_document

RESUME_TEXT = """Jane Doe
Software Engineer
EDUCATION
B.Sc. Computer Science, TU Berlin
Work Experience:
Globex — Senior Engineer. Led a redesign.
Skills
Languages: Python, Go
"""


def test_header_to_canon_recognises_aliases():
    assert header_to_canon("Experience") == "Work Experience"
    assert header_to_canon("PROJECTS:") == "Projects"
    assert header_to_canon("  technical   skills ") == "Skills"


def test_header_to_canon_rejects_body_lines():
    assert header_to_canon("Experienced engineer with Python") is None
    assert header_to_canon("Languages: Python, Go") is None
    assert header_to_canon("") is None


def test_sectionize_groups_lines_under_headings():
    sections = sectionize_document(RESUME_TEXT)
    assert [s.title for s in sections] == ["Overview", "Education", "Work Experience", "Skills"]
    assert sections[0].text == "Jane Doe\nSoftware Engineer"
    assert sections[3].lines == ["Languages: Python, Go"]


def test_empty_sections_are_dropped():
    sections = sectionize_document("Summary\n\nSkills\nPython")
    assert [s.title for s in sections] == ["Skills"]


def test_document_corpus_has_section_and_sentence_chunks():
    chunks = build_document_corpus(RESUME_TEXT)
    by_id = {c.id: c for c in chunks}
    assert by_id["doc-0"].title == "Overview"
    assert by_id["doc-0-s1"].text == "Software Engineer"
    assert by_id["doc-2"].title == "Work Experience"
    assert by_id["doc-2-s1"].text == "Led a redesign."
    assert len(by_id) == len(chunks)
