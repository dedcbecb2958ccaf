import pytest
import requests

from core import document
from core.document import extract_text_from_pdf, extract_text_from_pdf_bytes
from core.exceptions import DocumentExtractionError, ResumeChatError


def test_empty_bytes_raise():
    with pytest.raises(DocumentExtractionError):
        extract_text_from_pdf_bytes(b"")


def test_fetch_failure_raises(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr(document.requests, "get", fake_get)
    with pytest.raises(DocumentExtractionError) as excinfo:
        extract_text_from_pdf("https://example.com/cv.pdf")
    assert "https://example.com/cv.pdf" in str(excinfo.value)


def test_empty_document_raises(monkeypatch):
    class Resp:
        content = b"%PDF"

        def raise_for_status(self):
            return None

    monkeypatch.setattr(document.requests, "get", lambda url, timeout: Resp())
    monkeypatch.setattr(document, "extract_text_from_pdf_bytes", lambda data: "")
    with pytest.raises(DocumentExtractionError, match="no extractable text"):
        extract_text_from_pdf("https://example.com/cv.pdf")


def test_errors_share_a_base_class():
    err = DocumentExtractionError("failed", {"url": "x"})
    assert isinstance(err, ResumeChatError)
    assert str(err) == "failed | Details: {'url': 'x'}"
