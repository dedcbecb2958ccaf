"""Plain-text extraction from a resume PDF."""

from __future__ import annotations
import logging
from io import BytesIO

import requests
from pypdf import PdfReader

from .clean import clean_extracted_text
from .exceptions import DocumentExtractionError

logger = logging.getLogger(__name__)


def extract_text_from_pdf_bytes(data: bytes) -> str:
    try:
        reader = PdfReader(BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:  # pypdf raises a range of types on malformed input
        raise DocumentExtractionError("could not parse PDF", {"error": str(e)}) from e
    return clean_extracted_text("\n".join(pages))


def extract_text_from_pdf(url: str, timeout: float = 15.0) -> str:
    """Fetch a PDF over HTTP and return its cleaned text.

    Raises:
        DocumentExtractionError: the document could not be fetched, parsed, or has no text.
    """
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise DocumentExtractionError("failed to fetch PDF", {"url": url, "error": str(e)}) from e
    text = extract_text_from_pdf_bytes(resp.content)
    if not text:
        raise DocumentExtractionError("PDF contains no extractable text", {"url": url})
    logger.info("Extracted %d characters from %s", len(text), url)
    return text
