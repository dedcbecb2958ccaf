"""Error types raised inside the pipeline.

None of these reach the caller of the answer entry points: provider errors are
turned into "no embedding" at the provider boundary and extraction errors make
the corpus loader fall back to the structured profile.
"""

from typing import Any, Dict, Optional


class ResumeChatError(Exception):
    """Base exception for the resume chat engine."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EmbeddingProviderError(ResumeChatError):
    """Embedding provider is unconfigured, failed, or returned an unusable payload."""


class DocumentExtractionError(ResumeChatError):
    """A resume document could not be fetched or parsed."""
