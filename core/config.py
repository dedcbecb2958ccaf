# core/config.py
"""Runtime settings read from the environment (and an optional .env file)."""
from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_PROFILE_PATH = Path(__file__).resolve().parent.parent / "sample_data" / "profile.json"
DEFAULT_EMBEDDING_URL = (
    "https://api-inference.huggingface.co/pipeline/feature-extraction/"
    "sentence-transformers/all-MiniLM-L6-v2"
)


def env(key: str, default: Optional[str] = None) -> Optional[str]:
    """Environment value, treating empty strings as unset."""
    value = os.environ.get(key)
    return value if value else default


@dataclass(frozen=True)
class Settings:
    hf_api_key: Optional[str] = None
    hf_embedding_url: str = DEFAULT_EMBEDDING_URL
    embedding_timeout: float = 10.0
    profile_path: str = str(DEFAULT_PROFILE_PATH)
    resume_pdf_url: Optional[str] = None
    lexical_min_score: float = 0.02
    semantic_min_score: float = 0.3
    top_k: int = 5
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            hf_api_key=env("HF_API_KEY"),
            hf_embedding_url=env("HF_EMBEDDING_URL", DEFAULT_EMBEDDING_URL),
            embedding_timeout=float(env("EMBEDDING_TIMEOUT_SECONDS", "10")),
            profile_path=env("RESUME_PROFILE_PATH", str(DEFAULT_PROFILE_PATH)),
            resume_pdf_url=env("RESUME_PDF_URL"),
            lexical_min_score=float(env("LEXICAL_MIN_SCORE", "0.02")),
            semantic_min_score=float(env("SEMANTIC_MIN_SCORE", "0.3")),
            top_k=int(env("RETRIEVAL_TOP_K", "5")),
            log_level=env("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
