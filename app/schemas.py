# app/schemas.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.profile import ChatAnswer, Profile


class ChatRequest(BaseModel):
    question: str = Field(..., min_length=1, description="Free-text question about the candidate")
    # Optional: answer about a posted profile instead of the server's default one
    profile: Optional[Profile] = None

    @field_validator("question")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("question must not be blank")
        return v


class SourceModel(BaseModel):
    title: str
    snippet: str


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    answer: str
    sources: List[SourceModel]
    suggested_questions: List[str] = Field(..., alias="suggestedQuestions")

    @classmethod
    def from_answer(cls, result: ChatAnswer) -> "ChatResponse":
        return cls.model_validate(result.to_dict())


class SuggestionsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    suggested_questions: List[str] = Field(..., alias="suggestedQuestions")
