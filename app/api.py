# app/api.py
"""FastAPI application for the Resume Q&A Copilot."""
from functools import lru_cache

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.answer import suggested_questions
from core.chat import ResumeChatService, answer_question_async
from core.config import get_settings
from core.logging_config import configure_logging
from core.profile import load_profile

from .schemas import ChatRequest, ChatResponse, SuggestionsResponse

configure_logging(get_settings().log_level)

app = FastAPI(title="Resume Q&A Copilot API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_service() -> ResumeChatService:
    settings = get_settings()
    return ResumeChatService(
        load_profile(settings.profile_path),
        document_url=settings.resume_pdf_url,
        settings=settings,
    )


@app.get("/")
def root():
    return {"ok": True}


@app.get("/healthz")
def healthz():
    return {"status": "ok"}


@app.get("/suggestions", response_model=SuggestionsResponse)
def suggestions(service: ResumeChatService = Depends(get_service)) -> SuggestionsResponse:
    return SuggestionsResponse(suggested_questions=suggested_questions(service.profile))


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, service: ResumeChatService = Depends(get_service)) -> ChatResponse:
    if request.profile is not None:
        # posted profiles are answered statelessly, the cached corpus belongs to the default one
        result = await answer_question_async(request.question, request.profile, provider=service.provider)
    else:
        result = await service.answer(request.question)
    return ChatResponse.from_answer(result)
