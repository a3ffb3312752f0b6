import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.ai.prompts import DEFAULT_LENGTH, DEFAULT_TONE, Length, Tone, build_prompt
from app.ai.provider import CompletionProvider, get_provider
from app.shared.errors import UpstreamError
from app.shared.http import err

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI"])

class SummarizeIn(BaseModel):
    text: str | None = None
    model: str | None = None
    length: Length = DEFAULT_LENGTH
    tone: Tone = DEFAULT_TONE

class SummarizeOut(BaseModel):
    summary: str

@router.post("/summarize", response_model=SummarizeOut)
def api_summarize(inb: SummarizeIn, provider: CompletionProvider = Depends(get_provider)):
    if not inb.text:
        err("Text content is required")
    prompt = build_prompt(inb.text, inb.length, inb.tone)
    try:
        summary = provider.complete(
            prompt.system_text,
            prompt.user_text,
            model=inb.model,
            max_tokens=prompt.max_tokens,
        )
    except UpstreamError:
        err("Failed to generate summary", status=500)
    return {"summary": summary}

@router.get("/models")
def api_models(provider: CompletionProvider = Depends(get_provider)):
    try:
        return {"data": provider.list_models()}
    except UpstreamError:
        err("Failed to fetch models", status=500)
