"""Prompt construction for note summaries.

Pure functions over fixed option tables so the request shape can be checked
without touching the completion provider.
"""
from __future__ import annotations

from typing import Literal, NamedTuple

Length = Literal["short", "medium", "detailed"]
Tone = Literal["neutral", "formal", "casual", "technical", "simple"]

DEFAULT_LENGTH: Length = "medium"
DEFAULT_TONE: Tone = "neutral"

SYSTEM_DIRECTIVE = (
    "You are a helpful assistant that summarizes text content. Provide concise but "
    "comprehensive summaries that capture the main points and key details. The text "
    "may contain HTML markup from a rich-text editor; ignore the markup and summarize "
    "only the content."
)

# max output tokens per length; a size hint for the provider, not a contract
LENGTH_MAX_TOKENS: dict[str, int] = {
    "short": 256,
    "medium": 768,
    "detailed": 1536,
}

LENGTH_INSTRUCTIONS: dict[str, str] = {
    "short": "Keep the summary to two or three sentences.",
    "medium": "Keep the summary to one or two short paragraphs.",
    "detailed": "Write a detailed summary that covers every major point, using several paragraphs or bullet points where helpful.",
}

TONE_INSTRUCTIONS: dict[str, str] = {
    "neutral": "Use a neutral, objective tone.",
    "formal": "Use a formal, professional tone.",
    "casual": "Use a casual, conversational tone.",
    "technical": "Use a precise, technical tone and keep domain terminology intact.",
    "simple": "Use simple language that a beginner could easily understand.",
}


class Prompt(NamedTuple):
    system_text: str
    user_text: str
    max_tokens: int


def build_prompt(text: str, length: str = DEFAULT_LENGTH, tone: str = DEFAULT_TONE) -> Prompt:
    """Build the system/user messages and the output size hint.

    Raises ``ValueError`` for a length or tone outside the tables.
    """
    if length not in LENGTH_MAX_TOKENS:
        raise ValueError(f"unknown length: {length!r}")
    if tone not in TONE_INSTRUCTIONS:
        raise ValueError(f"unknown tone: {tone!r}")

    system_text = " ".join([SYSTEM_DIRECTIVE, LENGTH_INSTRUCTIONS[length], TONE_INSTRUCTIONS[tone]])
    user_text = f"Please summarize the following text:\n\n{text}"
    return Prompt(system_text=system_text, user_text=user_text, max_tokens=LENGTH_MAX_TOKENS[length])
