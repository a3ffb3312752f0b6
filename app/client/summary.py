"""Summary page workflow.

Two slots are kept per note: the *saved* summary (persisted on the note) and
a *candidate* produced by regeneration, which only replaces the saved one on
an explicit `save()`.

States::

    Idle -> Generating -> Displayed
                       -> Failed

The transition functions are pure; `SummaryWorkflow` wires them to the
hooks and the AI client.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

from app.ai.prompts import DEFAULT_LENGTH, DEFAULT_TONE, LENGTH_MAX_TOKENS, TONE_INSTRUCTIONS
from app.client.ai import AIClient
from app.client.hooks import Note, NotesClient
from app.client.notify import Notifier
from app.shared.config import settings
from app.shared.errors import Busy, NoteNotFound, NotesError, ValidationError

logger = logging.getLogger(__name__)

INITIAL_FAILURE = "Couldn't generate summary"
REGENERATE_FAILURE = "Couldn't regenerate summary"


@dataclass(frozen=True)
class Idle:
    pass

@dataclass(frozen=True)
class Generating:
    regenerating: bool = False
    previous: str | None = None  # still on screen while generating

@dataclass(frozen=True)
class Displayed:
    summary: str
    candidate: bool = False

@dataclass(frozen=True)
class Failed:
    reason: str
    summary: str | None = None  # saved summary stays visible

SummaryState = Union[Idle, Generating, Displayed, Failed]


def visible_summary(state: SummaryState) -> str | None:
    if isinstance(state, Displayed):
        return state.summary
    if isinstance(state, Generating):
        return state.previous
    if isinstance(state, Failed):
        return state.summary
    return None

def begin(state: SummaryState, regenerating: bool = False) -> Generating:
    if isinstance(state, Generating):
        raise Busy("summary generation already in progress")
    return Generating(regenerating=regenerating, previous=visible_summary(state))

def succeed(state: SummaryState, summary: str, candidate: bool = False) -> Displayed:
    if not isinstance(state, Generating):
        raise ValueError(f"cannot finish generation from {type(state).__name__}")
    return Displayed(summary=summary, candidate=candidate)

def fail(state: SummaryState, reason: str, saved: str | None = None) -> Failed:
    return Failed(reason=reason, summary=saved)

def show_saved(saved: str | None) -> SummaryState:
    return Displayed(summary=saved) if saved else Idle()


class SummaryWorkflow:
    def __init__(
        self,
        notes: NotesClient,
        ai: AIClient,
        uuid: str,
        length: str = DEFAULT_LENGTH,
        tone: str = DEFAULT_TONE,
        model: str | None = None,
        notifier: Notifier | None = None,
    ):
        self.notes = notes
        self.ai = ai
        self.uuid = uuid
        self.set_length(length)
        self.set_tone(tone)
        self.model = model or settings.LLM_DEFAULT_MODEL
        self.notifier = notifier if notifier is not None else notes.notifier

        self.state: SummaryState = Idle()
        self.note: Note | None = None
        self.saved: str | None = None
        self.candidate: str | None = None
        self.models: list[str] = []
        self.model_selection_enabled = False

    # -- parameters --------------------------------------------------------

    def set_length(self, length: str) -> None:
        if length not in LENGTH_MAX_TOKENS:
            raise ValidationError(f"unknown length: {length}")
        self.length = length

    def set_tone(self, tone: str) -> None:
        if tone not in TONE_INSTRUCTIONS:
            raise ValidationError(f"unknown tone: {tone}")
        self.tone = tone

    def select_model(self, model: str) -> None:
        if not self.model_selection_enabled:
            raise ValidationError("model selection is unavailable")
        self.model = model

    def load_models(self) -> list[str]:
        """Fetch model ids; on failure keep the default and disable selection."""
        try:
            ids = [m["id"] for m in self.ai.list_models() if isinstance(m, dict) and m.get("id")]
        except NotesError as e:
            logger.warning("model list unavailable, keeping %s: %s", self.model, e)
            ids = []
        self.models = ids
        self.model_selection_enabled = bool(ids)
        return ids

    # -- workflow ----------------------------------------------------------

    @property
    def is_generating(self) -> bool:
        return isinstance(self.state, Generating)

    @property
    def displayed(self) -> str | None:
        return visible_summary(self.state)

    def _summarize(self) -> str:
        return self.ai.summarize(self.note.notes, model=self.model, length=self.length, tone=self.tone)

    def open(self) -> SummaryState:
        """Show the saved summary, or generate and persist one if there is none."""
        try:
            self.note = self.notes.get_note(self.uuid)
        except NotesError as e:
            self.state = fail(self.state, "Couldn't load note")
            logger.debug("loading %s failed: %s", self.uuid, e)
            return self.state
        if self.note is None:
            self.state = fail(self.state, "Note not found")
            return self.state

        self.saved = self.note.summary or None
        if self.saved:
            self.state = show_saved(self.saved)
            return self.state
        if not self.note.notes:
            return self.state

        self.state = begin(self.state)
        try:
            text = self._summarize()
        except NotesError as e:
            self.state = fail(self.state, INITIAL_FAILURE, self.saved)
            self.notifier.error(INITIAL_FAILURE, e)
            return self.state

        try:
            self.note = self.notes.update_note(self.uuid, self.note.notes, title=self.note.title, summary=text)
        except NotesError:
            # generated but not persisted; keep it around so save() can retry
            self.candidate = text
            self.state = succeed(self.state, text, candidate=True)
            return self.state
        self.saved = self.note.summary
        self.state = succeed(self.state, self.saved)
        return self.state

    def regenerate(self) -> SummaryState:
        """Produce a candidate; the saved summary is left untouched."""
        if self.note is None:
            self.state = fail(self.state, REGENERATE_FAILURE, self.saved)
            self.notifier.error(REGENERATE_FAILURE, NoteNotFound(f"note {self.uuid} is not loaded"))
            return self.state
        self.state = begin(self.state, regenerating=True)
        try:
            text = self._summarize()
        except NotesError as e:
            self.state = fail(self.state, REGENERATE_FAILURE, self.saved)
            self.notifier.error(REGENERATE_FAILURE, e)
            return self.state
        self.candidate = text
        self.state = succeed(self.state, text, candidate=True)
        return self.state

    def save(self) -> Note | None:
        """Persist the candidate as the note's summary."""
        if self.candidate is None or self.note is None:
            return None
        note = self.notes.update_note(self.uuid, self.note.notes, title=self.note.title, summary=self.candidate)
        self.note = note
        self.saved = note.summary
        self.candidate = None
        self.state = show_saved(self.saved)
        return note

    def discard(self) -> SummaryState:
        self.candidate = None
        self.state = show_saved(self.saved)
        return self.state
