"""Query and mutation primitives over the Note API.

Reads go through the shared `QueryCache`; every successful mutation
invalidates the cache entries it made stale:

- create -> the collection
- update -> the collection and the note's own entry
- delete -> the collection, and the note's own entry is evicted

Failed mutations touch nothing in the cache, emit one failure notification
and re-raise.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import httpx

from app.client.cache import COLLECTION, QueryCache, note_key
from app.client.http import call
from app.client.notify import Notifier
from app.client.session import SessionProvider
from app.notes.schemas import NoteOut
from app.shared.errors import Busy, NoteNotFound, NotesError, UpstreamError, ValidationError

logger = logging.getLogger(__name__)

Note = NoteOut


def _body(**fields) -> dict:
    return {k: v for k, v in fields.items() if v is not None}


class NotesClient:
    def __init__(
        self,
        http: httpx.Client,
        sessions: SessionProvider,
        cache: QueryCache | None = None,
        notifier: Notifier | None = None,
    ):
        self.http = http
        self.sessions = sessions
        self.cache = cache if cache is not None else QueryCache()
        self.notifier = notifier if notifier is not None else Notifier()
        self._pending: set[str] = set()

    # -- in-flight tracking ---------------------------------------------

    def is_pending(self, operation: str) -> bool:
        return operation in self._pending

    @contextmanager
    def _in_flight(self, operation: str) -> Iterator[None]:
        if operation in self._pending:
            raise Busy(f"{operation} already in progress")
        self._pending.add(operation)
        try:
            yield
        finally:
            self._pending.discard(operation)

    # -- queries ---------------------------------------------------------

    def list_notes(self) -> list[Note]:
        def load() -> list[Note]:
            session = self.sessions.require_session()
            rows = call(self.http, "GET", "/notes", session)
            return [Note.model_validate(r) for r in rows]

        try:
            return self.cache.fetch(COLLECTION, load)
        except NotesError as e:
            self.notifier.error("Couldn't load notes", e)
            raise

    def get_note(self, uuid: str | None) -> Note | None:
        if not uuid:
            return None

        def load() -> Note | None:
            session = self.sessions.require_session()
            rows = call(self.http, "GET", "/notes", session, params={"uuid": uuid})
            return Note.model_validate(rows[0]) if rows else None

        try:
            return self.cache.fetch(note_key(uuid), load)
        except NotesError as e:
            self.notifier.error("Couldn't load note", e)
            raise

    # -- mutations -------------------------------------------------------

    def create_note(self, notes: str, title: str | None = None, email: str | None = None) -> Note:
        with self._in_flight("create"):
            try:
                session = self.sessions.require_session()
                rows = call(self.http, "POST", "/notes", session, json=_body(notes=notes, title=title, email=email))
                if not rows:
                    raise UpstreamError("create returned no note")
                note = Note.model_validate(rows[0])
            except NotesError as e:
                self.notifier.error("Couldn't create note", e)
                raise
            self.cache.invalidate(COLLECTION)
            self.notifier.success("Note created successfully")
            return note

    def update_note(
        self,
        uuid: str,
        notes: str,
        title: str | None = None,
        email: str | None = None,
        summary: str | None = None,
    ) -> Note:
        with self._in_flight("update"):
            try:
                if not uuid:
                    raise ValidationError("UUID is required")
                session = self.sessions.require_session()
                rows = call(
                    self.http, "PUT", "/notes", session,
                    params={"uuid": uuid},
                    json=_body(notes=notes, title=title, email=email, summary=summary),
                )
                if not rows:
                    raise NoteNotFound(f"note {uuid} not found")
                note = Note.model_validate(rows[0])
            except NotesError as e:
                self.notifier.error("Couldn't update note", e)
                raise
            self.cache.invalidate(COLLECTION)
            self.cache.invalidate(note_key(note.uuid))
            self.notifier.success("Note updated successfully")
            return note

    def delete_note(self, uuid: str) -> str:
        with self._in_flight("delete"):
            try:
                if not uuid:
                    raise ValidationError("UUID is required")
                session = self.sessions.require_session()
                call(self.http, "DELETE", "/notes", session, params={"uuid": uuid})
            except NotesError as e:
                self.notifier.error("Couldn't delete note", e)
                raise
            self.cache.invalidate(COLLECTION)
            self.cache.remove(note_key(uuid))
            self.notifier.success("Note deleted successfully")
            return uuid
