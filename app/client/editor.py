from __future__ import annotations

import logging

from app.client.hooks import Note, NotesClient
from app.shared.errors import Busy, NotesError

logger = logging.getLogger(__name__)

DEFAULT_CONTENT = (
    "<h2>Start taking notes!</h2>"
    "<p>Use the toolbar above to format your notes.</p>"
)


class NoteEditor:
    """Editable note content; persistence goes through the hooks.

    A new note (no uuid) is created on the first save and updated afterwards.
    """

    def __init__(self, client: NotesClient, uuid: str | None = None, content: str = "", title: str = "", email: str = ""):
        self.client = client
        self.uuid = uuid
        self.content = content or DEFAULT_CONTENT
        self.title = title
        self.email = email
        self.saving = False
        self._saved_content = content if uuid else None

    @classmethod
    def open(cls, client: NotesClient, uuid: str) -> "NoteEditor":
        """Load `uuid` for editing; falls back to a new note when it can't be loaded."""
        try:
            note = client.get_note(uuid)
        except NotesError as e:
            # get_note already notified
            logger.debug("loading %s failed: %s", uuid, e)
            return cls(client)
        if note is None:
            client.notifier.error("No note found")
            return cls(client)
        return cls(client, uuid=note.uuid, content=note.notes, title=note.title or "", email=note.email)

    @property
    def dirty(self) -> bool:
        return self.content != self._saved_content

    @property
    def can_save(self) -> bool:
        return not self.saving

    def set_content(self, html: str) -> None:
        self.content = html

    def set_title(self, title: str) -> None:
        self.title = title

    def save(self) -> Note | None:
        """Create or update; returns None when the save failed (already notified)."""
        if self.saving:
            raise Busy("save already in progress")
        self.saving = True
        try:
            if self.uuid:
                note = self.client.update_note(self.uuid, self.content, title=self.title, email=self.email or None)
            else:
                note = self.client.create_note(self.content, title=self.title, email=self.email or None)
                self.uuid = note.uuid
        except NotesError as e:
            logger.debug("save failed: %s", e)
            return None
        finally:
            self.saving = False
        self._saved_content = note.notes
        return note
