class NotesError(Exception):
    """Base class for note and summary failures."""

    status_code: int | None = None

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

class Unauthenticated(NotesError):
    """No session, or the session was rejected."""
    status_code = 401

class ValidationError(NotesError):
    """A required field is missing or malformed."""
    status_code = 400

class NoteNotFound(NotesError):
    """The uuid is unknown for the current owner."""

class UpstreamError(NotesError):
    """The note store or the completion provider failed."""
    status_code = 500

class NetworkError(NotesError):
    """Transport-level failure before any response arrived."""

class Busy(NotesError):
    """The same operation is already in flight."""
