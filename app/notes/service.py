import logging
from datetime import timedelta

from sqlalchemy.orm import Session
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError

from app.notes.models import Note
from app.shared.db import utcnow
from app.notes.schemas import NoteCreate, NoteUpdate
from app.shared.errors import UpstreamError

logger = logging.getLogger(__name__)

def _owned(email: str):
    return select(Note).where(Note.email == email)

def _next_updated_at(previous):
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now

def list_notes(db: Session, email: str, uuid: str | None = None) -> list[Note]:
    """All notes of `email`, or the 0-or-1 note matching `uuid` for that owner."""
    stmt = _owned(email)
    if uuid:
        stmt = stmt.where(Note.uuid == uuid)
    stmt = stmt.order_by(Note.created_at)
    try:
        return list(db.scalars(stmt).all())
    except SQLAlchemyError as e:
        logger.error("fetching notes for %s failed: %s", email, e)
        raise UpstreamError("Failed to fetch notes") from e

def create_note(db: Session, email: str, payload: NoteCreate) -> Note:
    now = utcnow()
    note = Note(email=email, title=payload.title, notes=payload.notes, created_at=now, updated_at=now)
    try:
        db.add(note)
        db.commit()
        db.refresh(note)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("creating note for %s failed: %s", email, e)
        raise UpstreamError("Failed to create note") from e
    logger.info("created note %s", note.uuid)
    return note

def update_note(db: Session, email: str, uuid: str, payload: NoteUpdate) -> Note | None:
    # owner comes from the session only; payload.email is ignored
    try:
        note = db.scalars(_owned(email).where(Note.uuid == uuid)).first()
        if note is None:
            return None
        note.notes = payload.notes
        if payload.title is not None:
            note.title = payload.title
        if payload.summary is not None:
            note.summary = payload.summary
        note.updated_at = _next_updated_at(note.updated_at)
        db.commit()
        db.refresh(note)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("updating note %s failed: %s", uuid, e)
        raise UpstreamError("Failed to update note") from e
    return note

def delete_note(db: Session, email: str, uuid: str) -> bool:
    try:
        res = db.execute(delete(Note).where(Note.uuid == uuid, Note.email == email))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("deleting note %s failed: %s", uuid, e)
        raise UpstreamError("Failed to delete note") from e
    return res.rowcount > 0
