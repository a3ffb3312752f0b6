from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.shared.db import get_db
from app.shared.auth import get_user
from app.shared.errors import UpstreamError
from app.shared.http import err, err_from
from app.notes.schemas import NoteCreate, NoteUpdate, NoteOut, DeleteOut
from app.notes import service

router = APIRouter(prefix="/notes", tags=["Notes"])

# GET /notes            -> every note of the caller
# GET /notes?uuid={id}  -> [] or [note]; a foreign id is indistinguishable from a missing one
@router.get("", response_model=list[NoteOut])
def get_notes(
    uuid: str | None = Query(None),
    user=Depends(get_user),
    db: Session = Depends(get_db),
):
    try:
        return service.list_notes(db, user["email"], uuid)
    except UpstreamError as e:
        err_from(e)

@router.post("", response_model=list[NoteOut], status_code=201)
def create_note(payload: NoteCreate, user=Depends(get_user), db: Session = Depends(get_db)):
    if not payload.notes:
        err("Notes content is required")
    try:
        note = service.create_note(db, user["email"], payload)
    except UpstreamError as e:
        err_from(e)
    return [note]

@router.put("", response_model=list[NoteOut])
def update_note(
    payload: NoteUpdate,
    uuid: str | None = Query(None),
    user=Depends(get_user),
    db: Session = Depends(get_db),
):
    if not uuid:
        err("UUID is required")
    if not payload.notes:
        err("Notes content is required")
    try:
        note = service.update_note(db, user["email"], uuid, payload)
    except UpstreamError as e:
        err_from(e)
    return [note] if note else []

@router.delete("", response_model=DeleteOut)
def delete_note(uuid: str | None = Query(None), user=Depends(get_user), db: Session = Depends(get_db)):
    if not uuid:
        err("UUID is required")
    try:
        service.delete_note(db, user["email"], uuid)
    except UpstreamError as e:
        err_from(e)
    return {"message": "Note deleted successfully"}
