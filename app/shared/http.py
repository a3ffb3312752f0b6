from fastapi import HTTPException

from app.shared.errors import NotesError

def err(message: str, status: int = 400):
    # raise to short-circuit the route
    raise HTTPException(status_code=status, detail=message)

def err_from(exc: NotesError, fallback_status: int = 500):
    err(exc.message, status=exc.status_code or fallback_status)
