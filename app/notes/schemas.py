from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional

class NoteCreate(BaseModel):
    # emptiness is checked in the route so it maps to a plain 400
    notes: Optional[str] = None
    title: Optional[str] = Field(default=None, max_length=500)

class NoteUpdate(NoteCreate):
    # accepted for compatibility, never used as the owner
    email: Optional[str] = None
    summary: Optional[str] = None

class NoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    uuid: str
    title: Optional[str] = None
    notes: str
    email: str
    summary: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class DeleteOut(BaseModel):
    message: str
