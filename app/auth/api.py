# app/auth/api.py
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr
from sqlalchemy.orm import Session
from fastapi.security import OAuth2PasswordRequestForm

from app.shared.db import get_db
from app.shared.auth import REFRESH, decode_token, demo_enabled, get_user, issue_session
from app.auth.service import register_user, authenticate_user
from app.shared.config import settings

router = APIRouter(prefix="/auth", tags=["Auth"])

class RegisterIn(BaseModel):
    email: EmailStr
    password: str

class RefreshIn(BaseModel):
    refresh_token: str

@router.post("/register")
def api_register(inb: RegisterIn, db: Session = Depends(get_db)):
    try:
        user = register_user(db, inb.email, inb.password)
        return {"ok": True, "user": user}
    except ValueError as e:
        raise HTTPException(400, str(e))

@router.post("/token")
def api_token(form: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    if demo_enabled():
        # return the demo token; user pastes it in Authorize
        return {
            "access_token": settings.DEMO_TOKEN,
            "refresh_token": settings.DEMO_TOKEN,
            "token_type": "bearer",
            "expires_in": settings.JWT_EXPIRE_MIN * 60,
            "demo": True,
        }
    user = authenticate_user(db, form.username, form.password)
    if not user:
        raise HTTPException(401, "invalid credentials")
    return {**issue_session(user["sub"], user["email"]), "demo": False}

@router.post("/refresh")
def api_refresh(inb: RefreshIn):
    if demo_enabled() and inb.refresh_token == settings.DEMO_TOKEN:
        return {
            "access_token": settings.DEMO_TOKEN,
            "refresh_token": settings.DEMO_TOKEN,
            "token_type": "bearer",
            "expires_in": settings.JWT_EXPIRE_MIN * 60,
            "demo": True,
        }
    payload = decode_token(inb.refresh_token, REFRESH)
    return {**issue_session(payload["sub"], payload["email"]), "demo": False}

@router.get("/me")
def api_me(user = Depends(get_user)):
    return {"ok": True, "user": user}
