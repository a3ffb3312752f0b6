# app/shared/auth.py
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError  # python-jose[cryptography]

from app.shared.config import settings

bearer = HTTPBearer(auto_error=False, scheme_name="bearerAuth")

ACCESS = "access"
REFRESH = "refresh"

def demo_enabled() -> bool:
    # shared demo identity; never outside local dev
    return settings.AUTH_DEMO and settings.ENV == "dev"

def _encode(sub: str, email: str, typ: str, minutes: int, extra: Optional[Dict[str, Any]] = None) -> str:
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=minutes)
    payload: Dict[str, Any] = {
        "sub": sub,
        "email": email,
        "typ": typ,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if settings.JWT_ISS:
        payload["iss"] = settings.JWT_ISS
    if settings.JWT_AUD:
        payload["aud"] = settings.JWT_AUD
    if extra:
        payload.update(extra)
    return jwt.encode(payload, settings.JWT_KEY, algorithm=settings.JWT_ALG)

def create_access_token(
    sub: str,
    email: str,
    extra: Optional[Dict[str, Any]] = None,
    minutes: Optional[int] = None,
) -> str:
    return _encode(sub, email, ACCESS, minutes or settings.JWT_EXPIRE_MIN, extra)

def create_refresh_token(sub: str, email: str, minutes: Optional[int] = None) -> str:
    return _encode(sub, email, REFRESH, minutes or settings.JWT_REFRESH_EXPIRE_MIN)

def issue_session(sub: str, email: str) -> Dict[str, Any]:
    """Token pair handed out by /auth/token and /auth/refresh."""
    return {
        "access_token": create_access_token(sub=sub, email=email),
        "refresh_token": create_refresh_token(sub=sub, email=email),
        "token_type": "bearer",
        "expires_in": settings.JWT_EXPIRE_MIN * 60,
    }

def decode_token(token: str, typ: str = ACCESS) -> Dict[str, Any]:
    try:
        payload = jwt.decode(
            token,
            settings.JWT_KEY,
            algorithms=[settings.JWT_ALG],
            audience=settings.JWT_AUD,
            issuer=settings.JWT_ISS,
            options={
                "verify_aud": bool(settings.JWT_AUD),
                "verify_iss": bool(settings.JWT_ISS),
            },
        )
    except JWTError as e:
        raise HTTPException(401, f"invalid token: {e}")

    if payload.get("typ", ACCESS) != typ:
        raise HTTPException(401, f"invalid token: expected {typ} token")
    if not payload.get("sub") or not payload.get("email"):
        raise HTTPException(401, "invalid token: missing identity")
    return payload

def get_user(creds: HTTPAuthorizationCredentials = Depends(bearer)):
    # Always require a bearer token
    if not creds:
        raise HTTPException(401, "Unauthorized")

    token = creds.credentials

    # Demo shortcut (strict: must match DEMO_TOKEN exactly)
    if demo_enabled() and token == settings.DEMO_TOKEN:
        return {"sub": "demo-user", "email": settings.DEMO_EMAIL, "mode": "demo"}

    payload = decode_token(token, ACCESS)
    return {
        "sub": payload["sub"],
        "email": payload["email"],
        "mode": "jwt",
    }
