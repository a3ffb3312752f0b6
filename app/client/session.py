from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import httpx

from app.client.http import call
from app.shared.errors import NotesError, Unauthenticated

logger = logging.getLogger(__name__)

# refresh a little before the server would reject the token
REFRESH_MARGIN = timedelta(seconds=30)


@dataclass(frozen=True)
class Session:
    access_token: str
    refresh_token: str
    email: str | None
    expires_at: datetime

    def expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now + REFRESH_MARGIN >= self.expires_at


def _session_from(tokens: dict, email: str | None, now: datetime | None = None) -> Session:
    now = now or datetime.now(timezone.utc)
    return Session(
        access_token=tokens["access_token"],
        refresh_token=tokens.get("refresh_token") or "",
        email=email,
        expires_at=now + timedelta(seconds=int(tokens.get("expires_in") or 0)),
    )


class SessionProvider:
    """Single owner of the current session.

    Data-access calls ask it for a session every time; it refreshes an
    expiring one through /auth/refresh and returns None when signed out.
    """

    def __init__(self, http: httpx.Client):
        self.http = http
        self._session: Session | None = None

    @property
    def current(self) -> Session | None:
        return self._session

    def sign_in(self, email: str, password: str) -> Session:
        tokens = call(self.http, "POST", "/auth/token", data={"username": email, "password": password})
        self._session = _session_from(tokens, email)
        logger.info("signed in as %s", email)
        return self._session

    def use(self, session: Session) -> None:
        """Adopt a session issued elsewhere (e.g. an OAuth code exchange)."""
        self._session = session

    def sign_out(self) -> None:
        self._session = None

    def refresh(self) -> Session | None:
        if self._session is None:
            return None
        try:
            tokens = call(self.http, "POST", "/auth/refresh", json={"refresh_token": self._session.refresh_token})
        except Unauthenticated:
            logger.warning("session refresh rejected, signing out")
            self._session = None
            return None
        self._session = _session_from(tokens, self._session.email)
        return self._session

    def get_session(self) -> Session | None:
        if self._session is not None and self._session.expired():
            try:
                return self.refresh()
            except NotesError as e:
                logger.warning("session refresh failed: %s", e)
                return None
        return self._session

    def require_session(self) -> Session:
        session = self.get_session()
        if session is None:
            raise Unauthenticated("No session found")
        return session
