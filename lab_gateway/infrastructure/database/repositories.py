"""Data access layer for login sessions"""

import secrets
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session
from lab_gateway.infrastructure.database.models import UserSession
from lab_gateway.domain.models import SessionContext
from lab_gateway.domain.exceptions import SessionExpiredError, SessionNotFoundError
from lab_gateway.utils.date_utils import as_utc, utc_now


def _to_context(row: UserSession) -> SessionContext:
    return SessionContext(
        token=row.token,
        user_id=row.user_id,
        email=row.email,
        name=row.name or "",
        user=dict(row.user_data or {}),
        created_at=as_utc(row.created_at) if row.created_at else utc_now(),
        expires_at=as_utc(row.expires_at),
    )


class SessionRepository:
    """Repository for user sessions"""

    def __init__(self, db: Session):
        self.db = db

    def open_session(
        self,
        user: Dict[str, Any],
        ttl_minutes: int,
        now: Optional[datetime] = None,
    ) -> SessionContext:
        """Persist a new session for a logged-in user. Password is cleared before storage."""
        now = now or utc_now()
        user_data = {**user, "password": ""}

        row = UserSession(
            token=secrets.token_urlsafe(32),
            user_id=str(user_data.get("_id") or user_data.get("id") or user_data.get("email", "")),
            email=str(user_data.get("email", "")),
            name=str(user_data.get("name") or ""),
            user_data=user_data,
            created_at=now,
            expires_at=now + timedelta(minutes=ttl_minutes),
        )
        self.db.add(row)
        self.db.flush()
        return _to_context(row)

    def _get_open_row(self, token: str) -> Optional[UserSession]:
        return (
            self.db.query(UserSession)
            .filter(UserSession.token == token, UserSession.revoked_at.is_(None))
            .first()
        )

    def get_active_session(self, token: str, now: Optional[datetime] = None) -> SessionContext:
        """
        Resolve a bearer token to its session.

        An expired session is revoked on the spot.

        Raises:
            SessionNotFoundError: Unknown or revoked token
            SessionExpiredError: Token past its expiry
        """
        now = now or utc_now()
        row = self._get_open_row(token)
        if row is None:
            raise SessionNotFoundError("No open session for token")

        context = _to_context(row)
        if context.is_expired(now):
            row.revoked_at = now
            self.db.flush()
            raise SessionExpiredError(f"Session for {context.email} expired at {context.expires_at.isoformat()}")

        return context

    def revoke_session(self, token: str, now: Optional[datetime] = None) -> bool:
        """Close a session. Returns False when there was nothing open to close."""
        row = self._get_open_row(token)
        if row is None:
            return False
        row.revoked_at = now or utc_now()
        self.db.flush()
        return True
