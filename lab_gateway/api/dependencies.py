"""Dependency injection for FastAPI endpoints"""

import logging
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from lab_gateway.domain.exceptions import SessionExpiredError, SessionNotFoundError
from lab_gateway.domain.models import SessionContext
from lab_gateway.infrastructure.clients.auth import AuthClient
from lab_gateway.infrastructure.clients.transactions import TransactionClient
from lab_gateway.infrastructure.database.repositories import SessionRepository
from lab_gateway.infrastructure.database.session import get_db

bearer_scheme = HTTPBearer(auto_error=False)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_transaction_client() -> TransactionClient:
    """Provide transaction store client instance"""
    return TransactionClient()


def get_auth_client() -> AuthClient:
    """Provide auth service client instance"""
    return AuthClient()


def get_session_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> SessionContext:
    """Resolve the bearer token to an open session, or answer 401"""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        return SessionRepository(db).get_active_session(credentials.credentials)
    except SessionExpiredError as e:
        # Persist the revocation made while detecting expiry
        db.commit()
        logging.info(f"Session expired: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=401, detail="Session expired")
    except SessionNotFoundError:
        raise HTTPException(status_code=401, detail="Not authenticated")
