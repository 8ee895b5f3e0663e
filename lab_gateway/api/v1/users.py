"""POST /v1/users/login, GET /v1/users/me, POST /v1/users/logout - session endpoints"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from lab_gateway.api.v1.schemas import CurrentUserResponse, LoginRequest, LoginResponse
from lab_gateway.api.dependencies import bearer_scheme, get_auth_client, get_request_id, get_session_context
from lab_gateway.infrastructure.database.session import get_db
from lab_gateway.infrastructure.database.repositories import SessionRepository
from lab_gateway.infrastructure.clients.auth import AuthClient
from lab_gateway.domain.exceptions import AuthenticationError, AuthServiceError
from lab_gateway.domain.models import SessionContext
from lab_gateway.infrastructure.observability.metrics import record_login
from lab_gateway.infrastructure.observability.logging import log_login
from lab_gateway.config import settings

router = APIRouter()


@router.post("/users/login", response_model=LoginResponse)
async def login(
    request_body: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    auth_client: AuthClient = Depends(get_auth_client),
):
    """
    Log a user in against the auth service and open a gateway session.

    The stored user record never contains the password. Failures answer with
    a generic message; the caller gets no hint which part was wrong.
    """
    request_id = get_request_id(request)

    try:
        user = await auth_client.login(request_body.email, request_body.password)
        context = SessionRepository(db).open_session(user, settings.session_ttl_minutes)
        db.commit()

    except AuthenticationError as e:
        db.rollback()
        record_login("rejected")
        log_login(request_id, request_body.email, "rejected")
        logging.warning(f"Login rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=401, detail="Login failed")

    except AuthServiceError as e:
        db.rollback()
        record_login("unavailable")
        log_login(request_id, request_body.email, "unavailable")
        logging.error(f"Auth service error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Login failed")

    record_login("success")
    log_login(request_id, request_body.email, "success")

    return LoginResponse(token=context.token, expires_at=context.expires_at, user=context.user)


@router.get("/users/me", response_model=CurrentUserResponse)
def current_user(context: SessionContext = Depends(get_session_context)):
    """Return the user attached to the presented session"""
    return CurrentUserResponse(
        user_id=context.user_id,
        email=context.email,
        name=context.name,
        expires_at=context.expires_at,
        user=context.user,
    )


@router.post("/users/logout")
def logout(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
):
    """Close the presented session; logging out twice is harmless"""
    if credentials is not None:
        SessionRepository(db).revoke_session(credentials.credentials)
        db.commit()
    return {"status": "logged_out"}
