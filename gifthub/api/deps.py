"""Common API dependencies: authenticated caller extraction."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session

from gifthub.database import get_session
from gifthub.models.user import User
from gifthub.services.auth_service import AuthContext, authenticate

# auto_error=False: a missing header is reported as our AuthError (401)
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> AuthContext:
    """Resolve the bearer credential to the caller's user and family."""
    token = credentials.credentials if credentials else None
    return authenticate(token, session)


def get_current_user(context: AuthContext = Depends(get_auth_context)) -> User:
    return context.user
