"""Caller identity as FastAPI dependencies.

Public interface:
    ``optional_user`` -- the verified user id, or None. Never raises.
    ``require_user``  -- the verified user id; raises 401 otherwise.

Roles are not resolved here. Services load them per request through
RoleService so that every read and mutation path sees the same role set.
"""

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .config import settings
from .token_factory import decode_token
from ..database import get_db
from ..exceptions import AuthenticationError
from ..repositories import RoleRepository

logger = logging.getLogger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> Optional[str]:
    """Return the caller's user id, or None for anonymous callers.

    A missing, invalid or expired token, an unknown user and a deactivated
    account all read as anonymous.
    """
    if credentials is None:
        return None
    return _resolve_user(credentials.credentials, db)


def require_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer_scheme),
    db: Session = Depends(get_db),
) -> str:
    """Return the caller's user id. Raises AuthenticationError without a valid identity."""
    if credentials is None:
        raise AuthenticationError("Missing authentication token")
    user_id = _resolve_user(credentials.credentials, db)
    if user_id is None:
        raise AuthenticationError("Invalid or expired token")
    return user_id


def _resolve_user(token: str, db: Session) -> Optional[str]:
    payload = decode_token(token, settings.jwt_secret_key, settings.jwt_algorithm)
    if payload is None:
        logger.info("Rejected bearer token")
        return None

    user = RoleRepository(db).get_user(payload.sub)
    if user is None or not user.is_active:
        logger.info("Token subject is unknown or deactivated", extra={"user_id": payload.sub})
        return None
    return user.user_id
