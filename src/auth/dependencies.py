"""
FastAPI dependencies for authentication.

get_current_user guards protected routes: it validates the bearer token and
exposes the caller's identity to downstream handlers.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request, status

from ..core.security import decode_access_token
from .models import UserRole

logger = logging.getLogger(__name__)

@dataclass
class CurrentUser:
    """Identity carried by a verified access token."""
    user_id: int
    full_name: str
    role: UserRole

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def get_current_user(request: Request) -> CurrentUser:
    """
    Get current authenticated user from the Authorization header.

    Args:
        request: Incoming request

    Returns:
        CurrentUser: Identity from the token claims, also stored on request.state.user

    Raises:
        HTTPException: 401 if the header or token is missing, or the token is invalid or expired
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise _unauthorized("Authorization header missing")

    scheme, _, token = auth_header.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized("Token not found")

    try:
        claims = decode_access_token(token)
        current_user = CurrentUser(
            user_id=int(claims["user_id"]),
            full_name=claims.get("full_name"),
            role=UserRole(claims["role"]),
        )
    except HTTPException as e:
        logger.warning(f"Authentication failed: {e.detail}")
        raise _unauthorized(f"Authentication failed: {e.detail}")
    except (KeyError, TypeError, ValueError):
        logger.warning("Authentication failed: token is missing identity claims")
        raise _unauthorized("Authentication failed: Invalid token payload")

    request.state.user = current_user
    return current_user

def get_optional_current_user(request: Request) -> Optional[CurrentUser]:
    """
    Same as get_current_user but returns None instead of failing.
    """
    if not request.headers.get("Authorization"):
        return None
    try:
        return get_current_user(request)
    except HTTPException:
        return None
