# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Two credential transports:
# - Login only: "Authorization: Basic base64(email:password)"
# - Everything else: "X-Token: <token>" as returned by GET /connect
#
# Usage:
#   from app.auth import get_current_session
#
#   @router.get("/protected")
#   def protected(session: AuthSession = Depends(get_current_session)):
#       return {"user_id": session.user_id}
# =============================================================================

import base64
import binascii
import logging
from typing import Optional

from fastapi import Depends, Security
from fastapi.security import APIKeyHeader

from app.dependencies import ServicesDep
from app.exceptions import InvalidCredentialsError, UnauthorizedError
from core.models.session import AuthSession

logger = logging.getLogger(__name__)

# X-Token header extractor; a missing header is handled by our own 401
x_token_header = APIKeyHeader(name="X-Token", auto_error=False)


def parse_basic_auth(authorization: str | None) -> tuple[str, str]:
    """
    Extract (email, password) from a Basic Authorization header.

    Only the first ':' separates email from password, so passwords may
    contain colons.

    Raises:
        InvalidCredentialsError: Header missing, not Basic, not base64,
            not UTF-8, or without a ':'
    """
    if not authorization:
        raise InvalidCredentialsError()

    scheme, _, encoded = authorization.partition(" ")
    if scheme.lower() != "basic" or not encoded.strip():
        raise InvalidCredentialsError()

    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except (binascii.Error, ValueError):
        raise InvalidCredentialsError()

    email, sep, password = decoded.partition(":")
    if not sep or not email:
        raise InvalidCredentialsError()
    return email, password


def get_current_session(
    services: ServicesDep,
    token: Optional[str] = Security(x_token_header),
) -> AuthSession:
    """
    Resolve the X-Token header into a session.

    Raises:
        UnauthorizedError: 401 if the token is missing, expired or revoked
    """
    if not token:
        raise UnauthorizedError()
    return services.auth.resolve_session(token)


def get_current_session_optional(
    services: ServicesDep,
    token: Optional[str] = Security(x_token_header),
) -> Optional[AuthSession]:
    """
    Optionally resolve the X-Token header.

    Returns None if no token is provided or it doesn't resolve, instead of
    raising. Used for content reads, where public files need no token.
    """
    if not token:
        return None

    try:
        return services.auth.resolve_session(token)
    except UnauthorizedError:
        # Invalid token reads like an anonymous request
        return None
