# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# GET /connect     Basic auth -> new token
# GET /disconnect  X-Token    -> token revoked
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Header, Response, Security, status

from app.auth.dependencies import parse_basic_auth, x_token_header
from app.dependencies import ServicesDep
from core.models.session import TokenResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.get("/connect", response_model=TokenResponse)
def connect(
    services: ServicesDep,
    authorization: Optional[str] = Header(default=None),
) -> TokenResponse:
    """
    Log in with Basic credentials.

    Returns:
        TokenResponse: Token valid for 24 hours, to be sent as X-Token

    Raises:
        401: If the header is malformed or the credentials are wrong
    """
    email, password = parse_basic_auth(authorization)
    token = services.auth.create_session(email, password)
    return TokenResponse(token=token)


@router.get("/disconnect", status_code=status.HTTP_204_NO_CONTENT)
def disconnect(
    services: ServicesDep,
    token: Optional[str] = Security(x_token_header),
) -> Response:
    """
    Revoke the current token.

    Raises:
        401: If the token doesn't resolve to a session
    """
    services.auth.revoke_session(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
