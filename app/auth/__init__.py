# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides token-based authentication backed by Redis sessions.
#
# Usage:
#   from app.auth import get_current_session
#
#   @router.get("/protected")
#   def protected(session: AuthSession = Depends(get_current_session)):
#       return {"user_id": session.user_id}
# =============================================================================

from app.auth.dependencies import (
    get_current_session,
    get_current_session_optional,
    parse_basic_auth,
)

__all__ = [
    "get_current_session",
    "get_current_session_optional",
    "parse_basic_auth",
]
