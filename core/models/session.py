# =============================================================================
# core/models/session.py - Auth Session Schemas
# =============================================================================
# An auth session is the result of resolving an X-Token: the opaque token
# itself plus the user it maps to. The token -> user_id mapping lives in
# Redis; the user is looked up by id each time (never embedded).
# =============================================================================

from pydantic import BaseModel, ConfigDict

from .user import UserRecord


class AuthSession(BaseModel):
    """
    A resolved, currently valid session.

    Anyone holding `token` is treated as `user`.
    """

    model_config = ConfigDict(frozen=True)

    token: str
    user: UserRecord

    @property
    def user_id(self) -> str:
        return self.user.id


class TokenResponse(BaseModel):
    """Returned by GET /connect."""

    token: str
