# =============================================================================
# core/services/auth_service.py - Auth Session Manager
# =============================================================================
# Issues, resolves and revokes bearer tokens.
#
# A session is a single key in an expiring key-value store:
#     auth_<token> -> <user_id>    (TTL 24h, set once, never extended)
#
# Session states:
#     absent  --create_session-->  active
#     active  --TTL elapses----->  expired   (done by the store, not here)
#     active  --revoke_session-->  absent
# An expired session is indistinguishable from an absent one.
# =============================================================================

import logging
import secrets
from typing import Callable, Protocol

from app.exceptions import InvalidCredentialsError, UnauthorizedError
from core.models.session import AuthSession
from core.services.user_service import UserService

logger = logging.getLogger(__name__)

# Fixed lifetime of a token; there is no refresh and no sliding expiry
SESSION_TTL_SECONDS = 60 * 60 * 24

TOKEN_KEY_PREFIX = "auth_"


class KeyValueStore(Protocol):
    """Expiring key-value store with atomic per-key operations."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        ...

    def delete(self, key: str) -> bool:
        ...


def generate_token() -> str:
    """Opaque, unguessable bearer token."""
    return secrets.token_urlsafe(32)


class AuthSessionManager:
    """
    Owns every session: nothing else creates, reads or deletes auth keys.

    Multiple concurrent sessions per user are allowed; each login gets its
    own token.
    """

    def __init__(
        self,
        users: UserService,
        store: KeyValueStore,
        ttl_seconds: int = SESSION_TTL_SECONDS,
        token_factory: Callable[[], str] = generate_token,
    ):
        self._users = users
        self._store = store
        self._ttl_seconds = ttl_seconds
        self._token_factory = token_factory

    @staticmethod
    def _key(token: str) -> str:
        return f"{TOKEN_KEY_PREFIX}{token}"

    def create_session(self, email: str, password: str) -> str:
        """
        Log a user in.

        Args:
            email: Account email
            password: Clear-text password

        Returns:
            A new token valid for the session TTL

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = self._users.authenticate(email, password)
        if user is None:
            raise InvalidCredentialsError()

        token = self._token_factory()
        self._store.set(self._key(token), user.id, self._ttl_seconds)
        logger.info(f"Created session for user: {user.id}")
        return token

    def resolve_session(self, token: str | None) -> AuthSession:
        """
        Turn a token into the session it belongs to. Read-only.

        Raises:
            UnauthorizedError: Token absent, expired, revoked, or its user
                no longer exists
        """
        if not token:
            raise UnauthorizedError()

        user_id = self._store.get(self._key(token))
        if not user_id:
            raise UnauthorizedError()

        user = self._users.get(user_id)
        if user is None:
            logger.warning(f"Token maps to unknown user: {user_id}")
            raise UnauthorizedError()

        return AuthSession(token=token, user=user)

    def revoke_session(self, token: str | None) -> None:
        """
        Log a session out.

        The token must currently resolve; revoking an unknown or expired
        token is reported the same way as using one.

        Raises:
            UnauthorizedError: Token doesn't resolve to a session
        """
        session = self.resolve_session(token)
        self._store.delete(self._key(session.token))
        logger.info(f"Revoked session for user: {session.user_id}")
