# =============================================================================
# core/services/user_service.py - Credential Store and Registration
# =============================================================================
# Persists users (email + bcrypt password hash) and verifies credentials.
# Users are immutable once created and never deleted.
# =============================================================================

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol

import bcrypt

from app.exceptions import MissingFieldError, UserAlreadyExistsError
from core.models.user import UserRecord
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_uuid

if TYPE_CHECKING:
    from core.services.jobs import JobSubmitter

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


# =============================================================================
# Password Hashing
# =============================================================================

def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a clear-text password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a clear-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


# =============================================================================
# Credential Store
# =============================================================================

class UserStore(Protocol):
    """Persistence contract for user records."""

    def get_by_id(self, user_id: str) -> UserRecord | None:
        ...

    def get_by_email(self, email: str) -> UserRecord | None:
        ...

    def create(self, email: str, password_hash: str) -> UserRecord:
        ...

    def count(self) -> int:
        ...


class SupabaseUserStore:
    """UserStore backed by the Supabase `users` table."""

    def __init__(self, supabase: SupabaseClient):
        self._supabase = supabase

    def _fetch_one(self, column: str, value: str) -> UserRecord | None:
        try:
            response = (
                self._supabase.table(USERS_TABLE)
                .select("id, email, password_hash")
                .eq(column, value)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch user: {e}",
                code="FETCH_USER_FAILED",
                details={column: value},
            )
        rows = response.data or []
        return UserRecord.from_row(rows[0]) if rows else None

    def get_by_id(self, user_id: str) -> UserRecord | None:
        user_id = parse_uuid(user_id)
        if user_id is None:
            return None
        return self._fetch_one("id", user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        return self._fetch_one("email", email)

    def create(self, email: str, password_hash: str) -> UserRecord:
        try:
            response = (
                self._supabase.table(USERS_TABLE)
                .insert({"email": email, "password_hash": password_hash})
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create user: {e}",
                code="CREATE_USER_FAILED",
                suggestion="Check that the users table exists with a unique email column",
            )
        if not response.data:
            raise SupabaseClientError("Insert returned no data", code="CREATE_USER_FAILED")
        return UserRecord.from_row(response.data[0])

    def count(self) -> int:
        return self._supabase.count(USERS_TABLE)


# =============================================================================
# Service
# =============================================================================

class UserService:
    """
    Registration and credential checks on top of a UserStore.
    """

    def __init__(
        self,
        store: UserStore,
        jobs: JobSubmitter | None = None,
        bcrypt_rounds: int = 12,
    ):
        self.store = store
        self._jobs = jobs
        self._bcrypt_rounds = bcrypt_rounds

    def register(self, email: str | None, password: str | None) -> UserRecord:
        """
        Create a new user.

        Raises:
            MissingFieldError: email or password absent
            UserAlreadyExistsError: email taken
        """
        if not email:
            raise MissingFieldError("email")
        if not password:
            raise MissingFieldError("password")

        if self.store.get_by_email(email) is not None:
            raise UserAlreadyExistsError()

        user = self.store.create(email, hash_password(password, self._bcrypt_rounds))
        logger.info(f"Registered user: {user.id}")

        if self._jobs is not None:
            try:
                self._jobs.submit_welcome(user.id)
            except Exception as e:
                logger.warning(f"Failed to submit welcome job for user {user.id}: {e}")

        return user

    def authenticate(self, email: str, password: str) -> UserRecord | None:
        """Return the user if the password matches, else None."""
        user = self.store.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    def get(self, user_id: str) -> UserRecord | None:
        return self.store.get_by_id(user_id)

    def count(self) -> int:
        return self.store.count()
