# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreate: Input for POST /users
# - UserRecord: A stored user, including the password hash
# - UserResponse: Output when returning a user to clients (never the hash)
#
# Users are created on registration and never modified or deleted afterwards.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """
    Schema for registering a new user.

    Both fields are optional at the schema level so that a missing value
    is reported as "Missing email" / "Missing password" (400) by the
    service rather than as a generic parsing error.

    Example:
        {
            "email": "bob@dylan.com",
            "password": "toto1234!"
        }
    """

    email: str | None = Field(
        default=None,
        description="Unique email address used to log in"
    )

    password: str | None = Field(
        default=None,
        description="Clear-text password (hashed before storage)"
    )


class UserRecord(BaseModel):
    """A user as persisted in the `users` table."""

    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    password_hash: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "UserRecord":
        """Build a UserRecord from a database row."""
        return cls(
            id=str(row["id"]),
            email=row["email"],
            password_hash=row["password_hash"],
        )


class UserResponse(BaseModel):
    """
    Schema for returning user data to clients.

    Returned by:
    - POST /users
    - GET /users/me
    """

    id: str = Field(..., description="Unique user identifier")
    email: str = Field(..., description="User email")

    @classmethod
    def from_record(cls, user: UserRecord) -> "UserResponse":
        return cls(id=user.id, email=user.email)
