# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: User registration and response schemas
# - session.py: Resolved auth session and token response
# - file.py: File/folder records and API schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import UserCreate, UserRecord, UserResponse
from .session import AuthSession, TokenResponse
from .file import FileCreate, FileNode, FileResponse, FileType

__all__ = [
    # User
    "UserCreate",
    "UserRecord",
    "UserResponse",
    # Session
    "AuthSession",
    "TokenResponse",
    # File
    "FileCreate",
    "FileNode",
    "FileResponse",
    "FileType",
]
