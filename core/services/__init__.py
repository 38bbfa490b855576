# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import SupabaseUserStore, UserService, UserStore
from .auth_service import AuthSessionManager, KeyValueStore, SESSION_TTL_SECONDS
from .file_store import FileStore, SupabaseFileStore
from .access_control import AccessControl
from .storage_service import LocalStorageService
from .thumbnail_service import ThumbnailService
from .file_service import FileService, PAGE_SIZE, normalize_page, normalize_parent_id
from .jobs import JobError, JobSubmitter, process_thumbnail_job, process_welcome_job

__all__ = [
    "SupabaseUserStore",
    "UserService",
    "UserStore",
    "AuthSessionManager",
    "KeyValueStore",
    "SESSION_TTL_SECONDS",
    "FileStore",
    "SupabaseFileStore",
    "AccessControl",
    "LocalStorageService",
    "ThumbnailService",
    "FileService",
    "PAGE_SIZE",
    "normalize_page",
    "normalize_parent_id",
    "JobError",
    "JobSubmitter",
    "process_thumbnail_job",
    "process_welcome_job",
]
