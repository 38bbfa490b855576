# =============================================================================
# app/dependencies.py - Service Container and Shared Dependencies
# =============================================================================
# The process entry point builds one Services container (see build_services)
# and stores it on app.state. Route handlers receive it through Depends().
#
# Usage:
#   @router.get("/stats")
#   def stats(services: ServicesDep):
#       return {"users": services.users.count()}
# =============================================================================

import logging
from dataclasses import dataclass, field
from typing import Annotated, Callable

from fastapi import Depends, Request

from app.config import Settings
from core.services.auth_service import AuthSessionManager
from core.services.file_service import FileService
from core.services.file_store import SupabaseFileStore
from core.services.storage_service import LocalStorageService
from core.services.user_service import SupabaseUserStore, UserService
from lib.redis_client import RedisClient
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """
    Everything the routes need, wired together.

    status_checks maps a collaborator name to a liveness probe (GET /status).
    closers are called in order on shutdown.
    """

    users: UserService
    auth: AuthSessionManager
    files: FileService
    status_checks: dict[str, Callable[[], bool]] = field(default_factory=dict)
    closers: list[Callable[[], None]] = field(default_factory=list)

    def close(self) -> None:
        for closer in self.closers:
            try:
                closer()
            except Exception as e:
                logger.warning(f"Error while closing a collaborator: {e}")


def build_services(settings: Settings) -> Services:
    """
    Connect to Redis and Supabase and wire the services.

    Args:
        settings: Application settings

    Returns:
        Services: Ready-to-use container; call close() on shutdown
    """
    # Imported here so the API only loads Celery when it actually runs
    from workers.submitter import CeleryJobSubmitter

    redis_client = RedisClient.from_url(settings.REDIS_URL)
    supabase = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    supabase.connect()

    jobs = CeleryJobSubmitter()
    users = UserService(
        SupabaseUserStore(supabase),
        jobs=jobs,
        bcrypt_rounds=settings.BCRYPT_ROUNDS,
    )
    auth = AuthSessionManager(users, redis_client)
    files = FileService(
        SupabaseFileStore(supabase),
        LocalStorageService(settings.FOLDER_PATH),
        jobs=jobs,
        thumbnail_sizes=settings.thumbnail_widths_list,
        max_upload_bytes=settings.max_upload_size_bytes,
    )

    return Services(
        users=users,
        auth=auth,
        files=files,
        status_checks={"redis": redis_client.ping, "db": supabase.is_alive},
        closers=[redis_client.close, supabase.close],
    )


def get_services(request: Request) -> Services:
    """Return the container stored on the app by the lifespan handler."""
    return request.app.state.services


# Type alias for dependency injection
ServicesDep = Annotated[Services, Depends(get_services)]
