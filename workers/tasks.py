# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Defines background tasks submitted by the API:
# - generate_thumbnails: 500/250/100 pixel variants of an uploaded image
# - send_welcome_email: greet a newly registered user
#
# Task bodies live in core/services/jobs.py; this module only builds the
# collaborators a worker process needs and hands them over.
# =============================================================================

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from celery import shared_task

from app.config import settings
from core.services.file_store import SupabaseFileStore
from core.services.jobs import process_thumbnail_job, process_welcome_job
from core.services.storage_service import LocalStorageService
from core.services.thumbnail_service import ThumbnailService
from core.services.user_service import SupabaseUserStore
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)


# =============================================================================
# Worker Context
# =============================================================================

@dataclass
class WorkerContext:
    """Collaborators shared by all tasks of one worker process."""
    users: SupabaseUserStore
    files: SupabaseFileStore
    storage: LocalStorageService
    thumbnails: ThumbnailService


@lru_cache
def get_worker_context() -> WorkerContext:
    """
    Build the worker's collaborators on first use.

    Each worker process connects once and reuses the connection for every
    task it runs.
    """
    supabase = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
    supabase.connect()
    return WorkerContext(
        users=SupabaseUserStore(supabase),
        files=SupabaseFileStore(supabase),
        storage=LocalStorageService(settings.FOLDER_PATH),
        thumbnails=ThumbnailService(settings.thumbnail_widths_list),
    )


# =============================================================================
# File Tasks
# =============================================================================

@shared_task(bind=True, name="workers.tasks.generate_thumbnails")
def generate_thumbnails(self, file_id: str, user_id: str) -> dict[str, Any]:
    """
    Write thumbnails next to an uploaded image.

    Args:
        file_id: Image node UUID
        user_id: Owner UUID

    Returns:
        Dict with the file id and the widths written

    Raises:
        JobError: Missing ids or unknown file (task marked failed, not retried)
    """
    logger.info(f"Generating thumbnails for file {file_id}")
    context = get_worker_context()

    widths = process_thumbnail_job(
        file_id,
        user_id,
        files=context.files,
        storage=context.storage,
        thumbnails=context.thumbnails,
    )
    return {"file_id": file_id, "widths": widths}


# =============================================================================
# User Tasks
# =============================================================================

@shared_task(bind=True, name="workers.tasks.send_welcome_email")
def send_welcome_email(self, user_id: str) -> dict[str, Any]:
    """
    Greet a newly registered user.

    Args:
        user_id: User UUID

    Returns:
        Dict with the greeting
    """
    context = get_worker_context()
    greeting = process_welcome_job(user_id, users=context.users)
    return {"user_id": user_id, "message": greeting}
