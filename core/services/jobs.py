# =============================================================================
# core/services/jobs.py - Background Job Contracts
# =============================================================================
# The services never talk to the task queue directly. They depend on a
# JobSubmitter, and submission is fire-and-forget: a failed submit is
# logged by the caller and never undoes the request that triggered it.
#
# The job bodies live here too so they can run (and be tested) without a
# Celery worker; workers/tasks.py only wires them to the queue.
# =============================================================================

import logging
from typing import Protocol

from lib.utils import ApplicationError
from core.services.file_store import FileStore
from core.services.storage_service import LocalStorageService
from core.services.thumbnail_service import ThumbnailService
from core.services.user_service import UserStore

logger = logging.getLogger(__name__)


class JobSubmitter(Protocol):
    """Capability to enqueue background jobs without waiting for them."""

    def submit_thumbnails(self, file_id: str, user_id: str) -> None:
        ...

    def submit_welcome(self, user_id: str) -> None:
        ...


class JobError(ApplicationError):
    """Raised by a job body when its input can't be processed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="JOB_ERROR", **kwargs)


def process_thumbnail_job(
    file_id: str | None,
    user_id: str | None,
    files: FileStore,
    storage: LocalStorageService,
    thumbnails: ThumbnailService,
) -> list[int]:
    """
    Generate every thumbnail width for an uploaded image.

    Args:
        file_id: Id of the image node
        user_id: Id of its owner
        files: Metadata store
        storage: Blob storage holding the original
        thumbnails: Resizer

    Returns:
        Widths that were written

    Raises:
        JobError: Missing ids, or no such file for this owner
    """
    if not file_id:
        raise JobError("Missing fileId")
    if not user_id:
        raise JobError("Missing userId")

    node = files.get(file_id)
    if node is None or node.owner_id != str(user_id) or node.is_folder:
        raise JobError("File not found", details={"file_id": file_id, "user_id": user_id})

    original = storage.read(node.storage_ref)
    written = []
    for width in thumbnails.widths:
        storage.write_variant(node.storage_ref, width, thumbnails.generate(original, width))
        written.append(width)

    logger.info(f"Generated thumbnails {written} for file {file_id}")
    return written


def process_welcome_job(user_id: str | None, users: UserStore) -> str:
    """
    Greet a newly registered user.

    Returns:
        The greeting that was emitted

    Raises:
        JobError: Missing id or unknown user
    """
    if not user_id:
        raise JobError("Missing userId")

    user = users.get_by_id(user_id)
    if user is None:
        raise JobError("User not found", details={"user_id": user_id})

    greeting = f"Welcome {user.email}"
    logger.info(greeting)
    return greeting
