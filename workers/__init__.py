# =============================================================================
# workers/ - Celery Background Task Workers
# =============================================================================
# This package contains the Celery configuration and task definitions for
# background processing of uploads and registrations.
#
# Components:
# - celery_app.py: Celery application configuration
# - tasks.py: Task definitions (thumbnails, welcome message)
# - config.py: Worker-specific settings
# - submitter.py: JobSubmitter used by the API to enqueue tasks
#
# Usage:
#   # Start worker
#   celery -A workers.celery_app worker --loglevel=info -Q fileQueue,userQueue
#
#   # Or use the poetry script
#   poetry run start-worker
#
#   # Submit task (from API)
#   from workers.tasks import generate_thumbnails
#   result = generate_thumbnails.delay(file_id, user_id)
# =============================================================================

from .celery_app import celery_app
from . import tasks

__all__ = [
    "celery_app",
    "tasks",
]
