# =============================================================================
# workers/celery_app.py - Celery Application
# =============================================================================
# Creates the Celery app shared by the API (to submit) and the worker
# processes (to run). Broker and result backend are the same Redis instance
# that holds auth tokens.
#
# Usage:
#   celery -A workers.celery_app worker --loglevel=info -Q fileQueue,userQueue
#   celery -A workers.celery_app status
# =============================================================================

import logging

from celery import Celery
from celery.signals import task_failure, task_postrun, task_prerun

from app.config import settings

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _redacted(url: str) -> str:
    # Drop credentials before logging a redis:// URL
    return url.split("@")[-1] if "@" in url else url


def create_celery_app() -> Celery:
    """
    Create the Celery app and apply CeleryConfig.

    Returns:
        Configured Celery app instance
    """
    app = Celery("files_manager_worker", include=["workers.tasks"])
    app.config_from_object("workers.config:CeleryConfig")

    logger.info(
        f"Celery app created with broker {_redacted(settings.REDIS_URL)}, "
        f"queues {sorted(app.conf.task_queues or [])}"
    )
    return app


celery_app = create_celery_app()


# =============================================================================
# Task Lifecycle Logging
# =============================================================================

@task_prerun.connect
def task_prerun_handler(sender=None, task_id=None, task=None, args=None, kwargs=None, **extra):
    """Log task start with its arguments (ids only, never content)."""
    logger.info(f"Task started: {task.name} [{task_id}] args={args}")


@task_postrun.connect
def task_postrun_handler(sender=None, task_id=None, task=None, retval=None, state=None, **extra):
    """Log task completion."""
    logger.info(f"Task completed: {task.name} [{task_id}] - State: {state}")


@task_failure.connect
def task_failure_handler(sender=None, task_id=None, exception=None, args=None, **extra):
    """Log task failure; job errors (missing ids, unknown file) end up here."""
    logger.error(f"Task failed: {sender.name} [{task_id}] args={args} - Error: {exception}")


if __name__ == "__main__":
    celery_app.start()
