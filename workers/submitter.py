# =============================================================================
# workers/submitter.py - Celery Job Submitter
# =============================================================================
# JobSubmitter implementation used by the API process. Submission only puts
# a message on the broker; nothing waits for the task to run.
# =============================================================================

import logging

from workers.tasks import generate_thumbnails, send_welcome_email

logger = logging.getLogger(__name__)


class CeleryJobSubmitter:
    """Enqueue background jobs on the Celery broker."""

    def submit_thumbnails(self, file_id: str, user_id: str) -> None:
        result = generate_thumbnails.delay(file_id, user_id)
        logger.debug(f"Submitted thumbnail job {result.id} for file {file_id}")

    def submit_welcome(self, user_id: str) -> None:
        result = send_welcome_email.delay(user_id)
        logger.debug(f"Submitted welcome job {result.id} for user {user_id}")
