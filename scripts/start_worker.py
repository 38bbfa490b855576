#!/usr/bin/env python3
# =============================================================================
# scripts/start_worker.py - Celery Worker Entry Point
# =============================================================================
# Starts a Celery worker consuming the thumbnail and user queues.
#
# Usage:
#   # Start worker (development)
#   poetry run start-worker
#
#   # Or use Celery CLI directly
#   poetry run celery -A workers.celery_app worker --loglevel=info -Q fileQueue,userQueue
#
# Prerequisites:
#   - Redis must be running
#   - Environment variables must be set (.env file)
# =============================================================================

from workers.celery_app import celery_app


def main():
    """Start the Celery worker."""
    print("=" * 60)
    print("Files Manager Celery Worker")
    print("=" * 60)
    print()
    print("Starting worker...")
    print("Press Ctrl+C to stop")
    print()

    celery_app.worker_main([
        "worker",
        "--loglevel=info",
        "--queues=fileQueue,userQueue",
        "--concurrency=2",  # 2 worker processes
    ])


if __name__ == "__main__":
    main()
