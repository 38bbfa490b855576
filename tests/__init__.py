# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Files Manager API:
# - test_models.py: Pydantic model validation
# - test_auth_service.py: Sessions, registration, password hashing
# - test_access_control.py: Ownership and visibility rules
# - test_file_service.py: Upload / retrieval orchestration
# - test_jobs.py: Storage, thumbnails, job bodies, Celery submitter
# - test_clients.py: Redis / Supabase adapters and settings
# - test_api.py: HTTP endpoints through TestClient
#
# Run tests with: poetry run pytest
# =============================================================================
