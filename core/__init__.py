# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the file-storage domain logic:
# - models/: Pydantic schemas for users, sessions and files
# - services/: credential store, auth sessions, access control, file
#   metadata store, disk storage, thumbnails and the upload/retrieval
#   orchestrator
#
# Services receive their collaborators through their constructors and never
# read settings or import Celery.
# =============================================================================
