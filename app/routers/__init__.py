# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: GET /status and GET /stats
# - users.py: Registration and current user endpoints
# - files.py: Upload, listing, visibility and content endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import users
from . import files

__all__ = [
    "health",
    "users",
    "files",
]
