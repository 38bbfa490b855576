# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains the clients for external collaborators:
# - supabase_client.py: Supabase connection handle (users + files metadata)
# - redis_client.py: Redis key-value wrapper (auth tokens)
# - utils.py: Shared utilities (UUID parsing, base error)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.redis_client import RedisClient
from lib.utils import ApplicationError, parse_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Redis
    "RedisClient",
    # Utils
    "ApplicationError",
    "parse_uuid",
]
