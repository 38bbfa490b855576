# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a thin wrapper around the Supabase client used as the
# metadata store for users and files.
#
# The wrapper is constructed explicitly by the process entry point (API
# lifespan or Celery worker) and handed to the stores that need it:
#
#   supabase = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
#   supabase.connect()
#   users = SupabaseUserStore(supabase)
#   ...
#   supabase.close()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Provides actionable error messages:
    "Errors should tell HOW to fix, not just WHAT failed."
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Connection handle for the Supabase metadata store.

    Uses the service_role key which bypasses Row Level Security (RLS);
    ownership checks are done by the services, not by the database.

    Example:
        supabase = SupabaseClient(url, key)
        supabase.connect()
        rows = supabase.table("files").select("*").limit(1).execute().data
    """

    def __init__(self, url: str, key: str):
        self._url = url
        self._key = key
        self._client: Client | None = None

    def connect(self) -> Client:
        """
        Create the underlying client (idempotent).

        Raises:
            SupabaseClientError: If client creation fails
        """
        if self._client is None:
            try:
                self._client = create_client(self._url, self._key)
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return self._client

    def close(self) -> None:
        """Drop the client; a later call to connect() creates a fresh one."""
        if self._client is not None:
            self._client = None
            logger.info("Supabase client closed")

    @property
    def client(self) -> Client:
        return self.connect()

    def table(self, name: str):
        """Shortcut for `client.table(name)`."""
        return self.client.table(name)

    def is_alive(self) -> bool:
        """
        Check that the metadata store answers a trivial query.

        Returns:
            True if a one-row select on `users` succeeds
        """
        try:
            self.table("users").select("id").limit(1).execute()
            return True
        except Exception as e:
            logger.warning(f"Supabase liveness check failed: {e}")
            return False

    def count(self, table: str) -> int:
        """
        Count all rows of a table.

        Raises:
            SupabaseClientError: If query fails
        """
        try:
            response = (
                self.table(table)
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
            return response.count or 0
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                suggestion=f"Check that the {table} table exists and is accessible",
                details={"table": table},
            )
