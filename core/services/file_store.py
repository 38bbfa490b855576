# =============================================================================
# core/services/file_store.py - File Metadata Store
# =============================================================================
# Persists file/folder nodes. Records are created once and afterwards only
# their is_public flag changes (a single-row update, atomic per record).
# =============================================================================

import logging
from typing import Any, Protocol

from core.models.file import FileNode, FileType
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import parse_uuid

logger = logging.getLogger(__name__)

FILES_TABLE = "files"


class FileStore(Protocol):
    """Persistence contract for file nodes."""

    def get(self, file_id: str) -> FileNode | None:
        ...

    def create(
        self,
        owner_id: str,
        name: str,
        file_type: FileType,
        parent_id: str | None,
        is_public: bool,
        storage_ref: str | None,
    ) -> FileNode:
        ...

    def list_children(
        self,
        owner_id: str,
        parent_id: str | None,
        offset: int,
        limit: int,
    ) -> list[FileNode]:
        ...

    def set_public(self, file_id: str, is_public: bool) -> FileNode | None:
        ...

    def count(self) -> int:
        ...


class SupabaseFileStore:
    """
    FileStore backed by the Supabase `files` table.

    Columns: id, user_id, name, type, parent_id (null = root), is_public,
    local_path (null for folders), created_at.
    """

    def __init__(self, supabase: SupabaseClient):
        self._supabase = supabase

    def get(self, file_id: str) -> FileNode | None:
        file_id = parse_uuid(file_id)
        if file_id is None:
            return None

        try:
            response = (
                self._supabase.table(FILES_TABLE)
                .select("*")
                .eq("id", file_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch file: {e}",
                code="FETCH_FILE_FAILED",
                details={"file_id": file_id},
            )
        rows = response.data or []
        return FileNode.from_row(rows[0]) if rows else None

    def create(
        self,
        owner_id: str,
        name: str,
        file_type: FileType,
        parent_id: str | None,
        is_public: bool,
        storage_ref: str | None,
    ) -> FileNode:
        data: dict[str, Any] = {
            "user_id": owner_id,
            "name": name,
            "type": file_type.value,
            "parent_id": parent_id,
            "is_public": is_public,
            "local_path": storage_ref,
        }

        try:
            response = self._supabase.table(FILES_TABLE).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create file: {e}",
                code="CREATE_FILE_FAILED",
                suggestion="Check that the files table exists and is accessible",
            )
        if not response.data:
            raise SupabaseClientError("Insert returned no data", code="CREATE_FILE_FAILED")
        return FileNode.from_row(response.data[0])

    def list_children(
        self,
        owner_id: str,
        parent_id: str | None,
        offset: int,
        limit: int,
    ) -> list[FileNode]:
        query = self._supabase.table(FILES_TABLE).select("*").eq("user_id", owner_id)

        if parent_id is None:
            query = query.is_("parent_id", "null")
        else:
            parent_id = parse_uuid(parent_id)
            if parent_id is None:
                return []
            query = query.eq("parent_id", parent_id)

        try:
            response = (
                query.order("created_at")
                .range(offset, offset + limit - 1)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list files: {e}",
                code="LIST_FILES_FAILED",
                details={"parent_id": parent_id, "offset": offset},
            )
        return [FileNode.from_row(row) for row in response.data or []]

    def set_public(self, file_id: str, is_public: bool) -> FileNode | None:
        file_id = parse_uuid(file_id)
        if file_id is None:
            return None

        try:
            response = (
                self._supabase.table(FILES_TABLE)
                .update({"is_public": is_public})
                .eq("id", file_id)
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update file: {e}",
                code="UPDATE_FILE_FAILED",
                details={"file_id": file_id},
            )
        rows = response.data or []
        return FileNode.from_row(rows[0]) if rows else None

    def count(self) -> int:
        return self._supabase.count(FILES_TABLE)
