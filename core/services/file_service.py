# =============================================================================
# core/services/file_service.py - Upload/Retrieval Orchestrator
# =============================================================================
# Composes access control, metadata persistence, blob storage and background
# jobs for every file endpoint. The caller resolves the session first;
# everything here assumes an authenticated (or, for content reads,
# optionally anonymous) caller.
#
# Nothing is rolled back: a stored file whose thumbnail job couldn't be
# submitted stays a valid record without thumbnails.
# =============================================================================

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING

from app.exceptions import (
    FileTooLargeError,
    FolderDataError,
    InvalidDataError,
    InvalidFileTypeError,
    InvalidSizeError,
    MissingFieldError,
    NotFoundError,
)
from core.models.file import FileCreate, FileNode, FileType
from core.models.session import AuthSession
from core.services.access_control import AccessControl
from core.services.file_store import FileStore
from core.services.storage_service import LocalStorageService

if TYPE_CHECKING:
    from core.services.jobs import JobSubmitter

logger = logging.getLogger(__name__)

# Fixed number of nodes per page of GET /files
PAGE_SIZE = 20

# parentId values that mean the root (0 is what older clients send)
ROOT_PARENT_IDS = ("", "0")


def normalize_page(page: str | int | None) -> int:
    """
    Turn a raw page query value into a page index.

    Missing, negative or non-numeric values all mean the first page.

    Example:
        normalize_page("3")   # 3
        normalize_page("-1")  # 0
        normalize_page(None)  # 0
    """
    if page is None:
        return 0
    try:
        index = int(page)
    except (TypeError, ValueError):
        return 0
    return max(index, 0)


def normalize_parent_id(parent_id: str | None) -> str | None:
    """Map the root aliases ("", "0") to None; other ids pass through."""
    if parent_id is None or parent_id.strip() in ROOT_PARENT_IDS:
        return None
    return parent_id


class FileService:
    """
    Service for file and folder operations.

    Holds no state of its own; every collaborator is injected.
    """

    def __init__(
        self,
        files: FileStore,
        storage: LocalStorageService,
        jobs: JobSubmitter | None = None,
        thumbnail_sizes: tuple[int, ...] | list[int] = (500, 250, 100),
        max_upload_bytes: int | None = None,
    ):
        self.files = files
        self.access = AccessControl(files)
        self._storage = storage
        self._jobs = jobs
        self._thumbnail_sizes = tuple(thumbnail_sizes)
        self._max_upload_bytes = max_upload_bytes

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse_type(value: str | None) -> FileType:
        if not value:
            raise MissingFieldError("type")
        try:
            return FileType(value)
        except ValueError:
            raise InvalidFileTypeError(value)

    def _decode(self, data: str) -> bytes:
        try:
            # Line-wrapped (MIME) base64 is accepted; any other stray byte is not
            content = base64.b64decode("".join(data.split()), validate=True)
        except (binascii.Error, ValueError):
            raise InvalidDataError()

        if self._max_upload_bytes is not None and len(content) > self._max_upload_bytes:
            raise FileTooLargeError(len(content), self._max_upload_bytes)
        return content

    def upload(self, session: AuthSession, request: FileCreate) -> FileNode:
        """
        Create a folder, or store a file and record it.

        Steps:
        1. Validate name, type and data (a folder never carries data)
        2. Check the parent, if any, is one of the caller's folders
        3. Write bytes (files only) and the metadata record
        4. Submit a thumbnail job for images

        Raises:
            MissingFieldError, InvalidFileTypeError, InvalidDataError,
            FolderDataError, FileTooLargeError, ParentNotFoundError,
            ParentNotFolderError, StorageWriteError
        """
        if not request.name:
            raise MissingFieldError("name")
        file_type = self._parse_type(request.type)

        if file_type.is_folder:
            if request.data:
                raise FolderDataError()
        elif not request.data:
            raise MissingFieldError("data")

        parent_id = normalize_parent_id(request.parent_id)
        self.access.authorize_parent(parent_id, owner_id=session.user_id)

        storage_ref = None
        if not file_type.is_folder:
            storage_ref = self._storage.save(self._decode(request.data))

        node = self.files.create(
            owner_id=session.user_id,
            name=request.name,
            file_type=file_type,
            parent_id=parent_id,
            is_public=bool(request.is_public),
            storage_ref=storage_ref,
        )
        logger.info(f"Created {file_type.value} {node.id} for user {session.user_id}")

        if file_type is FileType.IMAGE and self._jobs is not None:
            try:
                self._jobs.submit_thumbnails(node.id, session.user_id)
            except Exception as e:
                logger.warning(f"Failed to submit thumbnail job for file {node.id}: {e}")

        return node

    # -------------------------------------------------------------------------
    # Metadata (owner only)
    # -------------------------------------------------------------------------

    def get(self, session: AuthSession, file_id: str) -> FileNode:
        """
        Fetch one of the caller's nodes.

        Raises:
            NotFoundError: No such node
            ForbiddenError: Node belongs to someone else (rendered as 404)
        """
        node = self.files.get(file_id)
        if node is None:
            raise NotFoundError(file_id)
        self.access.authorize_owner_access(session, node)
        return node

    def list(
        self,
        session: AuthSession,
        parent_id: str | None = None,
        page: str | int | None = None,
    ) -> list[FileNode]:
        """
        List the caller's nodes directly under `parent_id` (root if None,
        "" or "0").

        A page past the end is an empty list, not an error.
        """
        index = normalize_page(page)
        return self.files.list_children(
            owner_id=session.user_id,
            parent_id=normalize_parent_id(parent_id),
            offset=index * PAGE_SIZE,
            limit=PAGE_SIZE,
        )

    def set_public(self, session: AuthSession, file_id: str, is_public: bool) -> FileNode:
        """
        Publish or unpublish one of the caller's nodes.

        Raises:
            NotFoundError, ForbiddenError
        """
        self.get(session, file_id)

        node = self.files.set_public(file_id, is_public)
        if node is None:
            raise NotFoundError(file_id)

        logger.info(f"Set is_public={is_public} on file {file_id}")
        return node

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    def _parse_size(self, size: str | int | None) -> int | None:
        if size is None or size == "":
            return None
        try:
            value = int(size)
        except (TypeError, ValueError):
            raise InvalidSizeError(size, list(self._thumbnail_sizes))
        if value not in self._thumbnail_sizes:
            raise InvalidSizeError(size, list(self._thumbnail_sizes))
        return value

    def read_content(
        self,
        session: AuthSession | None,
        file_id: str,
        size: str | int | None = None,
    ) -> tuple[FileNode, bytes]:
        """
        Read a file's bytes (or one of its thumbnails).

        Args:
            session: Caller's session, None for anonymous requests
            file_id: Node id
            size: Thumbnail width, None for the original

        Returns:
            (node, content)

        Raises:
            NotFoundError: Missing node, or private and not the caller's
            IsFolderError: Node is a folder
            InvalidSizeError: Size that is never generated
            StorageReadError: Blob missing on disk
        """
        node = self.files.get(file_id)
        if node is None:
            raise NotFoundError(file_id)

        self.access.authorize_content_access(session, node)
        self.access.reject_folder_content(node)

        width = self._parse_size(size)
        return node, self._storage.read(node.storage_ref, width)
