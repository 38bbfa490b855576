# =============================================================================
# core/services/access_control.py - Access Control Engine
# =============================================================================
# Pure decision logic gating every file operation. The only I/O is the
# parent lookup, delegated to the FileStore.
#
# Rules:
# - Metadata (show, list, publish, unpublish): owner only, is_public ignored.
# - Content: public nodes for anyone, private nodes for their owner only.
#   Refusals look exactly like a missing file.
# - Folders never have content.
# - A parent, when given, must be an existing folder. No parent means root,
#   which is not a record and always passes.
# =============================================================================

from app.exceptions import (
    ForbiddenError,
    IsFolderError,
    NotFoundError,
    ParentNotFolderError,
    ParentNotFoundError,
)
from core.models.file import FileNode
from core.models.session import AuthSession
from core.services.file_store import FileStore


class AccessControl:
    """Authorization checks for file and folder operations."""

    def __init__(self, files: FileStore):
        self._files = files

    def authorize_parent(
        self,
        parent_id: str | None,
        owner_id: str | None = None,
    ) -> FileNode | None:
        """
        Check that a new node may be created under `parent_id`.

        Args:
            parent_id: Requested parent, None for root
            owner_id: When given, a parent owned by anyone else counts
                as missing

        Returns:
            The parent folder, or None for root

        Raises:
            ParentNotFoundError: No node with that id
            ParentNotFolderError: The node is a file
        """
        if parent_id is None:
            return None

        parent = self._files.get(parent_id)
        if parent is None or (owner_id is not None and parent.owner_id != owner_id):
            raise ParentNotFoundError(parent_id)
        if not parent.is_folder:
            raise ParentNotFolderError(parent_id)
        return parent

    @staticmethod
    def authorize_owner_access(session: AuthSession, node: FileNode) -> None:
        """
        Raises:
            ForbiddenError: The session user doesn't own the node
        """
        if session.user_id != node.owner_id:
            raise ForbiddenError(node.id)

    @staticmethod
    def authorize_content_access(session: AuthSession | None, node: FileNode) -> None:
        """
        Raises:
            NotFoundError: Node is private and the caller isn't its owner
        """
        if node.is_public:
            return
        if session is not None and session.user_id == node.owner_id:
            return
        raise NotFoundError(node.id)

    @staticmethod
    def reject_folder_content(node: FileNode) -> None:
        """
        Raises:
            IsFolderError: Node is a folder
        """
        if node.is_folder:
            raise IsFolderError(node.id)
