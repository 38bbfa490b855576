# =============================================================================
# core/services/storage_service.py - Local Disk Storage Operations
# =============================================================================
# Handles writing and reading file bytes under FOLDER_PATH.
#
# Each upload is written to <root>/<uuid4> and that path is returned as the
# opaque storage ref kept on the file record. Thumbnails live next to the
# original as <storage_ref>_<width>.
# =============================================================================

import logging
import uuid
from pathlib import Path

from app.exceptions import StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class LocalStorageService:
    """
    Service for blob storage on the local filesystem.

    Handles saving uploads and reading them (or a thumbnail variant) back.
    """

    def __init__(self, root: str | Path):
        self.root = Path(root)

    @staticmethod
    def variant_ref(storage_ref: str, size: int | None = None) -> str:
        """Storage ref of a size variant (the original when size is None)."""
        return storage_ref if size is None else f"{storage_ref}_{size}"

    def save(self, content: bytes) -> str:
        """
        Write new file content.

        Args:
            content: Raw bytes

        Returns:
            Storage ref of the written blob

        Raises:
            StorageWriteError: If the write fails
        """
        path = self.root / str(uuid.uuid4())

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Storage write failed: {e}")
            raise StorageWriteError(str(e))

        logger.info(f"Wrote {len(content)} bytes to storage: {path}")
        return str(path)

    def write_variant(self, storage_ref: str, size: int, content: bytes) -> str:
        """
        Write a size variant (thumbnail) of an existing blob.

        Raises:
            StorageWriteError: If the write fails
        """
        path = Path(self.variant_ref(storage_ref, size))

        try:
            path.write_bytes(content)
        except OSError as e:
            logger.error(f"Storage write failed: {e}")
            raise StorageWriteError(str(e))

        return str(path)

    def read(self, storage_ref: str, size: int | None = None) -> bytes:
        """
        Read a blob, or one of its size variants.

        Args:
            storage_ref: Ref returned by save()
            size: Thumbnail width, or None for the original

        Returns:
            File content as bytes

        Raises:
            StorageReadError: If the blob is missing or unreadable
        """
        ref = self.variant_ref(storage_ref, size)

        try:
            return Path(ref).read_bytes()
        except OSError as e:
            logger.error(f"Storage read failed for {ref}: {e}")
            raise StorageReadError(ref)
