# =============================================================================
# core/models/file.py - File / Folder Schemas
# =============================================================================
# These models define the API contract for file operations:
# - FileType: folder, file or image (an image is a file with an image subtype)
# - FileNode: a stored file or folder record
# - FileCreate: Input for POST /files
# - FileResponse: Output when returning a node to clients
#
# Nodes form a tree per user:
# - parent_id = None: the node sits at the root (the root is not a record)
# - parent_id = <id>: the node lives inside that folder
#
# A file/image node always has a storage_ref; a folder never does.
# =============================================================================

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FileType(str, Enum):
    """
    Kind of a node.

    FILE and IMAGE both carry bytes; IMAGE additionally gets thumbnails
    generated in the background after upload.
    """
    FOLDER = "folder"
    FILE = "file"
    IMAGE = "image"

    @property
    def is_folder(self) -> bool:
        return self is FileType.FOLDER


class FileNode(BaseModel):
    """
    A file or folder as persisted in the `files` table.

    Only `is_public` ever changes after creation.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    owner_id: str
    name: str
    type: FileType
    parent_id: str | None = None
    is_public: bool = False
    storage_ref: str | None = None

    @model_validator(mode="after")
    def _check_storage_ref(self) -> "FileNode":
        if self.type.is_folder and self.storage_ref is not None:
            raise ValueError("a folder never has a storage_ref")
        if not self.type.is_folder and not self.storage_ref:
            raise ValueError(f"a {self.type.value} always has a storage_ref")
        return self

    @property
    def is_folder(self) -> bool:
        return self.type.is_folder

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "FileNode":
        """Build a FileNode from a `files` table row."""
        parent_id = row.get("parent_id")
        return cls(
            id=str(row["id"]),
            owner_id=str(row["user_id"]),
            name=row["name"],
            type=FileType(row["type"]),
            parent_id=str(parent_id) if parent_id else None,
            is_public=bool(row.get("is_public", False)),
            storage_ref=row.get("local_path"),
        )


class FileCreate(BaseModel):
    """
    Schema for POST /files.

    Every field is optional here: required fields are checked by
    FileService so each omission produces its own 400 message
    ("Missing name", "Missing type", "Missing data").

    Example:
        {
            "name": "child.txt",
            "type": "file",
            "data": "aGk=",
            "parentId": "5f1e8896c7ba06511e683b25",
            "isPublic": false
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = Field(default=None, description="Display name")
    type: str | None = Field(default=None, description="folder, file or image")
    data: str | None = Field(
        default=None,
        description="Base64 content (required unless type is folder)"
    )
    parent_id: str | None = Field(
        default=None,
        alias="parentId",
        description="Id of the containing folder (omit, null or 0 for root)"
    )
    is_public: bool | None = Field(
        default=False,
        alias="isPublic",
        description="Whether the content is readable without a token (null means false)"
    )

    @field_validator("parent_id", mode="before")
    @classmethod
    def _stringify_parent_id(cls, value: Any) -> Any:
        # Older clients send the root as the number 0
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class FileResponse(BaseModel):
    """
    Schema for returning a node to clients.

    Returned by POST /files, GET /files, GET /files/{id},
    PUT /files/{id}/publish and PUT /files/{id}/unpublish.
    The storage ref is never exposed.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    user_id: str = Field(..., alias="userId")
    name: str
    type: FileType
    is_public: bool = Field(..., alias="isPublic")
    parent_id: str | None = Field(default=None, alias="parentId")

    @classmethod
    def from_node(cls, node: FileNode) -> "FileResponse":
        return cls(
            id=node.id,
            user_id=node.owner_id,
            name=node.name,
            type=node.type,
            is_public=node.is_public,
            parent_id=node.parent_id,
        )
