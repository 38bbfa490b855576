# =============================================================================
# app/routers/files.py - File Endpoints
# =============================================================================
# POST /files                  upload a file or create a folder
# GET  /files                  list own nodes under a parent (paginated)
# GET  /files/{id}             own node metadata
# PUT  /files/{id}/publish     make content public
# PUT  /files/{id}/unpublish   make content private
# GET  /files/{id}/data        content (public, or own with X-Token)
#
# Every endpoint except /data requires an X-Token.
# =============================================================================

import logging
import mimetypes
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status

from app.auth import get_current_session, get_current_session_optional
from app.dependencies import ServicesDep
from core.models.file import FileCreate, FileResponse
from core.models.session import AuthSession

logger = logging.getLogger(__name__)

router = APIRouter()

DEFAULT_MEDIA_TYPE = "application/octet-stream"


@router.post("", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
def upload_file(
    request: FileCreate,
    services: ServicesDep,
    session: AuthSession = Depends(get_current_session),
) -> FileResponse:
    """
    Upload a file or create a folder.

    Body: name, type (folder | file | image), data (base64, not for
    folders), parentId (optional folder id), isPublic (default false).

    Images get 500/250/100 pixel thumbnails generated in the background.

    Raises:
        400: Missing/invalid field, or parent missing / not a folder
        401: If not authenticated
    """
    node = services.files.upload(session, request)
    return FileResponse.from_node(node)


@router.get("", response_model=list[FileResponse])
def list_files(
    services: ServicesDep,
    session: AuthSession = Depends(get_current_session),
    parent_id: Annotated[Optional[str], Query(alias="parentId")] = None,
    page: Annotated[Optional[str], Query(description="Page index, 20 items per page")] = None,
) -> list[FileResponse]:
    """
    List the caller's nodes directly under parentId.

    The root is selected by omitting parentId or by sending parentId=0,
    the value older clients use for it. Any other id that isn't one of the
    caller's folders yields an empty list.

    Missing, negative or non-numeric page means page 0. A page past the
    end returns an empty list.
    """
    nodes = services.files.list(session, parent_id=parent_id, page=page)
    return [FileResponse.from_node(node) for node in nodes]


@router.get("/{file_id}", response_model=FileResponse)
def get_file(
    file_id: Annotated[str, Path(description="File or folder id")],
    services: ServicesDep,
    session: AuthSession = Depends(get_current_session),
) -> FileResponse:
    """
    Get one of the caller's nodes.

    Raises:
        401: If not authenticated
        404: No such node, or it belongs to someone else
    """
    return FileResponse.from_node(services.files.get(session, file_id))


@router.put("/{file_id}/publish", response_model=FileResponse)
def publish_file(
    file_id: Annotated[str, Path(description="File or folder id")],
    services: ServicesDep,
    session: AuthSession = Depends(get_current_session),
) -> FileResponse:
    """Set isPublic=true on one of the caller's nodes."""
    return FileResponse.from_node(services.files.set_public(session, file_id, True))


@router.put("/{file_id}/unpublish", response_model=FileResponse)
def unpublish_file(
    file_id: Annotated[str, Path(description="File or folder id")],
    services: ServicesDep,
    session: AuthSession = Depends(get_current_session),
) -> FileResponse:
    """Set isPublic=false on one of the caller's nodes."""
    return FileResponse.from_node(services.files.set_public(session, file_id, False))


@router.get("/{file_id}/data")
def get_file_data(
    file_id: Annotated[str, Path(description="File id")],
    services: ServicesDep,
    session: Optional[AuthSession] = Depends(get_current_session_optional),
    size: Annotated[Optional[str], Query(description="Thumbnail width: 500, 250 or 100")] = None,
) -> Response:
    """
    Get a file's content.

    Public files need no token. Private files are only served to their
    owner; to anyone else they look missing.

    Raises:
        400: The node is a folder, or the size is not generated
        404: No such node, not visible to the caller, or blob missing
    """
    node, content = services.files.read_content(session, file_id, size)
    media_type, _ = mimetypes.guess_type(node.name)
    return Response(content=content, media_type=media_type or DEFAULT_MEDIA_TYPE)
