# =============================================================================
# tests/test_file_service.py - Upload/Retrieval Orchestrator Tests
# =============================================================================
# This module contains tests for:
# - Upload validation and parent checks
# - Metadata writes and thumbnail job submission
# - Listing and pagination
# - Publish / unpublish
# - Content reads (visibility, folders, sizes, missing blobs)
# =============================================================================

import base64
from pathlib import Path

import pytest

from app.exceptions import (
    FileTooLargeError,
    FolderDataError,
    ForbiddenError,
    InvalidDataError,
    InvalidFileTypeError,
    InvalidSizeError,
    IsFolderError,
    MissingFieldError,
    NotFoundError,
    ParentNotFolderError,
    ParentNotFoundError,
    StorageReadError,
)
from core.models.file import FileCreate, FileType
from core.services.file_service import PAGE_SIZE, FileService, normalize_page


def b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


def make_folder(file_service, session, name="docs", parent_id=None):
    return file_service.upload(session, FileCreate(name=name, type="folder", parent_id=parent_id))


def make_file(file_service, session, name="a.txt", content="hi", **kwargs):
    return file_service.upload(
        session, FileCreate(name=name, type=kwargs.pop("type", "file"), data=b64(content), **kwargs)
    )


# =============================================================================
# normalize_page
# =============================================================================

class TestNormalizePage:
    """Test page index normalization."""

    @pytest.mark.parametrize("raw, expected", [
        (None, 0),
        ("0", 0),
        ("3", 3),
        (2, 2),
        ("-1", 0),
        (-5, 0),
        ("abc", 0),
        ("", 0),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_page(raw) == expected


# =============================================================================
# Upload
# =============================================================================

class TestUploadValidation:
    """Test field validation before any write."""

    def test_missing_name(self, file_service, alice_session, file_store):
        with pytest.raises(MissingFieldError) as exc_info:
            file_service.upload(alice_session, FileCreate(type="file", data=b64("x")))
        assert exc_info.value.message == "Missing name"
        assert file_store.count() == 0

    def test_missing_type(self, file_service, alice_session):
        with pytest.raises(MissingFieldError) as exc_info:
            file_service.upload(alice_session, FileCreate(name="a", data=b64("x")))
        assert exc_info.value.message == "Missing type"

    def test_unknown_type(self, file_service, alice_session):
        with pytest.raises(InvalidFileTypeError) as exc_info:
            file_service.upload(alice_session, FileCreate(name="a", type="video", data=b64("x")))
        assert exc_info.value.message == "Missing type"

    @pytest.mark.parametrize("file_type", ["file", "image"])
    def test_missing_data(self, file_service, alice_session, file_type):
        with pytest.raises(MissingFieldError) as exc_info:
            file_service.upload(alice_session, FileCreate(name="a", type=file_type))
        assert exc_info.value.message == "Missing data"

    def test_folder_with_data(self, file_service, alice_session, file_store):
        with pytest.raises(FolderDataError):
            file_service.upload(alice_session, FileCreate(name="d", type="folder", data=b64("x")))
        assert file_store.count() == 0

    def test_invalid_base64(self, file_service, alice_session, file_store):
        with pytest.raises(InvalidDataError):
            file_service.upload(alice_session, FileCreate(name="a", type="file", data="%%%"))
        assert file_store.count() == 0

    def test_line_wrapped_base64(self, file_service, alice_session):
        wrapped = base64.encodebytes(b"x" * 100).decode()
        assert "\n" in wrapped

        node = file_service.upload(alice_session, FileCreate(name="a.txt", type="file", data=wrapped))

        assert Path(node.storage_ref).read_bytes() == b"x" * 100

    def test_whitespace_does_not_hide_bad_bytes(self, file_service, alice_session):
        with pytest.raises(InvalidDataError):
            file_service.upload(alice_session, FileCreate(name="a", type="file", data="aGk=\n%%%%"))

    def test_null_is_public_means_private(self, file_service, alice_session):
        node = file_service.upload(
            alice_session, FileCreate(name="a", type="file", data=b64("x"), is_public=None)
        )
        assert node.is_public is False

    def test_too_large(self, file_store, storage, alice_session):
        service = FileService(file_store, storage, max_upload_bytes=3)
        with pytest.raises(FileTooLargeError):
            make_file(service, alice_session, content="four")


class TestUploadParent:
    """Test parent checks."""

    def test_no_parent_is_root(self, file_service, alice_session):
        node = make_file(file_service, alice_session)
        assert node.parent_id is None

    def test_parent_folder(self, file_service, alice_session):
        folder = make_folder(file_service, alice_session)
        node = make_file(file_service, alice_session, parent_id=folder.id)
        assert node.parent_id == folder.id

    def test_nested_folders(self, file_service, alice_session):
        outer = make_folder(file_service, alice_session, "outer")
        inner = make_folder(file_service, alice_session, "inner", parent_id=outer.id)
        assert inner.parent_id == outer.id

    @pytest.mark.parametrize("root_alias", ["0", ""])
    def test_root_alias_is_root(self, file_service, alice_session, root_alias):
        node = make_file(file_service, alice_session, parent_id=root_alias)
        assert node.parent_id is None

    def test_parent_not_found(self, file_service, alice_session, file_store, storage):
        with pytest.raises(ParentNotFoundError):
            make_file(file_service, alice_session, parent_id="does-not-exist")
        # Rejected before anything is written
        assert file_store.count() == 0
        assert not storage.root.exists()

    def test_parent_not_folder(self, file_service, alice_session, file_store):
        parent = make_file(file_service, alice_session, "p.txt")
        with pytest.raises(ParentNotFolderError):
            make_file(file_service, alice_session, parent_id=parent.id)
        assert file_store.count() == 1

    def test_parent_of_other_user(self, file_service, alice_session, bob_session):
        folder = make_folder(file_service, alice_session)
        with pytest.raises(ParentNotFoundError):
            make_file(file_service, bob_session, parent_id=folder.id)


class TestUploadWrites:
    """Test what a successful upload persists."""

    def test_folder_record(self, file_service, alice_session, alice):
        folder = make_folder(file_service, alice_session)

        assert folder.type is FileType.FOLDER
        assert folder.owner_id == alice.id
        assert folder.storage_ref is None
        assert folder.is_public is False

    def test_file_bytes_written(self, file_service, alice_session):
        node = make_file(file_service, alice_session, content="Hello Webstack!\n")

        assert node.storage_ref is not None
        assert Path(node.storage_ref).read_bytes() == b"Hello Webstack!\n"

    def test_is_public_kept(self, file_service, alice_session):
        node = make_file(file_service, alice_session, is_public=True)
        assert node.is_public is True

    def test_image_submits_thumbnail_job(self, file_service, alice_session, alice, jobs):
        node = make_file(file_service, alice_session, "pic.png", type="image")
        assert jobs.thumbnail_jobs == [(node.id, alice.id)]

    def test_plain_file_submits_nothing(self, file_service, alice_session, jobs):
        make_file(file_service, alice_session)
        make_folder(file_service, alice_session)
        assert jobs.thumbnail_jobs == []

    def test_failed_submit_keeps_upload(self, file_service, alice_session, jobs, file_store):
        jobs.fail = True
        node = make_file(file_service, alice_session, "pic.png", type="image")
        assert file_store.get(node.id) == node


# =============================================================================
# Metadata
# =============================================================================

class TestGet:
    """Test owner-only show."""

    def test_owner(self, file_service, alice_session):
        node = make_file(file_service, alice_session)
        assert file_service.get(alice_session, node.id) == node

    def test_other_user(self, file_service, alice_session, bob_session):
        node = make_file(file_service, alice_session, is_public=True)
        with pytest.raises(ForbiddenError):
            file_service.get(bob_session, node.id)

    def test_missing(self, file_service, alice_session):
        with pytest.raises(NotFoundError):
            file_service.get(alice_session, "nope")


class TestList:
    """Test listing and pagination."""

    def test_lists_children_of_parent(self, file_service, alice_session):
        folder = make_folder(file_service, alice_session)
        child = make_file(file_service, alice_session, "child.txt", parent_id=folder.id)
        make_file(file_service, alice_session, "root.txt")

        nodes = file_service.list(alice_session, parent_id=folder.id)

        assert [n.id for n in nodes] == [child.id]

    def test_root_listing(self, file_service, alice_session):
        folder = make_folder(file_service, alice_session)
        make_file(file_service, alice_session, "child.txt", parent_id=folder.id)

        nodes = file_service.list(alice_session)

        assert [n.id for n in nodes] == [folder.id]

    def test_zero_parent_lists_root(self, file_service, alice_session):
        folder = make_folder(file_service, alice_session)
        make_file(file_service, alice_session, "child.txt", parent_id=folder.id)

        nodes = file_service.list(alice_session, parent_id="0")

        assert [n.id for n in nodes] == [folder.id]

    def test_only_own_nodes(self, file_service, alice_session, bob_session):
        make_file(file_service, alice_session, is_public=True)
        assert file_service.list(bob_session) == []

    def test_pagination(self, file_service, alice_session):
        for i in range(PAGE_SIZE + 5):
            make_folder(file_service, alice_session, f"d{i}")

        first = file_service.list(alice_session, page=0)
        second = file_service.list(alice_session, page="1")
        beyond = file_service.list(alice_session, page=7)

        assert len(first) == PAGE_SIZE
        assert len(second) == 5
        assert beyond == []

    @pytest.mark.parametrize("page", [None, -1, "-1", "junk"])
    def test_bad_page_is_first_page(self, file_service, alice_session, page):
        for i in range(PAGE_SIZE + 1):
            make_folder(file_service, alice_session, f"d{i}")

        assert file_service.list(alice_session, page=page) == file_service.list(alice_session, page=0)


class TestSetPublic:
    """Test publish / unpublish."""

    def test_publish_and_unpublish(self, file_service, alice_session):
        node = make_file(file_service, alice_session)

        published = file_service.set_public(alice_session, node.id, True)
        assert published.is_public is True

        unpublished = file_service.set_public(alice_session, node.id, False)
        assert unpublished.is_public is False

    def test_other_user_cannot_publish(self, file_service, file_store, alice_session, bob_session):
        node = make_file(file_service, alice_session)

        with pytest.raises(ForbiddenError):
            file_service.set_public(bob_session, node.id, True)
        assert file_store.get(node.id).is_public is False
        assert file_store.set_public_calls == 0

    def test_missing(self, file_service, alice_session):
        with pytest.raises(NotFoundError):
            file_service.set_public(alice_session, "nope", True)


# =============================================================================
# Content
# =============================================================================

class TestReadContent:
    """Test content retrieval."""

    def test_anonymous_public(self, file_service, alice_session):
        node = make_file(file_service, alice_session, is_public=True)
        _, content = file_service.read_content(None, node.id)
        assert content == b"hi"

    def test_anonymous_private(self, file_service, alice_session):
        node = make_file(file_service, alice_session)
        with pytest.raises(NotFoundError):
            file_service.read_content(None, node.id)

    def test_owner_private(self, file_service, alice_session):
        node = make_file(file_service, alice_session)
        _, content = file_service.read_content(alice_session, node.id)
        assert content == b"hi"

    def test_other_user_private(self, file_service, alice_session, bob_session):
        node = make_file(file_service, alice_session)
        with pytest.raises(NotFoundError):
            file_service.read_content(bob_session, node.id)

    def test_missing_node(self, file_service):
        with pytest.raises(NotFoundError):
            file_service.read_content(None, "nope")

    def test_folder(self, file_service, alice_session):
        folder = file_service.upload(
            alice_session, FileCreate(name="d", type="folder", is_public=True)
        )
        with pytest.raises(IsFolderError):
            file_service.read_content(alice_session, folder.id)

    def test_private_folder_hidden_from_others(self, file_service, alice_session, bob_session):
        folder = make_folder(file_service, alice_session)
        # Visibility is checked before the folder check
        with pytest.raises(NotFoundError):
            file_service.read_content(bob_session, folder.id)

    def test_missing_blob(self, file_service, alice_session):
        node = make_file(file_service, alice_session)
        Path(node.storage_ref).unlink()

        with pytest.raises(StorageReadError) as exc_info:
            file_service.read_content(alice_session, node.id)
        assert exc_info.value.status_code == 404

    def test_thumbnail_size(self, file_service, alice_session):
        node = make_file(file_service, alice_session, "pic.png", type="image")
        Path(f"{node.storage_ref}_250").write_bytes(b"small")

        _, content = file_service.read_content(alice_session, node.id, "250")
        assert content == b"small"

    def test_thumbnail_not_generated_yet(self, file_service, alice_session):
        node = make_file(file_service, alice_session, "pic.png", type="image")
        with pytest.raises(StorageReadError):
            file_service.read_content(alice_session, node.id, 100)

    @pytest.mark.parametrize("size", ["300", "big", "0"])
    def test_invalid_size(self, file_service, alice_session, size):
        node = make_file(file_service, alice_session, "pic.png", type="image")
        with pytest.raises(InvalidSizeError):
            file_service.read_content(alice_session, node.id, size)
