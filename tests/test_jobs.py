# =============================================================================
# tests/test_jobs.py - Background Job Tests
# =============================================================================
# This module contains tests for:
# - Local blob storage and size variants
# - Thumbnail generation with Pillow
# - Thumbnail and welcome job bodies
# - Celery submitter (mocked .delay)
# =============================================================================

import io
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image, UnidentifiedImageError

from app.exceptions import StorageReadError
from core.models.file import FileType
from core.services.jobs import JobError, process_thumbnail_job, process_welcome_job
from core.services.thumbnail_service import ThumbnailService


def make_image(width: int = 800, height: int = 400, fmt: str = "PNG") -> bytes:
    output = io.BytesIO()
    Image.new("RGB", (width, height), color="red").save(output, format=fmt)
    return output.getvalue()


def image_size(content: bytes) -> tuple[int, int]:
    return Image.open(io.BytesIO(content)).size


# =============================================================================
# Storage
# =============================================================================

class TestLocalStorage:
    """Test LocalStorageService."""

    def test_save_creates_root_and_unique_refs(self, storage):
        first = storage.save(b"one")
        second = storage.save(b"two")

        assert first != second
        assert storage.root.is_dir()
        assert storage.read(first) == b"one"
        assert storage.read(second) == b"two"

    def test_variant_ref(self, storage):
        assert storage.variant_ref("/data/abc") == "/data/abc"
        assert storage.variant_ref("/data/abc", 250) == "/data/abc_250"

    def test_write_and_read_variant(self, storage):
        ref = storage.save(b"original")
        storage.write_variant(ref, 100, b"thumb")

        assert storage.read(ref, 100) == b"thumb"
        assert storage.read(ref) == b"original"

    def test_read_missing(self, storage):
        with pytest.raises(StorageReadError):
            storage.read(str(storage.root / "nope"))


# =============================================================================
# Thumbnails
# =============================================================================

class TestThumbnailService:
    """Test ThumbnailService.generate."""

    def test_default_widths(self):
        assert ThumbnailService().widths == (500, 250, 100)

    def test_keeps_aspect_ratio(self):
        thumb = ThumbnailService().generate(make_image(800, 400), 250)
        assert image_size(thumb) == (250, 125)

    def test_keeps_png_format(self):
        thumb = ThumbnailService().generate(make_image(fmt="PNG"), 100)
        assert Image.open(io.BytesIO(thumb)).format == "PNG"

    def test_keeps_jpeg_format(self):
        thumb = ThumbnailService().generate(make_image(fmt="JPEG"), 100)
        assert Image.open(io.BytesIO(thumb)).format == "JPEG"

    def test_upscales_small_images(self):
        thumb = ThumbnailService().generate(make_image(50, 20), 500)
        assert image_size(thumb) == (500, 200)

    def test_not_an_image(self):
        with pytest.raises(UnidentifiedImageError):
            ThumbnailService().generate(b"plain text", 100)


# =============================================================================
# Job Bodies
# =============================================================================

class TestThumbnailJob:
    """Test process_thumbnail_job."""

    @pytest.fixture
    def image_node(self, file_store, storage, alice):
        ref = storage.save(make_image(1000, 500))
        return file_store.create(alice.id, "pic.png", FileType.IMAGE, None, False, ref)

    def test_writes_every_width(self, image_node, file_store, storage, alice):
        written = process_thumbnail_job(
            image_node.id, alice.id, file_store, storage, ThumbnailService()
        )

        assert written == [500, 250, 100]
        assert image_size(storage.read(image_node.storage_ref, 500)) == (500, 250)
        assert image_size(storage.read(image_node.storage_ref, 250)) == (250, 125)
        assert image_size(storage.read(image_node.storage_ref, 100)) == (100, 50)

    def test_custom_widths(self, image_node, file_store, storage, alice):
        written = process_thumbnail_job(
            image_node.id, alice.id, file_store, storage, ThumbnailService((64,))
        )
        assert written == [64]

    def test_served_through_file_service(self, image_node, file_store, storage, alice, alice_session, file_service):
        process_thumbnail_job(image_node.id, alice.id, file_store, storage, ThumbnailService())

        _, content = file_service.read_content(alice_session, image_node.id, "100")
        assert image_size(content) == (100, 50)

    @pytest.mark.parametrize("file_id, user_id, message", [
        (None, "u", "Missing fileId"),
        ("f", None, "Missing userId"),
        ("f", "u", "File not found"),
    ])
    def test_bad_input(self, file_store, storage, file_id, user_id, message):
        with pytest.raises(JobError) as exc_info:
            process_thumbnail_job(file_id, user_id, file_store, storage, ThumbnailService())
        assert exc_info.value.message == message

    def test_wrong_owner(self, image_node, file_store, storage, bob):
        with pytest.raises(JobError) as exc_info:
            process_thumbnail_job(image_node.id, bob.id, file_store, storage, ThumbnailService())
        assert exc_info.value.message == "File not found"

    def test_missing_original(self, image_node, file_store, storage, alice):
        Path(image_node.storage_ref).unlink()
        with pytest.raises(StorageReadError):
            process_thumbnail_job(image_node.id, alice.id, file_store, storage, ThumbnailService())


class TestWelcomeJob:
    """Test process_welcome_job."""

    def test_greets_user(self, alice, user_store):
        assert process_welcome_job(alice.id, user_store) == "Welcome alice@x.com"

    def test_missing_user_id(self, user_store):
        with pytest.raises(JobError) as exc_info:
            process_welcome_job(None, user_store)
        assert exc_info.value.message == "Missing userId"

    def test_unknown_user(self, user_store):
        with pytest.raises(JobError) as exc_info:
            process_welcome_job("ghost", user_store)
        assert exc_info.value.message == "User not found"


# =============================================================================
# Celery Submitter
# =============================================================================

class TestCeleryJobSubmitter:
    """Test CeleryJobSubmitter with the task .delay mocked out."""

    def test_submit_thumbnails(self):
        from workers.submitter import CeleryJobSubmitter

        with patch("workers.submitter.generate_thumbnails") as task:
            task.delay.return_value = MagicMock(id="task-1")
            CeleryJobSubmitter().submit_thumbnails("file-1", "user-1")

        task.delay.assert_called_once_with("file-1", "user-1")

    def test_submit_welcome(self):
        from workers.submitter import CeleryJobSubmitter

        with patch("workers.submitter.send_welcome_email") as task:
            task.delay.return_value = MagicMock(id="task-2")
            CeleryJobSubmitter().submit_welcome("user-1")

        task.delay.assert_called_once_with("user-1")

    def test_task_routing(self):
        from workers.config import CeleryConfig

        assert CeleryConfig.task_routes["workers.tasks.generate_thumbnails"]["queue"] == "fileQueue"
        assert CeleryConfig.task_routes["workers.tasks.send_welcome_email"]["queue"] == "userQueue"
