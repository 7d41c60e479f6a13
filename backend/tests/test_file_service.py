"""
Inventory API: File Service Unit Tests
========================================

What:  Tests for FileService validation, storage, path resolution and URLs.
How:   Real files in a temporary directory; aiofiles is patched only to
       simulate disk failures.

Test Strategy:
    ✅ Allowed extensions (.jpeg, .jpg, .png, .gif), case-insensitive
    ✅ Rejected extensions and content types
    ✅ Size limits (empty, boundary, over)
    ✅ Generated names, collisions, write failures
    ✅ Upload pipeline leaves nothing on disk when rejected
    ✅ Path traversal rejected by resolve()
"""

import io
import re
from pathlib import Path
from unittest.mock import patch

import pytest
from starlette.datastructures import Headers, UploadFile

from app.exceptions import FileStorageError, ValidationError
from app.services.file_service import INVALID_TYPE_MESSAGE, FileService


def make_upload(content: bytes, filename: str, content_type: str, report_size: bool = True) -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        size=len(content) if report_size else None,
        headers=Headers({"content-type": content_type}),
    )


class TestFileValidation:
    """Tests for file validation logic in FileService."""

    @pytest.fixture(autouse=True)
    def _service(self, temp_storage):
        self.service = FileService(upload_dir=temp_storage, max_file_size=1024)

    # ── Extension Validation ──────────────────────────────────────────────

    @pytest.mark.parametrize("filename", ["a.jpg", "a.jpeg", "a.png", "a.gif"])
    def test_validate_extension_allowed(self, filename):
        assert self.service.validate_extension(filename) == Path(filename).suffix

    def test_validate_extension_uppercase(self):
        """Extension check should be case-insensitive and normalize to lowercase."""
        assert self.service.validate_extension("photo.JPG") == ".jpg"
        assert self.service.validate_extension("photo.Png") == ".png"

    @pytest.mark.parametrize("filename", ["document.pdf", "malware.exe", "noextension", "image.jpg.php"])
    def test_validate_extension_rejected(self, filename):
        with pytest.raises(ValidationError) as exc_info:
            self.service.validate_extension(filename)
        assert exc_info.value.message == INVALID_TYPE_MESSAGE
        assert exc_info.value.field == "foto_produk"

    # ── Content Type Validation ───────────────────────────────────────────

    def test_validate_content_type_ignores_parameters(self):
        assert self.service.validate_content_type("image/PNG; charset=binary") == "image/png"

    @pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "", None])
    def test_validate_content_type_rejected(self, content_type):
        with pytest.raises(ValidationError, match="Hanya file gambar"):
            self.service.validate_content_type(content_type)

    # ── Size Validation ───────────────────────────────────────────────────

    def test_validate_size_within_limit(self):
        self.service.validate_size(512)

    def test_validate_size_at_limit(self):
        """Files exactly at the limit should pass."""
        self.service.validate_size(1024)

    def test_validate_size_over_limit(self):
        with pytest.raises(ValidationError, match="melebihi batas maksimum"):
            self.service.validate_size(1025)

    def test_validate_size_empty_file(self):
        with pytest.raises(ValidationError, match="kosong"):
            self.service.validate_size(0)

    def test_validate_size_unknown_is_skipped(self):
        self.service.validate_size(None)


class TestFileStorage:
    """Tests for writing, resolving and deleting stored photos."""

    @pytest.fixture(autouse=True)
    def _service(self, temp_storage):
        self.storage = Path(temp_storage)
        self.service = FileService(upload_dir=temp_storage, max_file_size=1024, url_path="uploads/")

    def test_generate_filename_format(self):
        name = self.service.generate_filename(".png")
        assert re.fullmatch(r"produk-\d{13}-\d{1,9}\.png", name)

    @pytest.mark.asyncio
    async def test_store_file_writes_content(self, sample_image_bytes):
        stored = await self.service.store_file(sample_image_bytes, ".jpg")

        assert stored.path.parent == self.storage.resolve()
        assert stored.path.read_bytes() == sample_image_bytes
        assert stored.size == len(sample_image_bytes)

    @pytest.mark.asyncio
    async def test_store_file_never_overwrites(self, sample_image_bytes):
        """A name collision draws a new name instead of overwriting."""
        (self.storage / "produk-1-1.jpg").write_bytes(b"existing")

        with patch.object(
            self.service, "generate_filename", side_effect=["produk-1-1.jpg", "produk-1-2.jpg"]
        ):
            stored = await self.service.store_file(sample_image_bytes, ".jpg")

        assert stored.filename == "produk-1-2.jpg"
        assert (self.storage / "produk-1-1.jpg").read_bytes() == b"existing"

    @pytest.mark.asyncio
    async def test_store_file_os_error(self, sample_image_bytes):
        with patch("app.services.file_service.aiofiles.open", side_effect=PermissionError("denied")):
            with pytest.raises(FileStorageError):
                await self.service.store_file(sample_image_bytes, ".jpg")

    @pytest.mark.asyncio
    async def test_save_upload_stores_valid_photo(self, sample_png_bytes):
        upload = make_upload(sample_png_bytes, "foto.png", "image/png")

        stored = await self.service.save_upload(upload)

        assert stored.filename.endswith(".png")
        assert stored.filename != "foto.png"
        assert (self.storage / stored.filename).read_bytes() == sample_png_bytes

    @pytest.mark.asyncio
    async def test_save_upload_rejects_mismatched_type(self, sample_png_bytes):
        """A .png name with a non-image content type is rejected."""
        upload = make_upload(sample_png_bytes, "foto.png", "text/plain")

        with pytest.raises(ValidationError):
            await self.service.save_upload(upload)
        assert list(self.storage.iterdir()) == []

    @pytest.mark.asyncio
    async def test_save_upload_rejects_oversize_without_reported_size(self):
        upload = make_upload(b"x" * 1025, "big.jpg", "image/jpeg", report_size=False)

        with pytest.raises(ValidationError, match="melebihi"):
            await self.service.save_upload(upload)
        assert list(self.storage.iterdir()) == []

    def test_resolve_rejects_traversal(self):
        with pytest.raises(ValidationError, match="Nama file tidak valid"):
            self.service.resolve("../config.py")

    def test_resolve_rejects_null_byte(self):
        with pytest.raises(ValidationError, match="Nama file tidak valid"):
            self.service.resolve("\x00abc.jpg")

    def test_resolve_inside_upload_dir(self):
        assert self.service.resolve("produk-1-1.jpg") == self.storage.resolve() / "produk-1-1.jpg"

    # ── Cleanup ───────────────────────────────────────────────────────────

    @pytest.mark.asyncio
    async def test_delete_removes_file(self):
        target = self.storage / "produk-1-1.jpg"
        target.write_bytes(b"test content")

        await self.service.delete("produk-1-1.jpg")
        assert not target.exists()

    @pytest.mark.asyncio
    async def test_delete_nonexistent_does_not_raise(self):
        await self.service.delete("produk-0-0.jpg")

    @pytest.mark.asyncio
    async def test_delete_null_byte_name_does_not_raise(self):
        await self.service.delete("\x00abc.jpg")

    @pytest.mark.asyncio
    async def test_delete_none_is_noop(self):
        await self.service.delete(None)

    # ── Public URLs ───────────────────────────────────────────────────────

    def test_public_url(self):
        assert (
            self.service.public_url("http://test", "produk-1-1.jpg")
            == "http://test/uploads/produk-1-1.jpg"
        )

    def test_public_url_without_photo(self):
        assert self.service.public_url("http://test/", None) is None
