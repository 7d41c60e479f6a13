"""
Inventory API: Product Photo Storage Service
==============================================

What:  Validates, stores, serves and removes uploaded product photos.
How:   Checks extension, declared content type and size, then writes the
       bytes under UPLOAD_DIR with a server-generated name.
Who:   Called by ProductService (create/update/delete) and the /uploads route.

Upload contract:
    - One file at most, under the `foto_produk` form field
    - Extension AND declared content type must both be jpeg/jpg/png/gif
    - At most MAX_FILE_SIZE bytes (5MB by default); empty files are rejected
    - Stored as produk-<epoch-ms>-<random><ext>; the client's filename is
      never used as a path component or stored in the database

Directory Structure:
    public/uploads/
    ├── produk-1718000000000-483920174.jpg
    └── produk-1718000004211-902341118.png
"""

import logging
import secrets
import time
from pathlib import Path
from typing import NamedTuple, Optional
from urllib.parse import quote, urljoin

import aiofiles
import aiofiles.os
from fastapi import Request, UploadFile

from app.config import Settings
from app.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "foto_produk"

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}

ALLOWED_CONTENT_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
}

INVALID_TYPE_MESSAGE = "Hanya file gambar yang diperbolehkan (jpeg, jpg, png, gif)"

FILENAME_PREFIX = "produk"

# Attempts at finding an unused name before giving up
_MAX_NAME_ATTEMPTS = 5


class StoredFile(NamedTuple):
    filename: str
    path: Path
    size: int


class FileService:
    """
    Manages the product photo lifecycle.

    Lifecycle of an uploaded photo:
        1. ProductService passes the UploadFile to save_upload()
        2. Extension and content type checks (no bytes read yet)
        3. Size check against UploadFile.size when the client reported it
        4. Content is read, bounded at max_file_size + 1 bytes
        5. Size check on the bytes actually received
        6. File is written under a fresh name with exclusive-create mode
        7. The generated filename is returned and stored on the product
        8. If the database write fails afterwards, delete() removes the file
    """

    def __init__(
        self,
        upload_dir: str,
        max_file_size: int = 5 * 1024 * 1024,
        url_path: str = "/uploads",
    ):
        self.upload_dir = Path(upload_dir).resolve()
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.max_file_size = max_file_size
        self.url_path = "/" + url_path.strip("/")
        logger.info("FileService initialized with upload_dir=%s", self.upload_dir)

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileService":
        return cls(
            upload_dir=settings.upload_dir,
            max_file_size=settings.max_file_size,
            url_path=settings.upload_url_path,
        )

    # ── Validation ────────────────────────────────────────────────────────

    def validate_extension(self, filename: str) -> str:
        """
        Checks the original filename's extension against the allowed list.

        Returns: Normalized extension (lowercase with dot), reused for the
                 stored name.
        Raises:  ValidationError if the extension is not allowed.
        """
        ext = Path(filename or "").suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=INVALID_TYPE_MESSAGE,
                field=UPLOAD_FIELD,
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_content_type(self, content_type: Optional[str]) -> str:
        """
        Checks the content type declared by the client for the file part.

        Parameters such as `; charset=` are ignored.
        """
        declared = (content_type or "").split(";")[0].strip().lower()
        if declared not in ALLOWED_CONTENT_TYPES:
            raise ValidationError(
                message=INVALID_TYPE_MESSAGE,
                field=UPLOAD_FIELD,
                context={"content_type": declared, "allowed": sorted(ALLOWED_CONTENT_TYPES)},
            )
        return declared

    def validate_size(self, size: Optional[int]) -> None:
        """
        Validate file size against the configured maximum.

        Args:
            size: Byte count, or None when the client did not report one
                  (only the bytes actually read are checked in that case)

        Raises:
            ValidationError when the file is empty or too large
        """
        if size is None:
            return
        max_mb = self.max_file_size / (1024 * 1024)
        if size == 0:
            raise ValidationError(
                message="File foto kosong",
                field=UPLOAD_FIELD,
                context={"size": 0},
            )
        if size > self.max_file_size:
            raise ValidationError(
                message=f"Ukuran file melebihi batas maksimum {max_mb:g}MB",
                field=UPLOAD_FIELD,
                context={"max_size_mb": max_mb, "size": size},
            )

    # ── Storage ───────────────────────────────────────────────────────────

    def generate_filename(self, extension: str) -> str:
        """produk-<epoch milliseconds>-<random below 1e9><extension>"""
        millis = int(time.time() * 1000)
        suffix = secrets.randbelow(1_000_000_000)
        return f"{FILENAME_PREFIX}-{millis}-{suffix}{extension}"

    async def store_file(self, content: bytes, extension: str) -> StoredFile:
        """
        Write validated file content to disk.

        Opens with mode "xb" so an existing file is never overwritten; on the
        rare name collision a new name is drawn.

        Raises:
            FileStorageError if the write fails.
        """
        for _ in range(_MAX_NAME_ATTEMPTS):
            filename = self.generate_filename(extension)
            path = self.upload_dir / filename
            try:
                async with aiofiles.open(path, "xb") as f:
                    await f.write(content)
            except FileExistsError:
                continue
            except OSError as e:
                logger.error("Failed to store file at %s: %s", path, str(e))
                raise FileStorageError(
                    context={"path": str(path), "os_error": str(e)},
                ) from e

            logger.info("File stored: %s (%d bytes)", filename, len(content))
            return StoredFile(filename=filename, path=path, size=len(content))

        raise FileStorageError(context={"reason": "no free filename"})

    async def save_upload(self, upload: UploadFile) -> StoredFile:
        """
        Complete validation and storage pipeline for one uploaded photo.

        Validation order:
            1. Extension: no bytes read
            2. Declared content type: no bytes read
            3. Reported size (UploadFile.size), when present
            4. Actual size, reading at most max_file_size + 1 bytes
            5. Store
        The upload is closed in every case.
        """
        try:
            ext = self.validate_extension(upload.filename or "")
            self.validate_content_type(upload.content_type)
            self.validate_size(upload.size)

            content = await upload.read(self.max_file_size + 1)
            self.validate_size(len(content))

            return await self.store_file(content, ext)
        finally:
            await upload.close()

    def resolve(self, filename: str) -> Path:
        """
        Maps a stored filename to its path under upload_dir.

        Raises ValidationError for names that escape the directory
        (e.g. '../config.py'), contain separators, or that the OS cannot
        represent (NUL bytes, overlong names).
        """
        try:
            if "\x00" in filename:
                raise ValueError("embedded null byte")
            candidate = (self.upload_dir / filename).resolve()
        except (ValueError, OSError) as e:
            raise ValidationError(
                message="Nama file tidak valid", context={"filename": repr(filename)}
            ) from e
        if candidate.parent != self.upload_dir:
            raise ValidationError(message="Nama file tidak valid", context={"filename": filename})
        return candidate

    async def delete(self, filename: Optional[str]) -> None:
        """
        Remove a stored photo.

        When:    After a product delete or photo replacement has committed, and
                 after a failed create/update that had already written a file.
        Errors are logged and not raised: the database change has already
        happened and the caller's response does not depend on the cleanup.
        """
        if not filename:
            return
        try:
            path = self.resolve(filename)
        except ValidationError:
            logger.warning("Refusing to delete file outside upload dir: %s", filename)
            return

        try:
            await aiofiles.os.remove(path)
            logger.info("Deleted file: %s", filename)
        except FileNotFoundError:
            logger.debug("Delete: file already gone: %s", filename)
        except OSError as e:
            logger.warning("Failed to delete file %s: %s", filename, str(e))

    def public_url(self, base_url: str, filename: Optional[str]) -> Optional[str]:
        """
        Absolute URL for a stored photo, e.g.
        http://localhost:3000/uploads/produk-1718000000000-483920174.jpg

        Returns None when there is no photo.
        """
        if not filename:
            return None
        if not base_url.endswith("/"):
            base_url += "/"
        return urljoin(base_url, f"{self.url_path.lstrip('/')}/{quote(filename)}")


def get_file_service(request: Request) -> FileService:
    """FastAPI dependency: the FileService built by create_app()."""
    return request.app.state.file_service
