"""
File Storage

Stores uploaded images (user avatars, organization logos) and returns the
public URL under which they are served.

Design Principles:
- Callers pick the relative path; the storage never trusts client file names
- Content type and size are checked before anything touches the disk
- ``delete`` of a missing file is a no-op
"""

import hashlib
import mimetypes
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath

import aiofiles
import aiofiles.os

from auditoria.core.config import StorageConfig
from auditoria.core.errors import InfrastructureError, ValidationError
from auditoria.core.logging import get_logger

logger = get_logger(__name__)

_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


class FileStorageError(InfrastructureError):
    default_code = "FILE_STORAGE_ERROR"


class InvalidUploadError(ValidationError):
    default_code = "INVALID_UPLOAD"


class FileStorage(ABC):
    """Port used by the upload use cases."""

    @abstractmethod
    async def save(self, path: str, content: bytes) -> str:
        """Write ``content`` at ``path`` and return its public URL."""

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Remove the file at ``path`` if it exists."""

    @abstractmethod
    def path_for_url(self, url: str) -> str | None:
        """Relative storage path for a URL this storage produced, else None."""


class LocalFileStorage(FileStorage):
    """Filesystem storage rooted at ``StorageConfig.upload_dir``."""

    def __init__(self, config: StorageConfig):
        self.config = config
        self.root = Path(config.upload_dir).resolve()
        self.base_url = config.public_base_url.rstrip("/")

    @classmethod
    def build_path(cls, folder: str, owner_id: object, content: bytes, content_type: str) -> str:
        """
        Relative path ``<folder>/<owner>_<digest><ext>``.

        The digest keeps a re-uploaded image at a new URL so caches never serve
        the old one.
        """
        digest = hashlib.sha256(content).hexdigest()[:16]
        extension = _EXTENSIONS.get(content_type) or mimetypes.guess_extension(content_type) or ""
        return f"{folder}/{owner_id}_{digest}{extension}"

    def validate_upload(self, content: bytes, content_type: str | None) -> None:
        if not content:
            raise InvalidUploadError("El archivo está vacío", field="file")
        if content_type not in self.config.allowed_content_types:
            raise InvalidUploadError(
                f"Tipo de archivo no permitido: {content_type}", field="file"
            )
        if len(content) > self.config.max_upload_bytes:
            raise InvalidUploadError(
                f"El archivo excede el tamaño máximo de {self.config.max_upload_bytes} bytes",
                field="file",
            )

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise FileStorageError(f"Invalid storage path: {path}")
        return self.root.joinpath(*relative.parts)

    async def save(self, path: str, content: bytes) -> str:
        target = self._resolve(path)
        try:
            await aiofiles.os.makedirs(target.parent, exist_ok=True)
            async with aiofiles.open(target, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.exception("Failed to store file", path=path, error=str(e))
            raise FileStorageError(f"Failed to store file {path}", cause=e) from e

        logger.info("File stored", path=path, size=len(content))
        return f"{self.base_url}/{path}"

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await aiofiles.os.remove(target)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.exception("Failed to delete file", path=path, error=str(e))
            raise FileStorageError(f"Failed to delete file {path}", cause=e) from e
        logger.info("File deleted", path=path)

    def path_for_url(self, url: str) -> str | None:
        prefix = f"{self.base_url}/"
        if not url or not url.startswith(prefix):
            return None
        return url[len(prefix):]


__all__ = ["FileStorage", "FileStorageError", "InvalidUploadError", "LocalFileStorage"]
