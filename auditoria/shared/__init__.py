"""Adapters and DTOs shared by several modules."""

from auditoria.shared.file_storage import (
    FileStorage,
    FileStorageError,
    InvalidUploadError,
    LocalFileStorage,
)
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "FileStorage",
    "FileStorageError",
    "InvalidUploadError",
    "LocalFileStorage",
    "PagedResponse",
]
