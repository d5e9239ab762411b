"""File upload module for LeaseDesk.

S3 storage of images, videos and documents, optionally attached to a property.
"""

from .routers import router
from .schemas import FileCategory, StoredFile
from .storage import S3StorageService, get_storage

__all__ = [
    "router",
    "S3StorageService",
    "get_storage",
    "FileCategory",
    "StoredFile",
]
