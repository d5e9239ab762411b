"""File upload schemas for LeaseDesk."""

import enum
from typing import Any

from pydantic import BaseModel, Field

from ..property_management.schemas import (
    PropertyAttachmentResponse,
    PropertyPhotoResponse,
)


class FileCategory(str, enum.Enum):
    """Kinds of upload, each with its own MIME allow-list and size cap."""

    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"


class StoredFile(BaseModel):
    """Location of an object written to the bucket."""

    url: str
    key: str


class UploadResponse(StoredFile):
    message: str
    attachment: PropertyAttachmentResponse | None = None
    photo: PropertyPhotoResponse | None = None


class DeleteFileRequest(BaseModel):
    file_url: str = Field(..., min_length=1, description="Public URL of the file")


class ConnectionTestResult(BaseModel):
    success: bool
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class PresignedUrlResponse(BaseModel):
    url: str
    key: str
    expires_in: int
