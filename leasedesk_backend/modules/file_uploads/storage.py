"""S3 object storage for uploaded files.

Wraps a boto3 S3 client. boto3 is blocking, so every call runs in
Starlette's threadpool. The bucket is checked (and created if missing) at
startup; if that fails the first upload retries it under a lock.
"""

import asyncio
import logging
import re
import secrets
from collections.abc import Callable
from typing import Any
from uuid import UUID

import boto3
from botocore.client import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request
from starlette.concurrency import run_in_threadpool

from ...config import Settings
from ...core.exceptions import (
    ConfigurationError,
    ExternalServiceError,
    LeaseDeskException,
    ValidationError,
)
from ...core.utils import epoch_millis
from .schemas import ConnectionTestResult, FileCategory, StoredFile

logger = logging.getLogger(__name__)

SERVICE_NAME = "s3"
DEFAULT_REGION = "us-east-1"

ALLOWED_MIME_TYPES: dict[FileCategory, tuple[str, ...]] = {
    FileCategory.IMAGE: (
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
        "image/bmp",
        "image/tiff",
        "image/x-icon",
        "image/vnd.microsoft.icon",
    ),
    FileCategory.VIDEO: (
        "video/mp4",
        "video/mpeg",
        "video/quicktime",
        "video/x-msvideo",
        "video/webm",
    ),
    FileCategory.DOCUMENT: (
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ),
}

MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
    "image/tiff": "tiff",
    "image/x-icon": "ico",
    "image/vnd.microsoft.icon": "ico",
    "video/mp4": "mp4",
    "video/mpeg": "mpeg",
    "video/quicktime": "mov",
    "video/x-msvideo": "avi",
    "video/webm": "webm",
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-excel": "xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
}

_UNSAFE_NAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")
_MISSING_BUCKET_CODES = {"404", "NotFound", "NoSuchBucket"}
_ALREADY_CREATED_CODES = {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}


def validate_file_type(content_type: str, category: FileCategory) -> None:
    """Reject a MIME type outside the category's allow-list.

    Raises:
        ValidationError: If the type is not allowed
    """
    allowed = ALLOWED_MIME_TYPES[category]
    if content_type not in allowed:
        raise ValidationError(
            f"Invalid file type for {category.value}. Allowed types: {', '.join(allowed)}"
        )


def file_extension(content_type: str) -> str:
    return MIME_EXTENSIONS.get(content_type, "bin")


def build_object_key(
    category: FileCategory,
    user_id: UUID | str,
    property_id: UUID | str | None,
    original_name: str,
    extension: str,
    timestamp_ms: int | None = None,
) -> str:
    """Derive the object key for an upload.

    Files tied to a property live under ``properties/<id>``, everything else
    under ``users/<id>``. The name part is a millisecond timestamp, 16 random
    hex chars and the sanitized original name (at most 50 chars).
    """
    timestamp_ms = timestamp_ms if timestamp_ms is not None else epoch_millis()
    sanitized = _UNSAFE_NAME_CHARS.sub("_", original_name)[:50]
    file_name = f"{timestamp_ms}-{secrets.token_hex(8)}-{sanitized}"

    if property_id:
        owner = f"properties/{property_id}"
    else:
        owner = f"users/{user_id}"
    return f"{category.value.lower()}/{owner}/{file_name}.{extension}"


def object_key(file_url: str) -> str:
    """Object key of a public S3 URL.

    Raises:
        ValidationError: If the URL is not an S3 object URL
    """
    parts = file_url.split(".amazonaws.com/")
    if len(parts) != 2 or not parts[1]:
        raise ValidationError("Invalid S3 file URL")
    return parts[1]


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def _http_status(exc: ClientError) -> int | None:
    return exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")


class S3StorageService:
    """Bucket-scoped S3 client with lazy bucket bootstrap."""

    def __init__(
        self,
        region: str,
        bucket_name: str,
        access_key_id: str,
        secret_access_key: str,
        presigned_url_expiry: int = 3600,
        client_factory: Callable[..., Any] = boto3.client,
    ):
        if not bucket_name:
            raise ConfigurationError("AWS_S3_BUCKET_NAME is required")
        if not access_key_id or not secret_access_key:
            raise ConfigurationError(
                "AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY are required"
            )

        self.region = region or DEFAULT_REGION
        self.bucket_name = bucket_name
        self.presigned_url_expiry = presigned_url_expiry
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._client_factory = client_factory
        self._client = self._make_client(self.region)
        self._initialized = False
        self._init_lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, client_factory: Callable[..., Any] = boto3.client
    ) -> "S3StorageService":
        return cls(
            region=settings.aws_region,
            bucket_name=settings.aws_s3_bucket_name,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            presigned_url_expiry=settings.presigned_url_expiry_seconds,
            client_factory=client_factory,
        )

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def _make_client(self, region: str):
        return self._client_factory(
            "s3",
            region_name=region,
            aws_access_key_id=self._access_key_id,
            aws_secret_access_key=self._secret_access_key,
            config=BotoConfig(signature_version="s3v4"),
        )

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    # ----- Bucket bootstrap -----

    async def initialize(self) -> None:
        """Make sure the bucket exists and run a connection test.

        Raises:
            ExternalServiceError: If the bucket cannot be checked or created
        """
        async with self._init_lock:
            await self.ensure_bucket_exists()
            result = await self.test_connection()
            if not result.success:
                logger.warning("S3 connection test failed: %s", result.message)
            self._initialized = True
        logger.info("S3 storage initialized. Bucket: %s", self.bucket_name)

    async def ensure_initialized(self) -> None:
        """Bootstrap the bucket once, however many requests race for it."""
        if self._initialized:
            return
        async with self._init_lock:
            if self._initialized:
                return
            await self.ensure_bucket_exists()
            self._initialized = True

    async def ensure_bucket_exists(self) -> None:
        if await self.bucket_exists():
            logger.info("Bucket %s exists and is accessible", self.bucket_name)
            return
        logger.warning("Bucket %s does not exist. Creating it", self.bucket_name)
        await self.create_bucket()

    async def bucket_exists(self) -> bool:
        """Check the bucket with ``head_bucket``.

        A 301 means the bucket lives in another region: the client is
        reconnected to that region and the check retried once.

        Raises:
            ExternalServiceError: On any failure other than a missing bucket
        """
        try:
            await run_in_threadpool(self._client.head_bucket, Bucket=self.bucket_name)
            return True
        except ClientError as exc:
            status = _http_status(exc)
            code = _error_code(exc)
            if status == 301 or code in ("301", "PermanentRedirect"):
                return await self._recover_region()
            if status == 404 or code in _MISSING_BUCKET_CODES:
                return False
            raise ExternalServiceError(
                SERVICE_NAME,
                "head_bucket",
                f"Could not access bucket {self.bucket_name}: {code or exc}",
            ) from exc
        except BotoCoreError as exc:
            raise ExternalServiceError(SERVICE_NAME, "head_bucket", str(exc)) from exc

    async def _recover_region(self) -> bool:
        logger.warning(
            "Bucket %s exists in a different region than %s. Detecting region",
            self.bucket_name,
            self.region,
        )
        actual_region = await self._detect_bucket_region()
        if actual_region is None or actual_region == self.region:
            raise ExternalServiceError(
                SERVICE_NAME,
                "head_bucket",
                "Bucket exists but region mismatch detected (HTTP 301). "
                f"The bucket might be in a different region than {self.region}.",
            )

        logger.warning(
            "Region mismatch. Configured: %s, actual: %s. Reconnecting",
            self.region,
            actual_region,
        )
        self.region = actual_region
        self._client = self._make_client(actual_region)

        try:
            await run_in_threadpool(self._client.head_bucket, Bucket=self.bucket_name)
        except (ClientError, BotoCoreError) as exc:
            raise ExternalServiceError(
                SERVICE_NAME,
                "head_bucket",
                f"Bucket exists in region {actual_region}, but connection failed. "
                f"Set AWS_REGION to {actual_region}.",
            ) from exc

        logger.info("Connected to bucket in region %s", actual_region)
        return True

    async def _detect_bucket_region(self) -> str | None:
        # GetBucketLocation is answered from us-east-1 for every bucket
        client = self._make_client(DEFAULT_REGION)
        try:
            response = await run_in_threadpool(
                client.get_bucket_location, Bucket=self.bucket_name
            )
        except (ClientError, BotoCoreError) as exc:
            logger.warning("Could not determine bucket region: %s", exc)
            return None

        location = response.get("LocationConstraint")
        if not location:
            return DEFAULT_REGION
        if location == "EU":
            return "eu-west-1"
        return location

    async def create_bucket(self) -> None:
        """Create the bucket in the current region.

        Raises:
            ExternalServiceError: If creation fails for any reason other than
                the bucket already existing
        """
        params: dict[str, Any] = {"Bucket": self.bucket_name}
        if self.region != DEFAULT_REGION:
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}

        logger.info("Creating bucket %s in region %s", self.bucket_name, self.region)
        try:
            await run_in_threadpool(self._client.create_bucket, **params)
        except ClientError as exc:
            if _error_code(exc) in _ALREADY_CREATED_CODES:
                logger.info("Bucket %s already exists", self.bucket_name)
                return
            raise ExternalServiceError(
                SERVICE_NAME,
                "create_bucket",
                f"Failed to create S3 bucket: {exc}. Check AWS credentials and permissions.",
            ) from exc
        except BotoCoreError as exc:
            raise ExternalServiceError(SERVICE_NAME, "create_bucket", str(exc)) from exc
        logger.info("Created bucket %s", self.bucket_name)

    # ----- Objects -----

    async def upload_file(
        self,
        content: bytes,
        content_type: str,
        original_name: str,
        category: FileCategory,
        user_id: UUID | str,
        property_id: UUID | str | None = None,
    ) -> StoredFile:
        """Validate and store a file.

        The MIME type is checked before the bucket is touched.

        Returns:
            Public URL and key of the stored object

        Raises:
            ValidationError: If the MIME type is not allowed for the category
            ExternalServiceError: If the bucket cannot be reached or written
        """
        validate_file_type(content_type, category)
        await self.ensure_initialized()

        key = build_object_key(
            category, user_id, property_id, original_name, file_extension(content_type)
        )
        try:
            await run_in_threadpool(
                self._client.put_object,
                Bucket=self.bucket_name,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("Error uploading file to S3: %s", exc)
            raise ExternalServiceError(
                SERVICE_NAME, "put_object", "Failed to upload file to S3"
            ) from exc

        logger.info("Uploaded %s (%d bytes)", key, len(content))
        return StoredFile(url=self.public_url(key), key=key)

    async def delete_file(self, file_url: str) -> None:
        """Delete the object a public URL points to.

        Raises:
            ValidationError: If the URL is not an S3 object URL
            ExternalServiceError: If the delete fails
        """
        key = object_key(file_url)

        try:
            await run_in_threadpool(
                self._client.delete_object, Bucket=self.bucket_name, Key=key
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("Error deleting file from S3: %s", exc)
            raise ExternalServiceError(
                SERVICE_NAME, "delete_object", "Failed to delete file from S3"
            ) from exc
        logger.info("Deleted %s", key)

    async def get_presigned_url(self, key: str, expires_in: int | None = None) -> str:
        """Temporary GET URL for a private object."""
        try:
            return await run_in_threadpool(
                self._client.generate_presigned_url,
                "get_object",
                Params={"Bucket": self.bucket_name, "Key": key},
                ExpiresIn=expires_in or self.presigned_url_expiry,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("Error generating presigned URL: %s", exc)
            raise ExternalServiceError(
                SERVICE_NAME,
                "generate_presigned_url",
                "Failed to generate presigned URL",
            ) from exc

    async def test_connection(self) -> ConnectionTestResult:
        """Check credentials, bucket access and write permission.

        Lists buckets, checks the bucket, then writes and removes a small
        test object. Never raises; failures are reported in the result.
        """
        try:
            buckets = await run_in_threadpool(self._client.list_buckets)
            bucket_exists = await self.bucket_exists()

            test_key = f"test/connection-test-{epoch_millis()}.txt"
            await run_in_threadpool(
                self._client.put_object,
                Bucket=self.bucket_name,
                Key=test_key,
                Body=b"Connection test",
                ContentType="text/plain",
            )
            try:
                await run_in_threadpool(
                    self._client.delete_object, Bucket=self.bucket_name, Key=test_key
                )
            except (ClientError, BotoCoreError):
                logger.warning("Failed to clean up test file, connection test passed")
        except ClientError as exc:
            return self._failed_test(
                exc, code=_error_code(exc), status_code=_http_status(exc)
            )
        except (BotoCoreError, LeaseDeskException) as exc:
            return self._failed_test(exc)

        message = (
            f"S3 connection successful. Bucket: {self.bucket_name}, "
            f"Region: {self.region}, Bucket exists: {bucket_exists}"
        )
        logger.info(message)
        return ConnectionTestResult(
            success=True,
            message=message,
            details={
                "bucket_name": self.bucket_name,
                "region": self.region,
                "bucket_exists": bucket_exists,
                "total_buckets": len(buckets.get("Buckets") or []),
            },
        )

    def _failed_test(
        self,
        exc: Exception,
        code: str | None = None,
        status_code: int | None = None,
    ) -> ConnectionTestResult:
        message = f"S3 connection test failed: {exc}"
        logger.error(message)
        return ConnectionTestResult(
            success=False,
            message=message,
            details={
                "error": type(exc).__name__,
                "code": code,
                "status_code": status_code,
            },
        )


def get_storage(request: Request) -> S3StorageService:
    """Dependency returning the storage service created at startup."""
    return request.app.state.storage
