"""
File service for the JPEG Files API.

Orchestrates uploads, lookups and deletes across the S3 bucket holding the
bytes and the DynamoDB table holding the metadata. The two stores are
correlated only by the object key `id + extension`; writes are not
transactional, so a failure between them leaves the stores out of step.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import BinaryIO, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from jpeg_files_api.aws.clients import AWSClientManager
from jpeg_files_api.config.settings import Settings
from jpeg_files_api.dynamodb.metadata_table import (
    delete_file_metadata,
    find_file_metadata_by_hash,
    get_file_metadata,
    put_file_metadata,
)
from jpeg_files_api.errors import ErrorKind, FileServiceError
from jpeg_files_api.s3.delete_objects import delete_s3_object
from jpeg_files_api.s3.read_objects import generate_presigned_get_url
from jpeg_files_api.s3.write_objects import upload_s3_object
from jpeg_files_api.schemas import FileMetadata, FileResponse
from jpeg_files_api.utils.content import (
    JPEG_MIME_TYPE,
    SNIFF_LEN,
    calculate_sha256,
    get_extension,
    is_allowed_extension,
    sniff_content_type,
)
from jpeg_files_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

STORE_ERRORS = (BotoCoreError, ClientError, ValueError)


def utc_now_rfc3339() -> str:
    """Current UTC time as an RFC 3339 string with second precision."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


class FileService:
    """Service for storing, presigning and deleting JPEG files"""

    def __init__(self, settings: Settings, s3_client, dynamodb_client):
        self.settings = settings
        self.s3_client = s3_client
        self.dynamodb_client = dynamodb_client

    @classmethod
    def from_settings(cls, settings: Settings) -> "FileService":
        """Build the service with clients created once for its lifetime."""
        clients = AWSClientManager(settings)
        return cls(
            settings=settings,
            s3_client=clients.get_s3_client(),
            dynamodb_client=clients.get_dynamodb_client(),
        )

    # ==========================================
    # Operations
    # ==========================================

    def create_file(self, filename: Optional[str], stream: BinaryIO) -> Tuple[FileResponse, bool]:
        """
        Validate, deduplicate and store an uploaded JPEG.

        Returns the response and whether a new file was created. On a dedup hit
        the existing record is returned and nothing is written.
        """
        extension = self._validate_upload(filename or "", stream)

        try:
            stream.seek(0)
            content = stream.read()
        except OSError as e:
            raise FileServiceError(ErrorKind.INTERNAL, f"failed to read file: {e}", cause=e) from e

        file_hash = calculate_sha256(content)

        existing = self._store_call(
            "find_by_hash",
            find_file_metadata_by_hash,
            self.settings.dynamodb_table_name,
            self.settings.dynamodb_hash_index_name,
            file_hash,
            dynamodb_client=self.dynamodb_client,
        )
        if existing is not None:
            logger.info(f"Upload matches existing file {existing.id} (hash {file_hash}); skipping storage")
            presigned_url = self.generate_presigned_url(existing.object_key)
            return FileResponse(metadata=existing, presigned_url=presigned_url), False

        now = utc_now_rfc3339()
        metadata = FileMetadata(
            id=str(uuid.uuid4()),
            hash=file_hash,
            extension=extension,
            created_at=now,
            updated_at=now,
        )

        self._store_call(
            "put_object",
            upload_s3_object,
            self.settings.s3_bucket_name,
            metadata.object_key,
            content,
            content_type=JPEG_MIME_TYPE,
            s3_client=self.s3_client,
        )
        # No rollback of the object if this write fails
        self._store_call(
            "put_metadata",
            put_file_metadata,
            self.settings.dynamodb_table_name,
            metadata,
            dynamodb_client=self.dynamodb_client,
        )
        logger.info(f"Stored new file {metadata.id} ({len(content)} bytes, hash {file_hash})")

        presigned_url = self.generate_presigned_url(metadata.object_key)
        return FileResponse(metadata=metadata, presigned_url=presigned_url), True

    def get_file(self, file_id: str) -> FileResponse:
        """Look up a file's metadata and presign its bytes."""
        metadata = self._lookup_or_not_found(file_id)
        presigned_url = self.generate_presigned_url(metadata.object_key)
        return FileResponse(metadata=metadata, presigned_url=presigned_url)

    def delete_file(self, file_id: str) -> None:
        """
        Delete a file's bytes, then its metadata.

        Not transactional: if the metadata delete fails after the object is
        gone, the record survives pointing at missing bytes.
        """
        metadata = self._lookup_or_not_found(file_id)

        self._store_call(
            "delete_object",
            delete_s3_object,
            self.settings.s3_bucket_name,
            metadata.object_key,
            s3_client=self.s3_client,
        )
        logger.info(f"Deleted object {metadata.object_key}")

        self._store_call(
            "delete_metadata",
            delete_file_metadata,
            self.settings.dynamodb_table_name,
            metadata.id,
            dynamodb_client=self.dynamodb_client,
        )
        logger.info(f"Deleted metadata for file {metadata.id}")

    def generate_presigned_url(self, object_key: str) -> str:
        """Presign a GET for the object and apply the configured host rewrite."""
        url = self._store_call(
            "presign",
            generate_presigned_get_url,
            self.settings.s3_bucket_name,
            object_key,
            self.settings.presigned_url_expiry_seconds,
            s3_client=self.s3_client,
        )
        return self.rewrite_presigned_url(url)

    def rewrite_presigned_url(self, url: str) -> str:
        """Swap the internal endpoint prefix for the public one, if a rule is configured."""
        rule = self.settings.presign_rewrite_rule
        if rule is None:
            return url
        internal, public = rule
        return url.replace(internal, public, 1)

    # ==========================================
    # Helpers
    # ==========================================

    def _validate_upload(self, filename: str, stream: BinaryIO) -> str:
        """Check the extension, then sniff the leading bytes. Returns the extension."""
        extension = get_extension(filename)
        if not is_allowed_extension(extension):
            raise FileServiceError(ErrorKind.UNSUPPORTED_MEDIA, "only JPEG files are allowed")

        try:
            head = stream.read(SNIFF_LEN)
        except OSError as e:
            raise FileServiceError(ErrorKind.INTERNAL, f"failed to read file: {e}", cause=e) from e

        mime_type = sniff_content_type(head)
        if mime_type != JPEG_MIME_TYPE:
            logger.debug(f"Rejected upload {filename!r}: sniffed {mime_type}")
            raise FileServiceError(ErrorKind.UNSUPPORTED_MEDIA, "file is not a valid JPEG image")
        return extension

    def _lookup_or_not_found(self, file_id: str) -> FileMetadata:
        # A failing lookup is reported as not-found, same as a missing item
        try:
            metadata = self._store_call(
                "get_metadata",
                get_file_metadata,
                self.settings.dynamodb_table_name,
                file_id,
                dynamodb_client=self.dynamodb_client,
            )
        except FileServiceError as e:
            raise FileServiceError(ErrorKind.NOT_FOUND, e.message, cause=e.cause) from e

        if metadata is None:
            raise FileServiceError(ErrorKind.NOT_FOUND, "file not found")
        return metadata

    @staticmethod
    def _store_call(operation: str, func, *args, **kwargs):
        """Run a store call, converting client failures into INTERNAL errors."""
        timed = log_execution_time(func, operation=operation)
        try:
            return timed(*args, **kwargs)
        except STORE_ERRORS as e:
            raise FileServiceError(ErrorKind.INTERNAL, str(e), cause=e) from e
