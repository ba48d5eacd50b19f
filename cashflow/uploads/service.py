from datetime import UTC, datetime
from uuid import uuid4

import structlog

from cashflow.exceptions import ConflictError, NotFoundError
from cashflow.transactions.models import format_timestamp
from cashflow.uploads.models import (
    CONTENT_TYPES,
    FileUpload,
    UploadStatus,
    file_type_of,
    sanitize_file_name,
    storage_key,
)
from cashflow.uploads.repository import UploadRepository
from cashflow.uploads.schemas import FileUploadResponse, UploadUrlResponse
from cashflow.uploads.storage import ObjectStorage

logger = structlog.get_logger()

UPLOAD_URL_TTL_SECONDS = 300


class UploadService:
    def __init__(
        self,
        repo: UploadRepository,
        storage: ObjectStorage,
        url_ttl_seconds: int = UPLOAD_URL_TTL_SECONDS,
    ) -> None:
        self._repo = repo
        self._storage = storage
        self._url_ttl_seconds = url_ttl_seconds

    async def request_upload(self, user_id: str, file_name: str) -> UploadUrlResponse:
        """Record a pending upload and issue a URL for the client to send the file to."""
        file_type = file_type_of(file_name)
        content_type = CONTENT_TYPES[file_type]

        now = datetime.now(UTC)
        stored_name = f"{int(now.timestamp() * 1000)}_{sanitize_file_name(file_name)}"
        key = storage_key(user_id, stored_name)

        url = await self._storage.presign_upload(
            key,
            content_type,
            {
                "original-name": file_name,
                "uploaded-by": user_id,
            },
            self._url_ttl_seconds,
        )

        timestamp = format_timestamp(now)
        upload = FileUpload(
            file_id=str(uuid4()),
            user_id=user_id,
            original_name=file_name,
            file_name=stored_name,
            storage_key=key,
            file_type=file_type,
            file_size=None,
            status=UploadStatus.pending,
            created_at=timestamp,
            updated_at=timestamp,
            metadata={"content_type": content_type},
        )
        await self._repo.insert(upload)
        await self._repo.commit()

        logger.info("upload_requested", file_id=upload.file_id, user_id=user_id, file_type=file_type)
        return UploadUrlResponse(
            file_id=upload.file_id,
            upload_url=url,
            file_name=stored_name,
            original_name=file_name,
            storage_key=key,
            expires_in=self._url_ttl_seconds,
        )

    async def confirm_upload(
        self, user_id: str, file_id: str, file_size: int | None = None
    ) -> FileUploadResponse:
        upload = await self._repo.get_by_id(user_id, file_id)
        if upload is None:
            raise NotFoundError("File upload", file_id)
        if upload.status in (UploadStatus.processed, UploadStatus.failed):
            raise ConflictError(f"File upload '{file_id}' is already {upload.status}")

        await self._repo.set_status(
            user_id,
            file_id,
            UploadStatus.uploaded,
            format_timestamp(datetime.now(UTC)),
            file_size,
        )
        await self._repo.commit()

        confirmed = await self._repo.get_by_id(user_id, file_id)
        logger.info("upload_confirmed", file_id=file_id, user_id=user_id, file_size=file_size)
        return FileUploadResponse.from_upload(confirmed)

    async def list_files(self, user_id: str) -> list[FileUploadResponse]:
        uploads = await self._repo.list_for_user(user_id)
        return [FileUploadResponse.from_upload(upload) for upload in uploads]
