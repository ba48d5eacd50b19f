import json

import aiosqlite
import structlog

from cashflow.exceptions import UpstreamFetchError
from cashflow.uploads.models import FileUpload, UploadStatus

logger = structlog.get_logger()


class UploadRepository:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def _fetch(self, query: str, params: tuple) -> list[FileUpload]:
        try:
            cursor = await self._db.execute(query, params)
            rows = await cursor.fetchall()
        except aiosqlite.Error as exc:
            logger.error("upload_fetch_failed", error=str(exc))
            raise UpstreamFetchError("Failed to fetch file uploads") from exc

        try:
            return [FileUpload.from_row(dict(row)) for row in rows]
        except ValueError as exc:
            logger.error("upload_row_rejected", error=str(exc))
            raise UpstreamFetchError(f"Malformed file upload record: {exc}") from exc

    async def insert(self, upload: FileUpload) -> None:
        await self._db.execute(
            """
            INSERT INTO file_uploads (
                file_id, user_id, original_name, file_name, storage_key,
                file_type, file_size, status, metadata, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                upload.file_id,
                upload.user_id,
                upload.original_name,
                upload.file_name,
                upload.storage_key,
                upload.file_type.value,
                upload.file_size,
                upload.status.value,
                json.dumps(upload.metadata),
                upload.created_at,
                upload.updated_at,
            ),
        )

    async def get_by_id(self, user_id: str, file_id: str) -> FileUpload | None:
        uploads = await self._fetch(
            "SELECT * FROM file_uploads WHERE file_id = ? AND user_id = ?",
            (file_id, user_id),
        )
        return uploads[0] if uploads else None

    async def list_for_user(self, user_id: str) -> list[FileUpload]:
        return await self._fetch(
            "SELECT * FROM file_uploads WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (user_id,),
        )

    async def set_status(
        self,
        user_id: str,
        file_id: str,
        status: UploadStatus,
        updated_at: str,
        file_size: int | None = None,
    ) -> None:
        await self._db.execute(
            """
            UPDATE file_uploads
            SET status = ?, updated_at = ?, file_size = COALESCE(?, file_size)
            WHERE file_id = ? AND user_id = ?
            """,
            (status.value, updated_at, file_size, file_id, user_id),
        )

    async def commit(self) -> None:
        await self._db.commit()
