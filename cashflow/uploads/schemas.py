from pydantic import BaseModel, Field

from cashflow.uploads.models import FileType, FileUpload, UploadStatus


class UploadUrlRequest(BaseModel):
    file_name: str = Field(min_length=1, max_length=255)


class UploadUrlResponse(BaseModel):
    file_id: str
    upload_url: str
    file_name: str
    original_name: str
    storage_key: str
    expires_in: int


class ConfirmUploadRequest(BaseModel):
    file_id: str = Field(min_length=1)
    file_size: int | None = Field(default=None, ge=0, le=2**63 - 1)


class FileUploadResponse(BaseModel):
    file_id: str
    original_name: str
    file_name: str
    storage_key: str
    file_type: FileType
    file_size: int | None
    status: UploadStatus
    content_type: str | None
    created_at: str
    updated_at: str

    @classmethod
    def from_upload(cls, upload: FileUpload) -> "FileUploadResponse":
        return cls(
            file_id=upload.file_id,
            original_name=upload.original_name,
            file_name=upload.file_name,
            storage_key=upload.storage_key,
            file_type=upload.file_type,
            file_size=upload.file_size,
            status=upload.status,
            content_type=upload.metadata.get("content_type"),
            created_at=upload.created_at,
            updated_at=upload.updated_at,
        )
