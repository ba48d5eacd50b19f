from fastapi import APIRouter

from cashflow.dependencies import CurrentUserId, UploadServiceDep
from cashflow.uploads.schemas import (
    ConfirmUploadRequest,
    FileUploadResponse,
    UploadUrlRequest,
    UploadUrlResponse,
)

router = APIRouter()


@router.post("/presigned-url", status_code=201, response_model=UploadUrlResponse)
async def request_upload_url(
    data: UploadUrlRequest,
    service: UploadServiceDep,
    user_id: CurrentUserId,
) -> UploadUrlResponse:
    return await service.request_upload(user_id, data.file_name)


@router.post("/confirm-upload", response_model=FileUploadResponse)
async def confirm_upload(
    data: ConfirmUploadRequest,
    service: UploadServiceDep,
    user_id: CurrentUserId,
) -> FileUploadResponse:
    return await service.confirm_upload(user_id, data.file_id, data.file_size)


@router.get("/files", response_model=list[FileUploadResponse])
async def list_files(
    service: UploadServiceDep,
    user_id: CurrentUserId,
) -> list[FileUploadResponse]:
    return await service.list_files(user_id)
