import json
import re
from dataclasses import dataclass, field
from enum import StrEnum

from cashflow.exceptions import ValidationError


class FileType(StrEnum):
    pdf = "pdf"
    csv = "csv"


class UploadStatus(StrEnum):
    pending = "pending"
    uploaded = "uploaded"
    processed = "processed"
    failed = "failed"


CONTENT_TYPES = {
    FileType.pdf: "application/pdf",
    FileType.csv: "text/csv",
}

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def file_type_of(file_name: str) -> FileType:
    """Return the file type from the extension, or raise ValidationError."""
    stem, dot, extension = file_name.rpartition(".")
    if not dot or not stem or not extension:
        raise ValidationError("File must have an extension")
    try:
        return FileType(extension.lower())
    except ValueError:
        raise ValidationError("Only PDF and CSV files are allowed") from None


def sanitize_file_name(file_name: str) -> str:
    return _UNSAFE_CHARS.sub("_", file_name)


def storage_key(user_id: str, stored_name: str) -> str:
    return f"users/{user_id}/uploads/{stored_name}"


@dataclass(frozen=True)
class FileUpload:
    file_id: str
    user_id: str
    original_name: str
    file_name: str
    storage_key: str
    file_type: FileType
    file_size: int | None
    status: UploadStatus
    created_at: str
    updated_at: str
    metadata: dict = field(default_factory=dict)

    @classmethod
    def from_row(cls, row: dict) -> "FileUpload":
        return cls(
            file_id=row["file_id"],
            user_id=row["user_id"],
            original_name=row["original_name"],
            file_name=row["file_name"],
            storage_key=row["storage_key"],
            file_type=FileType(row["file_type"]),
            file_size=row["file_size"],
            status=UploadStatus(row["status"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            metadata=json.loads(row["metadata"] or "{}"),
        )
