from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field

from .common import ApiResponse, BinaryResponse, WireEnum
from .uploads import MultipartRequest, UploadField


class FilePurpose(WireEnum):
    ASSISTANTS = "assistants"
    ASSISTANTS_OUTPUT = "assistants_output"
    BATCH = "batch"
    BATCH_OUTPUT = "batch_output"
    FINE_TUNE = "fine-tune"
    FINE_TUNE_RESULTS = "fine-tune-results"
    VISION = "vision"


class FileObject(ApiResponse):
    id: str
    object: str = "file"
    bytes: int
    created_at: int
    filename: str
    purpose: FilePurpose
    status: Optional[str] = None
    status_details: Optional[str] = None


class FileListResponse(ApiResponse):
    object: str = "list"
    data: List[FileObject] = Field(default_factory=list)
    has_more: Optional[bool] = None


class FileUploadRequest(MultipartRequest):
    file_fields = ("file",)

    file: UploadField
    purpose: FilePurpose

    @classmethod
    def for_path(cls, path, purpose: Union[FilePurpose, str]) -> "FileUploadRequest":
        return cls(file=path, purpose=purpose)


class FileDeleteResponse(ApiResponse):
    id: str
    object: str = "file"
    deleted: bool


class FileContentResponse(BinaryResponse):
    pass


# Aliases matching the operation names
FileUploadResponse = FileObject
FileRetrieveResponse = FileObject
