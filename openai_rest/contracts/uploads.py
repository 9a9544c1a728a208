from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, field_validator

from ..errors import SerializationError
from .common import RequestModel


class FileUpload(BaseModel):
    """In-memory file part for a multipart request."""
    model_config = ConfigDict(frozen=True)

    filename: str
    content: bytes
    content_type: Optional[str] = None

    @classmethod
    def from_path(cls, path: Union[str, Path], content_type: Optional[str] = None) -> "FileUpload":
        p = Path(path)
        try:
            data = p.read_bytes()
        except OSError as e:
            raise SerializationError(f"cannot read upload file {p}: {e}") from e
        return cls(filename=p.name, content=data, content_type=content_type or mimetypes.guess_type(p.name)[0])

    def as_httpx(self) -> Tuple[str, bytes, str]:
        return (self.filename, self.content, self.content_type or "application/octet-stream")


UploadField = Union[FileUpload, Path]


def coerce_upload(value: Any) -> Any:
    # Paths are kept as-is and read when the request is sent
    if isinstance(value, (FileUpload, Path)):
        return value
    if isinstance(value, str):
        return Path(value)
    if isinstance(value, (bytes, bytearray)):
        return FileUpload(filename="upload.bin", content=bytes(value))
    return value


class MultipartRequest(RequestModel):
    """Request sent as multipart/form-data.

    Subclasses list their file-valued fields in ``file_fields``; every other
    non-None field is sent as a form field.
    """
    file_fields: ClassVar[Tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_files(cls, v, info):
        if info.field_name in cls.file_fields:
            return coerce_upload(v)
        return v

    def resolve_uploads(self) -> Dict[str, FileUpload]:
        out: Dict[str, FileUpload] = {}
        for name in self.file_fields:
            value = getattr(self, name, None)
            if value is None:
                continue
            out[name] = value if isinstance(value, FileUpload) else FileUpload.from_path(value)
        return out

    def form_fields(self) -> Dict[str, Union[str, List[str]]]:
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude=set(self.file_fields))
        fields: Dict[str, Union[str, List[str]]] = {}
        for key, value in data.items():
            if isinstance(value, list):
                # repeated keys, e.g. timestamp_granularities[]
                fields[f"{key}[]"] = [_form_value(v) for v in value]
            else:
                fields[key] = _form_value(value)
        return fields

    def to_multipart(self, uploads: Optional[Dict[str, FileUpload]] = None):
        """Return ``(data, files)`` for ``httpx`` from already-resolved uploads."""
        uploads = self.resolve_uploads() if uploads is None else uploads
        files = {name: up.as_httpx() for name, up in uploads.items()}
        return self.form_fields(), files


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
