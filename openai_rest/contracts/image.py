from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from .common import ApiResponse, RequestModel, WireEnum, WireModel
from .models import ImageModel
from .uploads import MultipartRequest, UploadField


class ImageSize(WireEnum):
    S256 = "256x256"
    S512 = "512x512"
    S1024 = "1024x1024"
    S1792_1024 = "1792x1024"
    S1024_1792 = "1024x1792"


class ImageQuality(WireEnum):
    STANDARD = "standard"
    HD = "hd"


class ImageStyle(WireEnum):
    VIVID = "vivid"
    NATURAL = "natural"


class ImageResponseFormat(WireEnum):
    URL = "url"
    B64_JSON = "b64_json"


class ImageGenerationRequest(RequestModel):
    prompt: str
    model: Optional[ImageModel] = None
    n: Optional[int] = None
    quality: Optional[ImageQuality] = None
    size: Optional[ImageSize] = None
    style: Optional[ImageStyle] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None

    @classmethod
    def for_prompt(cls, prompt: str) -> "ImageGenerationRequest":
        return cls(prompt=prompt)


class ImageEditRequest(MultipartRequest):
    file_fields = ("image", "mask")

    image: UploadField
    prompt: str
    mask: Optional[UploadField] = None
    model: Optional[ImageModel] = None
    n: Optional[int] = None
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None


class ImageVariationRequest(MultipartRequest):
    file_fields = ("image",)

    image: UploadField
    model: Optional[ImageModel] = None
    n: Optional[int] = None
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None


class ImageData(WireModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class ImageResponse(ApiResponse):
    created: int
    data: List[ImageData] = Field(default_factory=list)


# Per-endpoint names kept for callers that prefer them
ImageGenerationResponse = ImageResponse
ImageEditResponse = ImageResponse
ImageVariationResponse = ImageResponse
