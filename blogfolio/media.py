"""
Media host abstraction for Cloudinary and in-memory testing.
"""

from __future__ import annotations

import base64
import uuid
from dataclasses import dataclass, field
from typing import Protocol

import cloudinary
import cloudinary.uploader

# Every upload is cropped to fill 1200x800 with automatic quality.
UPLOAD_TRANSFORMATION = [
    {"width": 1200, "height": 800, "crop": "fill", "quality": "auto"}
]


@dataclass(frozen=True)
class UploadedImage:
    url: str
    public_id: str
    width: int
    height: int


class MediaClient(Protocol):
    """Defines the operations the API needs from the media host."""

    def upload_image(self, data: bytes, content_type: str) -> UploadedImage:
        ...

    def delete_image(self, public_id: str) -> bool:
        ...


@dataclass
class InMemoryMediaClient:
    """Test double for media host interactions."""

    base_url: str = "https://example.test/media"
    folder: str = "mern-blog-portfolio"
    stored_images: dict = field(default_factory=dict)

    def upload_image(self, data: bytes, content_type: str) -> UploadedImage:
        public_id = f"{self.folder}/{uuid.uuid4().hex}"
        self.stored_images[public_id] = (content_type, data)
        transform = UPLOAD_TRANSFORMATION[0]
        return UploadedImage(
            url=f"{self.base_url}/{public_id}",
            public_id=public_id,
            width=transform["width"],
            height=transform["height"],
        )

    def delete_image(self, public_id: str) -> bool:
        return self.stored_images.pop(public_id, None) is not None


@dataclass
class CloudinaryMediaClient:
    """
    Cloudinary-backed client. Calls are blocking; async callers should run
    them in a threadpool.
    """

    cloud_name: str
    api_key: str
    api_secret: str
    folder: str = "mern-blog-portfolio"

    def __post_init__(self):
        cloudinary.config(
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
        )

    def upload_image(self, data: bytes, content_type: str) -> UploadedImage:
        encoded = base64.b64encode(data).decode("ascii")
        result = cloudinary.uploader.upload(
            f"data:{content_type};base64,{encoded}",
            folder=self.folder,
            transformation=UPLOAD_TRANSFORMATION,
        )
        return UploadedImage(
            url=result["secure_url"],
            public_id=result["public_id"],
            width=result["width"],
            height=result["height"],
        )

    def delete_image(self, public_id: str) -> bool:
        result = cloudinary.uploader.destroy(public_id)
        return result.get("result") == "ok"
