from datetime import datetime
from typing import Optional

from jobboard.schemas.common import CamelModel


class ImageResponse(CamelModel):
    id: str
    image_path: str
    upload_date: datetime
    image_type: Optional[str] = None
    public_id: Optional[str] = None


class ImageUploadResponse(CamelModel):
    success: bool = True
    message: str
    image_path: str
    image: ImageResponse


class LatestImageResponse(CamelModel):
    success: bool = True
    image_path: str
    image: ImageResponse
