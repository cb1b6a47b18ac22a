from datetime import datetime
from typing import Optional

from jobboard.schemas.common import CamelModel


class BlogResponse(CamelModel):
    """Schema for blog response"""
    id: str
    title: str
    content: str
    cover_image: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
