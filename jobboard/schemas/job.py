from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from jobboard.schemas.common import CamelModel


class JobCreateRequest(BaseModel):
    """Schema for creating or replacing a job; every field is required"""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)


class JobUpdateRequest(JobCreateRequest):
    """PUT overwrites all three fields"""


class JobResponse(CamelModel):
    """Schema for job response"""
    id: str
    title: str
    description: str
    location: str
    created_at: Optional[datetime] = None
