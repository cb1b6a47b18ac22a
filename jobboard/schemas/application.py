"""
Pydantic schemas for Application API responses.

Submission arrives as multipart form data, so there is no request schema;
the form fields are declared on the endpoint itself.
"""

from datetime import datetime
from typing import Optional

from jobboard.schemas.common import CamelModel
from jobboard.schemas.job import JobResponse


class ApplicationSubmitResponse(CamelModel):
    """Response after submitting an application."""
    message: str
    id: str
    resume_url: str


class ApplicationResponse(CamelModel):
    """Application with its job expanded; job is None when the reference dangles."""
    id: str
    job_id: str
    name: str
    email: str
    phone: str
    portfolio: Optional[str] = None
    resume_url: str
    created_at: Optional[datetime] = None
    job: Optional[JobResponse] = None
