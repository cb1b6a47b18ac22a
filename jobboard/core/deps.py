"""
FastAPI dependencies wiring the upload pipelines to the configured storage.

Each upload category gets its own policy; tests swap the backend by
overriding get_storage.
"""

from fastapi import Depends

from jobboard.core.config import settings
from jobboard.core.storage import StorageBackend, get_storage
from jobboard.services.upload_pipeline import (
    IMAGE_CONTENT_TYPES,
    RESUME_CONTENT_TYPES,
    UploadPipeline,
)


def _pipeline(storage: StorageBackend, category: str, allowed_types) -> UploadPipeline:
    return UploadPipeline(
        storage,
        category,
        allowed_types=allowed_types,
        max_bytes=settings.MAX_UPLOAD_BYTES,
        timeout=settings.UPLOAD_TIMEOUT_SECONDS
    )


def get_resume_pipeline(storage: StorageBackend = Depends(get_storage)) -> UploadPipeline:
    """Resumes: PDF, DOC or DOCX only."""
    return _pipeline(storage, "resumes", RESUME_CONTENT_TYPES)


def get_blog_cover_pipeline(storage: StorageBackend = Depends(get_storage)) -> UploadPipeline:
    return _pipeline(storage, "blogs", IMAGE_CONTENT_TYPES)


def get_image_pipeline(storage: StorageBackend = Depends(get_storage)) -> UploadPipeline:
    return _pipeline(storage, "images", IMAGE_CONTENT_TYPES)
