"""
Upload pipeline: request file -> storage backend -> durable reference.

The pipeline reads the uploaded file into memory once, validates it against
the category's policy, hands the same buffer to the storage backend in a
worker thread under a deadline, and returns the StoredFile. It never writes
database records; callers persist the reference and call discard() if they
cannot.

Flow:
1. Read the buffer (reject empty files)
2. Enforce content-type allow-list and MAX_UPLOAD_BYTES
3. storage.store() in a worker thread, bounded by UPLOAD_TIMEOUT_SECONDS
4. If the client went away meanwhile, delete the object and fail
"""

import asyncio
import functools
import logging
from typing import FrozenSet, Optional

from fastapi import Request, UploadFile

from jobboard.core.exceptions import UploadError, ValidationError
from jobboard.core.storage import StorageBackend, StoredFile

logger = logging.getLogger(__name__)

# Resumes are documents only (PDF, DOC, DOCX)
RESUME_CONTENT_TYPES = frozenset({
    "application/pdf",
    "application/msword",  # .doc
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",  # .docx
})

IMAGE_CONTENT_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
})


class UploadPipeline:
    """Uploads one category of files (resumes, blogs, images) to a storage backend."""

    def __init__(
        self,
        storage: StorageBackend,
        category: str,
        allowed_types: Optional[FrozenSet[str]] = None,
        max_bytes: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        self.storage = storage
        self.category = category
        self.allowed_types = allowed_types
        self.max_bytes = max_bytes
        self.timeout = timeout

    def validate(self, data: bytes, filename: Optional[str], content_type: Optional[str]) -> None:
        if not data:
            raise ValidationError("Uploaded file is empty", {"filename": filename})

        if self.allowed_types is not None and content_type not in self.allowed_types:
            raise ValidationError(
                f"Unsupported file type for {self.category}: {content_type}",
                {"content_type": content_type, "allowed": sorted(self.allowed_types)}
            )

        if self.max_bytes is not None and len(data) > self.max_bytes:
            raise ValidationError(
                f"File exceeds the {self.max_bytes} byte limit",
                {"size": len(data), "max_bytes": self.max_bytes}
            )

    async def run(self, file: UploadFile, request: Optional[Request] = None) -> StoredFile:
        """
        Upload file to the storage backend and return its reference.

        Raises:
            ValidationError: empty file, disallowed type, or too large
            UploadError: backend failure, timeout, or client disconnect
        """
        data = await file.read()
        filename = file.filename
        content_type = file.content_type
        self.validate(data, filename, content_type)

        try:
            loop = asyncio.get_running_loop()
            stored = await asyncio.wait_for(
                loop.run_in_executor(
                    None,
                    functools.partial(self.storage.store, data, self.category, filename, content_type)
                ),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            # The worker thread may still finish; that object is orphaned
            logger.warning(f"Upload of {filename} to {self.category} timed out after {self.timeout}s")
            raise UploadError(
                f"Upload timed out after {self.timeout}s",
                {"category": self.category, "filename": filename}
            ) from e
        except Exception as e:
            raise UploadError(
                f"Failed to upload file to {self.storage.name} storage",
                {"category": self.category, "filename": filename, "cause": str(e)}
            ) from e

        logger.info(f"Stored {filename} ({stored.size} bytes) as {stored.public_id}")

        if request is not None and await request.is_disconnected():
            await loop.run_in_executor(None, self.discard, stored)
            raise UploadError(
                "Client disconnected during upload",
                {"category": self.category, "filename": filename}
            )

        return stored

    def discard(self, stored: StoredFile) -> None:
        """Delete an upload whose owning record could not be written."""
        try:
            self.storage.delete(stored.public_id)
            logger.info(f"Discarded orphaned upload {stored.public_id}")
        except Exception as cleanup_error:
            logger.error(f"Failed to clean up orphaned upload {stored.public_id}: {cleanup_error}")
