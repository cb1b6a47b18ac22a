"""
File storage abstraction layer supporting local disk, AWS S3 and in-memory storage.

Every backend exposes the same capability: store a byte buffer under a
category (resumes, blogs, images) and get back a durable reference. The
backend is chosen by the STORAGE_BACKEND setting, never by the caller.
"""

import logging
import os
import re
import uuid
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Tuple

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from jobboard.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """Reference returned by a storage backend after a successful upload"""
    url: str
    public_id: str
    content_type: Optional[str] = None
    size: int = 0


class StorageError(Exception):
    """Raised by a backend when the underlying store rejects an operation"""


UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def object_key(category: str, filename: Optional[str]) -> str:
    """
    Unique key with folder structure: {category}/{uuid}_{filename}

    The filename is reduced to URL-safe characters so the key can be used
    verbatim as a URL path and as a local file path.
    """
    name = os.path.basename(filename or "")
    name = UNSAFE_KEY_CHARS.sub("_", name).lstrip(".") or "upload"
    return f"{category}/{uuid.uuid4().hex}_{name}"


class StorageBackend:
    """Abstract base class for storage backends"""

    name = "abstract"

    def store(self, data: bytes, category: str, filename: Optional[str] = None,
              content_type: Optional[str] = None) -> StoredFile:
        """Persist data and return its durable reference"""
        raise NotImplementedError

    def delete(self, public_id: str) -> bool:
        """Delete a stored object; False if it was not there"""
        raise NotImplementedError

    def check(self) -> None:
        """Raise if the backend is not usable"""
        raise NotImplementedError


class LocalStorage(StorageBackend):
    """Local filesystem storage backend, served by the app under base_url"""

    name = "local"

    def __init__(self, base_dir: str = "uploads", base_url: str = "/uploads"):
        self.base_dir = base_dir
        self.base_url = base_url.rstrip("/")
        os.makedirs(self.base_dir, exist_ok=True)

    def store(self, data: bytes, category: str, filename: Optional[str] = None,
              content_type: Optional[str] = None) -> StoredFile:
        key = object_key(category, filename)
        file_path = os.path.join(self.base_dir, *key.split("/"))
        try:
            os.makedirs(os.path.dirname(file_path), exist_ok=True)
            with open(file_path, "wb") as buffer:
                buffer.write(data)
        except OSError as e:
            raise StorageError(f"Failed to write {file_path}: {e}") from e

        return StoredFile(
            url=f"{self.base_url}/{key}",
            public_id=key,
            content_type=content_type,
            size=len(data)
        )

    def delete(self, public_id: str) -> bool:
        file_path = os.path.join(self.base_dir, *public_id.split("/"))
        if not os.path.exists(file_path):
            return False
        os.remove(file_path)
        return True

    def check(self) -> None:
        if not os.access(self.base_dir, os.W_OK):
            raise StorageError(f"Upload directory {self.base_dir} is not writable")


class MemoryStorage(StorageBackend):
    """In-process storage; objects live as long as the process does"""

    name = "memory"

    def __init__(self):
        self.objects: Dict[str, Tuple[bytes, Optional[str]]] = {}

    def store(self, data: bytes, category: str, filename: Optional[str] = None,
              content_type: Optional[str] = None) -> StoredFile:
        key = object_key(category, filename)
        self.objects[key] = (data, content_type)
        return StoredFile(url=f"memory://{key}", public_id=key, content_type=content_type, size=len(data))

    def delete(self, public_id: str) -> bool:
        return self.objects.pop(public_id, None) is not None

    def check(self) -> None:
        return None


class S3Storage(StorageBackend):
    """AWS S3 (or S3-compatible) media host backend"""

    name = "s3"

    def __init__(self, bucket_name: Optional[str] = None, client=None, public_base_url: Optional[str] = None):
        self.bucket_name = bucket_name or settings.S3_BUCKET_NAME
        self.region = settings.AWS_REGION
        self.public_base_url = (public_base_url if public_base_url is not None else settings.S3_PUBLIC_BASE_URL).rstrip("/")

        if client is not None:
            self.s3_client = client
            return

        # Single attempt per call; the upload pipeline owns the overall deadline
        client_config = Config(
            connect_timeout=settings.UPLOAD_TIMEOUT_SECONDS,
            read_timeout=settings.UPLOAD_TIMEOUT_SECONDS,
            retries={"total_max_attempts": 1}
        )

        # If AWS_ACCESS_KEY_ID is not set, boto3 will use IAM roles (for EC2/ECS)
        if settings.AWS_ACCESS_KEY_ID and settings.AWS_SECRET_ACCESS_KEY:
            self.s3_client = boto3.client(
                's3',
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=self.region,
                config=client_config
            )
        else:
            self.s3_client = boto3.client('s3', region_name=self.region, config=client_config)

    def store(self, data: bytes, category: str, filename: Optional[str] = None,
              content_type: Optional[str] = None) -> StoredFile:
        key = object_key(category, filename)
        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=key,
                Body=data,
                ContentType=content_type or "application/octet-stream",
                ServerSideEncryption="AES256"  # Enable encryption at rest
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to upload {key} to S3: {e}") from e

        return StoredFile(url=self.url_for(key), public_id=key, content_type=content_type, size=len(data))

    def delete(self, public_id: str) -> bool:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=public_id)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"Failed to delete {public_id} from S3: {e}") from e
        return True

    def check(self) -> None:
        try:
            self.s3_client.head_bucket(Bucket=self.bucket_name)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"S3 bucket {self.bucket_name} not reachable: {e}") from e

    def url_for(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"


def build_storage(backend: str) -> StorageBackend:
    """Instantiate the backend named by the STORAGE_BACKEND setting"""
    if backend == "s3":
        if not settings.S3_BUCKET_NAME:
            raise ValueError("S3_BUCKET_NAME must be set when STORAGE_BACKEND=s3")
        return S3Storage()
    if backend == "memory":
        return MemoryStorage()
    return LocalStorage(settings.LOCAL_UPLOAD_DIR, settings.LOCAL_UPLOAD_URL)


@lru_cache()
def get_storage() -> StorageBackend:
    """Process-wide storage backend; used as a FastAPI dependency"""
    storage = build_storage(settings.STORAGE_BACKEND)
    logger.info(f"Using {storage.name} storage backend")
    return storage
