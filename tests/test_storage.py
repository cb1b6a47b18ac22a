"""
Tests for the storage backends.

S3 calls are intercepted with botocore's Stubber, so no network access or
real bucket is needed.
"""

import boto3
import pytest
from botocore.stub import Stubber
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.testclient import TestClient

from jobboard.core.storage import (
    LocalStorage,
    MemoryStorage,
    S3Storage,
    StorageError,
    build_storage,
    object_key,
)


@pytest.fixture
def s3_client():
    return boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing"
    )


class TestObjectKey:

    def test_key_has_category_and_filename(self):
        key = object_key("resumes", "cv.pdf")

        assert key.startswith("resumes/")
        assert key.endswith("_cv.pdf")

    def test_key_strips_directories(self):
        key = object_key("images", "../../etc/passwd")

        assert key.startswith("images/")
        assert ".." not in key
        assert key.endswith("_passwd")

    def test_key_without_filename(self):
        assert object_key("images", None).endswith("_upload")

    def test_key_replaces_url_reserved_characters(self):
        key = object_key("resumes", "my cv#1?v=2 (final)%.pdf")

        assert key.endswith("_my_cv_1_v_2__final__.pdf")
        assert not any(c in key for c in "#?% ()")

    def test_key_hidden_filename(self):
        key = object_key("images", ".htaccess")

        assert key.endswith("_htaccess")


class TestLocalStorage:

    def test_store_writes_file(self, tmp_path):
        storage = LocalStorage(str(tmp_path), "/uploads")

        stored = storage.store(b"hello", "resumes", "cv.pdf", "application/pdf")

        assert stored.url == f"/uploads/{stored.public_id}"
        assert (tmp_path / stored.public_id).read_bytes() == b"hello"
        assert stored.size == 5

    def test_stored_url_is_servable(self, tmp_path):
        app = FastAPI()
        app.mount("/uploads", StaticFiles(directory=str(tmp_path)), name="uploads")
        storage = LocalStorage(str(tmp_path), "/uploads")

        stored = storage.store(b"%PDF-1.4 cv", "resumes", "cv#1.pdf", "application/pdf")

        assert "#" not in stored.url
        response = TestClient(app).get(stored.url)
        assert response.status_code == 200
        assert response.content == b"%PDF-1.4 cv"

    def test_delete(self, tmp_path):
        storage = LocalStorage(str(tmp_path))
        stored = storage.store(b"hello", "images", "a.png")

        assert storage.delete(stored.public_id) is True
        assert storage.delete(stored.public_id) is False
        assert not (tmp_path / stored.public_id).exists()

    def test_check_passes_for_writable_dir(self, tmp_path):
        LocalStorage(str(tmp_path)).check()


class TestMemoryStorage:

    def test_store_and_delete(self):
        storage = MemoryStorage()

        stored = storage.store(b"data", "blogs", "cover.png", "image/png")

        assert storage.objects[stored.public_id] == (b"data", "image/png")
        assert storage.delete(stored.public_id) is True
        assert storage.objects == {}


class TestS3Storage:

    def test_store_returns_public_url(self, s3_client):
        storage = S3Storage(bucket_name="jobboard-media", client=s3_client, public_base_url="")

        with Stubber(s3_client) as stubber:
            stubber.add_response("put_object", {"ETag": '"abc123"'})
            stored = storage.store(b"%PDF-1.4", "resumes", "cv.pdf", "application/pdf")
            stubber.assert_no_pending_responses()

        assert stored.public_id.startswith("resumes/")
        assert stored.url == f"https://jobboard-media.s3.us-east-1.amazonaws.com/{stored.public_id}"

    def test_store_uses_public_base_url(self, s3_client):
        storage = S3Storage(bucket_name="jobboard-media", client=s3_client, public_base_url="https://cdn.example.com/")

        with Stubber(s3_client) as stubber:
            stubber.add_response("put_object", {"ETag": '"abc123"'})
            stored = storage.store(b"img", "images", "a.png", "image/png")

        assert stored.url == f"https://cdn.example.com/{stored.public_id}"

    def test_store_error_raises_storage_error(self, s3_client):
        storage = S3Storage(bucket_name="jobboard-media", client=s3_client)

        with Stubber(s3_client) as stubber:
            stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)
            with pytest.raises(StorageError) as exc_info:
                storage.store(b"img", "images", "a.png", "image/png")

        assert "AccessDenied" in str(exc_info.value)

    def test_delete(self, s3_client):
        storage = S3Storage(bucket_name="jobboard-media", client=s3_client)

        with Stubber(s3_client) as stubber:
            stubber.add_response(
                "delete_object", {},
                {"Bucket": "jobboard-media", "Key": "images/abc_a.png"}
            )
            assert storage.delete("images/abc_a.png") is True
            stubber.assert_no_pending_responses()

    def test_check_missing_bucket(self, s3_client):
        storage = S3Storage(bucket_name="missing-bucket", client=s3_client)

        with Stubber(s3_client) as stubber:
            stubber.add_client_error("head_bucket", service_error_code="404", http_status_code=404)
            with pytest.raises(StorageError):
                storage.check()


class TestBuildStorage:

    def test_memory_backend(self):
        assert isinstance(build_storage("memory"), MemoryStorage)

    def test_s3_requires_bucket(self, monkeypatch):
        from jobboard.core.config import settings
        monkeypatch.setattr(settings, "S3_BUCKET_NAME", "")

        with pytest.raises(ValueError, match="S3_BUCKET_NAME"):
            build_storage("s3")

    def test_local_backend(self, tmp_path, monkeypatch):
        from jobboard.core.config import settings
        monkeypatch.setattr(settings, "LOCAL_UPLOAD_DIR", str(tmp_path / "files"))

        storage = build_storage("local")

        assert isinstance(storage, LocalStorage)
        assert (tmp_path / "files").is_dir()
