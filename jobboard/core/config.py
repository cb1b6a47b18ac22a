from pydantic_settings import BaseSettings
from typing import List, Union
from pydantic import field_validator
import json


STORAGE_BACKENDS = ("local", "s3", "memory")


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Job Board API"
    VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Database connection string (any SQLAlchemy URL)
    DATABASE_URL: str = "sqlite:///./jobboard.db"

    # Storage Settings
    STORAGE_BACKEND: str = "local"
    LOCAL_UPLOAD_DIR: str = "uploads"
    LOCAL_UPLOAD_URL: str = "/uploads"

    # S3-compatible media host. Credentials are never defaulted; when unset
    # boto3 falls back to its own credential chain (env, profile, IAM role).
    S3_BUCKET_NAME: str = ""
    S3_PUBLIC_BASE_URL: str = ""
    AWS_REGION: str = "us-east-1"
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""

    # Upload limits
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    UPLOAD_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = True

    # CORS Settings - can be set as JSON string in .env
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:5173"]

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from JSON string or list"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, split by comma
                return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        backend = v.strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {v!r}")
        return backend

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
