# src/tracker_api/config/settings.py
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

VALID_DEPLOYMENT_MODES = ["local-dev", "aws-mock", "aws-prod"]


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from tracker_api.config.settings import get_settings
        settings = get_settings()
        db_path = settings.database_path
    """

    # Application Settings
    app_name: str = Field(
        default="tracker-api",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # Blob storage
    s3_bucket_name: str = Field(
        default="tracker-media",
        description="S3 bucket holding uploaded media"
    )

    media_folder: str = Field(
        default="media",
        description="Folder (S3 key prefix or local subdirectory) that receives uploads"
    )

    storage_dir: str = Field(
        default="storage",
        description="Local storage directory used in local-dev mode"
    )

    public_base_url: str = Field(
        default="http://localhost:8000",
        description="Base URL used to build links to locally stored media"
    )

    # Table storage
    database_path: str = Field(
        default="tracker.db",
        description="SQLite file backing the record tables"
    )

    # Identifiers
    meeting_id_prefix: str = Field(
        default="BCIEINM",
        description="Prefix of generated Meeting IDs"
    )

    meeting_id_width: int = Field(
        default=3,
        ge=1,
        description="Minimum zero-padded width of the Meeting ID number"
    )

    # Uploads
    max_upload_bytes: int = Field(
        default=32 * 1024 * 1024,
        ge=1,
        description="Largest single multipart field accepted, e.g. a base64 fileData part"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("deployment_mode")
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        if v not in VALID_DEPLOYMENT_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_DEPLOYMENT_MODES}")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @model_validator(mode="after")
    def set_local_defaults(self):
        """Auto-set endpoint URL and mock credentials for the aws-mock mode."""
        if self.deployment_mode == "aws-mock":
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = "http://localhost:5000"
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        return self

    @property
    def uses_s3(self) -> bool:
        return self.deployment_mode in ["aws-mock", "aws-prod"]

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
