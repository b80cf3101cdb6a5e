# src/jpeg_files_api/config/settings.py
from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Self


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from jpeg_files_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="jpeg-files-api",
        description="Application name"
    )

    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP server binds to"
    )

    port: int = Field(
        default=8080,
        description="Port the HTTP server listens on"
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
        alias="AWS_ENDPOINT_URL",
        description="Custom endpoint for S3 and DynamoDB, e.g. http://localstack:4566"
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="file-storage-bucket",
        description="S3 bucket holding the JPEG bytes"
    )

    s3_force_path_style: Optional[bool] = Field(
        default=None,
        description="Use path-style S3 addressing (defaults to True when an endpoint URL is set)"
    )

    # DynamoDB Configuration
    dynamodb_table_name: str = Field(
        default="file-storage-table",
        description="DynamoDB table holding file metadata"
    )

    dynamodb_hash_index_name: str = Field(
        default="HashIndex",
        description="Global secondary index on the content hash"
    )

    # Presigned URL Configuration
    presigned_url_expiry_seconds: int = Field(
        default=900,
        ge=1,
        le=604800,
        description="Lifetime of presigned GET URLs"
    )

    presigned_url_internal_endpoint: Optional[str] = Field(
        default=None,
        description="Endpoint prefix the object store signs URLs with, e.g. http://localstack:4566"
    )

    presigned_url_public_endpoint: Optional[str] = Field(
        default=None,
        description="Endpoint prefix clients can reach, e.g. http://localhost:4566"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Validate and upper-case the log level."""
        level = v.upper()
        valid_levels = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]
        if level not in valid_levels:
            raise ValueError(f"Invalid log_level: {v}. Must be one of {valid_levels}")
        return level

    @field_validator("aws_endpoint_url", "presigned_url_internal_endpoint", "presigned_url_public_endpoint")
    @classmethod
    def empty_string_is_none(cls, v: Optional[str]) -> Optional[str]:
        # docker-compose passes unset variables through as ""
        return v or None

    @model_validator(mode="after")
    def check_presign_rewrite_is_paired(self) -> Self:
        internal = self.presigned_url_internal_endpoint
        public = self.presigned_url_public_endpoint
        if bool(internal) != bool(public):
            raise ValueError(
                "presigned_url_internal_endpoint and presigned_url_public_endpoint must be set together"
            )
        return self

    @property
    def use_path_style(self) -> bool:
        """Whether S3 requests use path-style addressing."""
        if self.s3_force_path_style is not None:
            return self.s3_force_path_style
        return self.aws_endpoint_url is not None

    @property
    def presign_rewrite_rule(self) -> Optional[tuple]:
        """(internal, public) prefix pair applied to presigned URLs, or None."""
        if self.presigned_url_internal_endpoint and self.presigned_url_public_endpoint:
            return (self.presigned_url_internal_endpoint, self.presigned_url_public_endpoint)
        return None

    def get_display_dict(self) -> Dict[str, Any]:
        """Get configuration as a dictionary with credentials masked."""
        return {
            "app_name": self.app_name,
            "host": self.host,
            "port": self.port,
            "aws_region": self.aws_region,
            "aws_endpoint_url": self.aws_endpoint_url,
            "aws_access_key_id": "****" if self.aws_access_key_id else None,
            "aws_secret_access_key": "****" if self.aws_secret_access_key else None,
            "s3_bucket_name": self.s3_bucket_name,
            "s3_path_style": self.use_path_style,
            "dynamodb_table_name": self.dynamodb_table_name,
            "dynamodb_hash_index_name": self.dynamodb_hash_index_name,
            "presigned_url_expiry_seconds": self.presigned_url_expiry_seconds,
            "presigned_url_internal_endpoint": self.presigned_url_internal_endpoint,
            "presigned_url_public_endpoint": self.presigned_url_public_endpoint,
            "log_level": self.log_level,
        }

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
