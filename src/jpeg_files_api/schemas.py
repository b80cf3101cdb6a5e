####################################
# --- Request/response schemas --- #
####################################

from typing import Dict

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)


class FileMetadata(BaseModel):
    """Metadata of a stored JPEG file."""
    id: str = Field(
        description="Unique identifier of the file; also the object key prefix.",
        json_schema_extra={"example": "3f1c2a9e-8d4b-4c61-9a57-0f5e2b7d8c10"},
    )
    hash: str = Field(
        description="Lowercase hex SHA-256 digest of the file bytes.",
        json_schema_extra={"example": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"},
    )
    extension: str = Field(
        description="File extension, `.jpg` or `.jpeg`.",
        json_schema_extra={"example": ".jpg"},
    )
    created_at: str = Field(
        description="RFC 3339 creation timestamp.",
        json_schema_extra={"example": "2024-05-01T12:00:00Z"},
    )
    updated_at: str = Field(
        description="RFC 3339 update timestamp; equal to `created_at` since files are immutable.",
        json_schema_extra={"example": "2024-05-01T12:00:00Z"},
    )

    @property
    def object_key(self) -> str:
        """Key of the file bytes in the object store."""
        return self.id + self.extension


class FileResponse(BaseModel):
    """Response model for `POST /file` and `GET /file/:id`."""
    metadata: FileMetadata
    presigned_url: str = Field(description="Time-limited URL granting read access to the file bytes.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "metadata": {
                    "id": "3f1c2a9e-8d4b-4c61-9a57-0f5e2b7d8c10",
                    "hash": "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08",
                    "extension": ".jpg",
                    "created_at": "2024-05-01T12:00:00Z",
                    "updated_at": "2024-05-01T12:00:00Z",
                },
                "presigned_url": "http://localhost:4566/file-storage-bucket/3f1c2a9e-8d4b-4c61-9a57-0f5e2b7d8c10.jpg?X-Amz-Expires=900",
            }
        }
    )


class HealthResponse(BaseModel):
    """Response model for `GET /health`."""
    status: str
    components: Dict[str, str]
    ready: bool
