"""JPEG Files API: upload, fetch and delete JPEG files stored in S3 with metadata in DynamoDB."""

__version__ = "0.1.0"
