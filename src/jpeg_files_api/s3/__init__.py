"""S3 object-store operations."""
