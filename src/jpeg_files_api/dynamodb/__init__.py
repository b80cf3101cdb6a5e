"""DynamoDB metadata-store operations."""
