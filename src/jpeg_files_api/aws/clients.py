"""AWS client construction for the object store and the metadata store."""
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

from jpeg_files_api.config.settings import Settings, get_settings

try:
    from mypy_boto3_dynamodb import DynamoDBClient
    from mypy_boto3_s3 import S3Client
except ImportError:
    ...

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Builds and caches boto3 clients configured from settings."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._clients: Dict[str, Any] = {}

        logger.info("Initializing AWSClientManager")
        logger.info(f"  Region: {self.settings.aws_region}")
        logger.info(f"  Endpoint: {self.settings.aws_endpoint_url or 'default'}")

    def _client_kwargs(self) -> Dict[str, Any]:
        client_kwargs: Dict[str, Any] = {"region_name": self.settings.aws_region}

        if self.settings.aws_access_key_id:
            client_kwargs["aws_access_key_id"] = self.settings.aws_access_key_id
        if self.settings.aws_secret_access_key:
            client_kwargs["aws_secret_access_key"] = self.settings.aws_secret_access_key
        if self.settings.aws_endpoint_url:
            client_kwargs["endpoint_url"] = self.settings.aws_endpoint_url

        return client_kwargs

    def get_client(self, service_name: str, config: Optional[Config] = None) -> Any:
        """Get or create an AWS service client."""
        if service_name in self._clients:
            return self._clients[service_name]

        client_kwargs = self._client_kwargs()
        if config is not None:
            client_kwargs["config"] = config

        try:
            client = boto3.client(service_name, **client_kwargs)
        except Exception as e:
            logger.error(f"Error creating {service_name} client: {str(e)}")
            raise

        self._clients[service_name] = client
        logger.debug(f"Created {service_name} client")
        return client

    def get_s3_client(self) -> "S3Client":
        """Get the S3 client, signing with SigV4 so presigned URLs carry an expiry."""
        addressing_style = "path" if self.settings.use_path_style else "auto"
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": addressing_style},
        )
        return self.get_client("s3", config=config)

    def get_dynamodb_client(self) -> "DynamoDBClient":
        """Get the DynamoDB client."""
        return self.get_client("dynamodb")
