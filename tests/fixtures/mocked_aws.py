"""Fixtures that fake S3 and DynamoDB with moto."""
import os

import boto3
import pytest
from moto import mock_aws

from tests.consts import (
    TEST_BUCKET_NAME,
    TEST_HASH_INDEX_NAME,
    TEST_REGION,
    TEST_TABLE_NAME,
)

# Environment variables that would redirect clients or settings away from moto
POINTING_ENV_VARS = [
    "AWS_ENDPOINT_URL",
    "AWS_PROFILE",
    "PRESIGNED_URL_INTERNAL_ENDPOINT",
    "PRESIGNED_URL_PUBLIC_ENDPOINT",
    "S3_BUCKET_NAME",
    "DYNAMODB_TABLE_NAME",
]


@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for moto."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    for name in POINTING_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def mocked_aws(aws_credentials):
    """Start moto and create the test bucket and metadata table."""
    with mock_aws():
        s3_client = boto3.client("s3", region_name=TEST_REGION)
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)

        dynamodb_client = boto3.client("dynamodb", region_name=TEST_REGION)
        dynamodb_client.create_table(
            TableName=TEST_TABLE_NAME,
            AttributeDefinitions=[
                {"AttributeName": "ID", "AttributeType": "S"},
                {"AttributeName": "Hash", "AttributeType": "S"},
            ],
            KeySchema=[{"AttributeName": "ID", "KeyType": "HASH"}],
            GlobalSecondaryIndexes=[
                {
                    "IndexName": TEST_HASH_INDEX_NAME,
                    "KeySchema": [{"AttributeName": "Hash", "KeyType": "HASH"}],
                    "Projection": {"ProjectionType": "ALL"},
                }
            ],
            BillingMode="PAY_PER_REQUEST",
        )

        yield

        # Clean up the bucket so the next test starts empty
        response = s3_client.list_objects_v2(Bucket=TEST_BUCKET_NAME)
        for obj in response.get("Contents", []):
            s3_client.delete_object(Bucket=TEST_BUCKET_NAME, Key=obj["Key"])
        s3_client.delete_bucket(Bucket=TEST_BUCKET_NAME)


def list_object_keys(bucket_name: str = TEST_BUCKET_NAME) -> list:
    """Keys currently stored in the test bucket."""
    s3_client = boto3.client("s3", region_name=TEST_REGION)
    response = s3_client.list_objects_v2(Bucket=bucket_name)
    return [obj["Key"] for obj in response.get("Contents", [])]


def scan_metadata_items(table_name: str = TEST_TABLE_NAME) -> list:
    """Raw items currently stored in the test table."""
    dynamodb_client = boto3.client("dynamodb", region_name=TEST_REGION)
    return dynamodb_client.scan(TableName=table_name).get("Items", [])
