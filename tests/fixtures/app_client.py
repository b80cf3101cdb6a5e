"""Fixtures that build the application against the mocked stores."""
import pytest
from fastapi.testclient import TestClient

from jpeg_files_api.config.settings import Settings
from jpeg_files_api.main import create_app
from jpeg_files_api.services.file_service import FileService
from tests.consts import (
    TEST_BUCKET_NAME,
    TEST_HASH_INDEX_NAME,
    TEST_REGION,
    TEST_TABLE_NAME,
)


def make_test_settings(**overrides) -> Settings:
    """Settings pointed at the moto bucket and table, ignoring any .env file."""
    values = dict(
        aws_region=TEST_REGION,
        aws_endpoint_url=None,
        s3_bucket_name=TEST_BUCKET_NAME,
        dynamodb_table_name=TEST_TABLE_NAME,
        dynamodb_hash_index_name=TEST_HASH_INDEX_NAME,
        presigned_url_internal_endpoint=None,
        presigned_url_public_endpoint=None,
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_test_settings()


@pytest.fixture
def file_service(mocked_aws, settings) -> FileService:
    return FileService.from_settings(settings)


@pytest.fixture
def client(file_service, settings) -> TestClient:
    app = create_app(settings=settings, file_service=file_service)
    with TestClient(app) as client:
        yield client
