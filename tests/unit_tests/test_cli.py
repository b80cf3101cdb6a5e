import boto3
import pytest
from click.testing import CliRunner

from jpeg_files_api.cli import cli
from jpeg_files_api.config.settings import get_settings
from tests.consts import TEST_REGION


@pytest.fixture
def cli_env(mocked_aws, monkeypatch):
    monkeypatch.setenv("S3_BUCKET_NAME", "cli-bucket")
    monkeypatch.setenv("DYNAMODB_TABLE_NAME", "cli-table")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_show_config(cli_env):
    result = CliRunner().invoke(cli, ["show-config"])

    assert result.exit_code == 0, result.output
    assert "s3_bucket_name: cli-bucket" in result.output
    assert "dynamodb_table_name: cli-table" in result.output
    assert "testing" not in result.output


def test_create_resources(cli_env):
    runner = CliRunner()

    first = runner.invoke(cli, ["create-resources"])
    second = runner.invoke(cli, ["create-resources"])

    assert first.exit_code == 0, first.output
    assert "Created bucket cli-bucket" in first.output
    assert "Created table cli-table" in first.output
    assert second.exit_code == 0, second.output
    assert "Found bucket cli-bucket" in second.output
    assert "Found table cli-table" in second.output

    buckets = boto3.client("s3", region_name=TEST_REGION).list_buckets()["Buckets"]
    assert "cli-bucket" in {bucket["Name"] for bucket in buckets}
