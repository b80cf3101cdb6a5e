# cli.py
import logging

import click

from jpeg_files_api.aws.clients import AWSClientManager
from jpeg_files_api.config.settings import get_settings
from jpeg_files_api.dynamodb.metadata_table import create_table_if_missing
from jpeg_files_api.main import configure_logging
from jpeg_files_api.s3.write_objects import create_bucket_if_missing

# Configure logging
logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the JPEG Files API"""
    configure_logging(get_settings().log_level)


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    click.echo("Current Configuration:")
    for key, value in settings.get_display_dict().items():
        click.echo(f"  {key}: {value}")


@cli.command()
def create_resources():
    """Create the S3 bucket and the DynamoDB table if they do not exist"""
    settings = get_settings()
    clients = AWSClientManager(settings)

    created = create_bucket_if_missing(
        settings.s3_bucket_name,
        settings.aws_region,
        s3_client=clients.get_s3_client(),
    )
    click.echo(f"{'Created' if created else 'Found'} bucket {settings.s3_bucket_name}")

    created = create_table_if_missing(
        settings.dynamodb_table_name,
        settings.dynamodb_hash_index_name,
        dynamodb_client=clients.get_dynamodb_client(),
    )
    click.echo(
        f"{'Created' if created else 'Found'} table {settings.dynamodb_table_name} "
        f"(index {settings.dynamodb_hash_index_name})"
    )


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to settings.host)")
@click.option("--port", default=None, type=int, help="Port to listen on (defaults to settings.port)")
@click.option("--reload", is_flag=True, default=False, help="Reload on code changes")
def serve(host, port, reload):
    """Run the API with uvicorn"""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port
    logger.info(f"Starting {settings.app_name} on {host}:{port}")
    uvicorn.run(
        "jpeg_files_api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
