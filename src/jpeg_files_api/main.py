from textwrap import dedent
import logging
from typing import Optional

import pydantic
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from jpeg_files_api import __version__
from jpeg_files_api.config.settings import Settings, get_settings
from jpeg_files_api.errors import (
    FileServiceError,
    handle_broad_exceptions,
    handle_file_service_error,
    handle_http_exceptions,
    handle_pydantic_validation_errors,
    handle_request_validation_errors,
)
from jpeg_files_api.routers.files import router as files_router
from jpeg_files_api.routers.health import router as health_router
from jpeg_files_api.services.file_service import FileService

# Set up logging
logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=log_level, format=LOG_FORMAT)
    logging.getLogger().setLevel(log_level)
    # botocore is chatty at DEBUG
    logging.getLogger("botocore").setLevel(max(logging.getLevelName(log_level), logging.INFO))


def create_app(settings: Optional[Settings] = None, file_service: Optional[FileService] = None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="JPEG Files API",
        summary="Store, fetch and delete JPEG files",
        version=__version__,
        description=dedent(
            """\
        Upload JPEG files, deduplicated by SHA-256 content hash.

        | Endpoint | Notes |
        | --- | --- |
        | `POST /file` | multipart field `file`; 201 when stored, 200 when identical content exists |
        | `GET /file/{id}` | metadata plus a presigned URL valid for a limited time |
        | `DELETE /file/{id}` | removes the bytes and the metadata |
        """
        ),
        docs_url="/",  # its easier to find the docs when they live on the base url
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.state.settings = settings
    logger.info("creating file service")
    app.state.file_service = file_service or FileService.from_settings(settings)

    app.include_router(files_router, tags=["files"])
    app.include_router(health_router, tags=["health"])

    app.add_exception_handler(
        exc_class_or_status_code=FileServiceError,
        handler=handle_file_service_error,
    )
    app.add_exception_handler(
        exc_class_or_status_code=RequestValidationError,
        handler=handle_request_validation_errors,
    )
    app.add_exception_handler(
        exc_class_or_status_code=StarletteHTTPException,
        handler=handle_http_exceptions,
    )
    app.add_exception_handler(
        exc_class_or_status_code=pydantic.ValidationError,
        handler=handle_pydantic_validation_errors,
    )
    app.middleware("http")(handle_broad_exceptions)

    return app


def custom_generate_unique_id(route: APIRoute):
    """
    Generate prettier `operationId`s in the OpenAPI schema.

    These become the function names in generated client SDKs.
    """
    return f"{route.tags[0]}-{route.name}"


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port)
