from fastapi import APIRouter, Request

from jpeg_files_api.schemas import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """
    Health check endpoint for monitoring API status and component readiness.

    Returns status of the API, the object store bucket and the metadata table.
    """
    file_service = request.app.state.file_service
    settings = file_service.settings

    health_status = {
        "status": "ok",
        "components": {
            "api": "ready",
            "object_store": "initializing",
            "metadata_store": "initializing",
        },
        "ready": False,
    }

    # Check bucket reachability
    try:
        file_service.s3_client.head_bucket(Bucket=settings.s3_bucket_name)
        health_status["components"]["object_store"] = "ready"
    except Exception as e:
        health_status["components"]["object_store"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    # Check table reachability
    try:
        file_service.dynamodb_client.describe_table(TableName=settings.dynamodb_table_name)
        health_status["components"]["metadata_store"] = "ready"
    except Exception as e:
        health_status["components"]["metadata_store"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    # Overall ready status
    health_status["ready"] = all(
        state == "ready" for state in health_status["components"].values()
    )

    return HealthResponse(**health_status)
