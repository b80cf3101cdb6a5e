from fastapi import (
    APIRouter,
    File,
    Path,
    Request,
    Response,
    UploadFile,
    status,
)

from jpeg_files_api.schemas import FileResponse
from jpeg_files_api.services.file_service import FileService

router = APIRouter()

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"description": "Missing or malformed `file` form field"},
    status.HTTP_404_NOT_FOUND: {"description": "No file with this id"},
    status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: {"description": "Not a `.jpg`/`.jpeg` file or not JPEG content"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Object store or metadata store failure"},
}


def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


@router.post(
    "/file",
    response_model=FileResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_200_OK: {"model": FileResponse, "description": "Identical content already stored"},
        **{code: ERROR_RESPONSES[code] for code in (400, 415, 500)},
    },
)
def create_file(
    request: Request,
    response: Response,
    file: UploadFile = File(..., description="The JPEG file to upload"),
) -> FileResponse:
    """
    Upload a JPEG file.

    The bytes are hashed; if a file with the same content already exists its
    metadata is returned with status 200 and nothing new is stored. Otherwise
    the bytes and metadata are stored and 201 is returned.

    Returns:
        FileResponse: The file metadata and a presigned URL for its bytes
    """
    file_service = get_file_service(request)
    try:
        file_response, created = file_service.create_file(file.filename, file.file)
    finally:
        file.file.close()

    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return file_response


@router.get(
    "/file/{file_id}",
    response_model=FileResponse,
    responses={code: ERROR_RESPONSES[code] for code in (404, 500)},
)
def get_file(
    request: Request,
    file_id: str = Path(..., description="The id of the file"),
) -> FileResponse:
    """
    Retrieve a file's metadata with a fresh presigned URL.

    Returns:
        FileResponse: The file metadata and a presigned URL for its bytes
    """
    return get_file_service(request).get_file(file_id)


@router.delete(
    "/file/{file_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={code: ERROR_RESPONSES[code] for code in (404, 500)},
)
def delete_file(
    request: Request,
    file_id: str = Path(..., description="The id of the file"),
) -> Response:
    """
    Delete a file's bytes and metadata.
    """
    get_file_service(request).delete_file(file_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
