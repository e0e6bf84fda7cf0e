from fastapi import APIRouter, Path, Request, status
from fastapi.responses import FileResponse, JSONResponse

from tracker_api.adapters.storage import LocalBlobSink
from tracker_api.context import TrackerContext
from tracker_api.schemas import ErrorEnvelope

router = APIRouter()


@router.get("/media/{file_name}", responses={404: {"model": ErrorEnvelope}})
async def get_media(
    request: Request,
    file_name: str = Path(..., description="Name of a file stored by upload_media"),
):
    """
    Serve a file stored by the local blob sink.

    Only available in local-dev mode; S3 uploads are served by S3 itself.
    """
    context: TrackerContext = request.app.state.context
    blobs = context.blobs
    if not isinstance(blobs, LocalBlobSink):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Media is not served locally in this mode"},
        )

    path = blobs.path_for(file_name)
    if not path.is_file():
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": f"File '{file_name}' not found"},
        )
    return FileResponse(path)
