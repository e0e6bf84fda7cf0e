"""Error taxonomy and the FastAPI hooks that turn failures into `{error}` bodies."""
import logging
from enum import Enum

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Every failure a request can end in. All of them are reported with HTTP 200."""

    MISSING_ACTION = "MissingAction"
    UNKNOWN_ACTION = "UnknownAction"
    MALFORMED_BODY = "MalformedBody"
    TABLE_NOT_FOUND = "TableNotFound"
    INVALID_ROW = "InvalidRow"
    MISSING_UPLOAD_FIELD = "MissingUploadField"
    STORAGE_ERROR = "StorageError"


class StorageError(Exception):
    """Raised by the table store and blob sinks when the backing service fails."""


def error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_200_OK, content={"error": message})


async def handle_broad_exceptions(request: Request, call_next):
    """Keep the `{error}` contract for anything that escapes an endpoint."""
    try:
        return await call_next(request)
    except Exception as err:
        logger.exception(f"Unhandled error for {request.method} {request.url.path}: {err}")
        return error_response(str(err) or err.__class__.__name__)
