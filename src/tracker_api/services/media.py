"""Media uploads: bytes go to the blob sink, metadata to the Media table."""
import base64
import binascii
import logging
from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from tracker_api.adapters.storage import BaseBlobSink
from tracker_api.database.table_store import TableStore
from tracker_api.errors import ErrorKind
from tracker_api.schemas import Err, HandlerResult, Ok
from tracker_api.services.records import storage_errors_as_results
from tracker_api.tables import MEDIA
from tracker_api.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

REQUIRED_UPLOAD_FIELDS = ("fileData", "fileName", "mimeType")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def decode_payload(payload: str) -> Optional[bytes]:
    """Decode base64 text, tolerating a `data:<mime>;base64,` prefix. None if invalid."""
    if payload.startswith("data:") and "," in payload:
        payload = payload.split(",", 1)[1]
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError):
        return None


class MediaService:
    """Stores uploaded files and records them in the Media table."""

    def __init__(
        self,
        tables: TableStore,
        blobs: BaseBlobSink,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.tables = tables
        self.blobs = blobs
        self.clock = clock

    @log_execution_time
    @storage_errors_as_results
    def upload(self, params: Dict[str, str]) -> HandlerResult:
        missing = [field for field in REQUIRED_UPLOAD_FIELDS if not params.get(field)]
        if missing:
            return Err(
                kind=ErrorKind.MISSING_UPLOAD_FIELD,
                error=f"Missing required field(s): {', '.join(missing)}"
            )

        content = decode_payload(params["fileData"])
        if content is None:
            return Err(kind=ErrorKind.MALFORMED_BODY, error="fileData is not valid base64")
        if not content:
            return Err(kind=ErrorKind.MISSING_UPLOAD_FIELD, error="Missing required field(s): fileData")

        blob = self.blobs.store(params["fileName"], content, params["mimeType"])

        row = MEDIA.build_row(
            params,
            fileName=blob.name,
            fileUrl=blob.url,
            mimeType=blob.mime_type,
            uploadedOn=self.clock().isoformat(timespec="seconds"),
        )
        with self.tables.lock(MEDIA.name):
            self.tables.ensure_table(MEDIA.name, MEDIA.header)
            self.tables.append_row(MEDIA.name, row)

        logger.info(f"Recorded upload {blob.name} -> {blob.url}")
        return Ok(
            message="File uploaded successfully",
            data={"fileName": blob.name, "fileUrl": blob.url},
        )
