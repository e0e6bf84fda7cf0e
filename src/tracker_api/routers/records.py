import base64
import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Query, Request
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from tracker_api.context import TrackerContext
from tracker_api.dispatcher import route
from tracker_api.errors import StorageError
from tracker_api.normalizer import is_json_content, normalize
from tracker_api.schemas import MessageEnvelope, NormalizedRequest
from tracker_api.services import read_table

logger = logging.getLogger(__name__)

router = APIRouter()


async def _form_fields(request: Request, max_part_size: int) -> Dict[str, List[str]]:
    """Collect every form field as a list of strings; file parts become base64 text."""
    form = await request.form(max_part_size=max_part_size)
    fields: Dict[str, List[str]] = {}
    for key in form.keys():
        values = []
        for value in form.getlist(key):
            if isinstance(value, UploadFile):
                values.append(base64.b64encode(await value.read()).decode("ascii"))
            else:
                values.append(value)
        fields[key] = values
    return fields


@router.get("/", response_model=None)
async def read_sheet(
    request: Request,
    sheet: Optional[str] = Query(None, description="Name of the table to read, e.g. Meetings"),
):
    """
    Return every row of a table, header first.

    An unknown or empty table reads as an empty list.
    """
    context: TrackerContext = request.app.state.context
    if not sheet:
        return {"error": "Missing sheet parameter"}
    try:
        return await run_in_threadpool(read_table, context.tables, sheet)
    except StorageError as e:
        logger.error(f"Failed to read table {sheet}: {e}")
        return {"error": str(e)}


@router.post("/", response_model=None, responses={200: {"model": MessageEnvelope}})
async def post_action(request: Request):
    """
    Run one action against the record tables.

    The body is either JSON `{"action": ..., ...fields}` or form/multipart
    fields including `action`. Failures come back as `{"error": ...}` with
    status 200.
    """
    context: TrackerContext = request.app.state.context
    content_type = request.headers.get("content-type")

    if is_json_content(content_type):
        normalized = normalize(content_type, body=await request.body())
    else:
        try:
            fields = await _form_fields(request, context.settings.max_upload_bytes)
        except Exception as e:
            logger.warning(f"Could not parse form body: {e}")
            return {"error": f"Invalid form body: {e}"}
        normalized = normalize(content_type, fields=fields)

    if not isinstance(normalized, NormalizedRequest):
        return normalized.envelope()

    logger.info(f"Dispatching action {normalized.action}")
    return await run_in_threadpool(route, normalized.action, normalized.params, context)
