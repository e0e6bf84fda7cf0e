"""
Flatten the two wire encodings of `POST /` into one parameter map.

JSON bodies carry `{action, ...fields}`; form-encoded and multipart bodies
carry every field as a list of values, of which only the first counts.
"""
import json
import logging
from typing import Any, Mapping, Optional, Sequence, Union

from tracker_api.errors import ErrorKind
from tracker_api.schemas import Err, NormalizedRequest

logger = logging.getLogger(__name__)

ACTION_FIELD = "action"


def is_json_content(content_type: Optional[str]) -> bool:
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _as_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _with_action(params: dict) -> Union[NormalizedRequest, Err]:
    action = params.pop(ACTION_FIELD, "").strip()
    if not action:
        return Err(kind=ErrorKind.MISSING_ACTION, error="Missing action parameter")
    return NormalizedRequest(action=action, params=params)


def normalize_json(body: bytes) -> Union[NormalizedRequest, Err]:
    """Decode a JSON object body into a discriminator plus string parameters."""
    try:
        payload = json.loads(body or b"{}")
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Rejected malformed JSON body: {e}")
        return Err(kind=ErrorKind.MALFORMED_BODY, error=f"Invalid JSON body: {e}")
    if not isinstance(payload, dict):
        return Err(kind=ErrorKind.MALFORMED_BODY, error="JSON body must be an object")
    return _with_action({str(key): _as_string(value) for key, value in payload.items()})


def normalize_fields(fields: Mapping[str, Sequence[str]]) -> Union[NormalizedRequest, Err]:
    """Take the first value of each multi-valued form field."""
    params = {}
    for key, values in fields.items():
        params[key] = _as_string(values[0]) if len(values) > 0 else ""
    return _with_action(params)


def normalize(
    content_type: Optional[str],
    body: bytes = b"",
    fields: Optional[Mapping[str, Sequence[str]]] = None,
) -> Union[NormalizedRequest, Err]:
    """Pick the decoder by content type."""
    if is_json_content(content_type):
        return normalize_json(body)
    return normalize_fields(fields or {})
