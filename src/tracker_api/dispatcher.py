"""
Action router: maps the `action` discriminator onto one entity handler.

Whatever happens inside a handler, the caller gets back an envelope dict,
either `{message, ...}` or `{error}`.
"""
import logging
from typing import Callable, Dict

from tracker_api.context import TrackerContext
from tracker_api.errors import ErrorKind
from tracker_api.schemas import Err, HandlerResult

logger = logging.getLogger(__name__)

Handler = Callable[[TrackerContext, Dict[str, str]], HandlerResult]

ACTION_HANDLERS: Dict[str, Handler] = {
    "add_meeting": lambda ctx, params: ctx.meetings.add(params),
    "edit_meeting": lambda ctx, params: ctx.meetings.edit(params),
    "delete_meeting": lambda ctx, params: ctx.meetings.delete(params),
    "add_action": lambda ctx, params: ctx.action_items.add(params),
    "edit_action": lambda ctx, params: ctx.action_items.edit(params),
    "delete_action": lambda ctx, params: ctx.action_items.delete(params),
    "add_status": lambda ctx, params: ctx.weekly_status.add(params),
    "edit_status": lambda ctx, params: ctx.weekly_status.edit(params),
    "delete_status": lambda ctx, params: ctx.weekly_status.delete(params),
    "upload_media": lambda ctx, params: ctx.media.upload(params),
}


def dispatch(action: str, params: Dict[str, str], context: TrackerContext) -> HandlerResult:
    """Run the handler for `action` and return its result, never raising."""
    handler = ACTION_HANDLERS.get(action)
    if handler is None:
        logger.warning(f"Rejected unknown action: {action!r}")
        return Err(kind=ErrorKind.UNKNOWN_ACTION, error=f"Unknown action: {action}")

    try:
        result = handler(context, params)
    except Exception as e:
        logger.exception(f"Handler for {action} failed: {e}")
        return Err(kind=ErrorKind.STORAGE_ERROR, error=str(e) or e.__class__.__name__)

    if isinstance(result, Err):
        logger.info(f"{action} -> {result.kind.value}: {result.error}")
    else:
        logger.info(f"{action} -> ok")
    return result


def route(action: str, params: Dict[str, str], context: TrackerContext) -> dict:
    """Dispatch and wrap the outcome in the response envelope."""
    return dispatch(action, params, context).envelope()
